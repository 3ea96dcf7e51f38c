"""Synchronous HTTP transport for finished RequestConfig values.

The transport is the only place that touches the network. It translates a
RequestConfig into one ``requests.Session.request`` call and normalizes the
outcome into a Result with request metadata. Status codes are not judged
here; a 404 is still an ``Ok``.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping
from urllib.parse import parse_qsl

import requests

from . import body as body_builder
from .config import HttpClientConfig, RequestConfig
from .errors import HttpClientError, RequestTimeoutError
from .mime import get_mime_type
from .request import format_auth
from .types import Err, Ok, Result

logger = logging.getLogger(__name__)


class HttpTransport:
    """Send RequestConfig values over a shared ``requests.Session``."""

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        """Create a new HttpTransport.

        Args:
            config: Default headers, user agent and timeout.
        """
        self._config = config or HttpClientConfig()
        self._session = requests.Session()
        if self._config.user_agent:
            self._session.headers["User-Agent"] = self._config.user_agent
        self._session.headers.update(self._config.default_headers)

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def _build_meta(
        self,
        request: RequestConfig,
        response: requests.Response | None,
        context: Mapping[str, Any] | None,
        final_error: str | None = None,
    ) -> dict[str, Any]:
        """Construct metadata dictionary from response and context."""
        meta: dict[str, Any] = {}
        meta["method"] = request.method
        meta["url"] = request.url
        meta["timeout_s"] = self._config.timeout_seconds
        if context:
            context_dict = dict(context)
            meta["context"] = context_dict
            for key, value in context_dict.items():
                meta.setdefault(key, value)

        if response is not None:
            meta["status_code"] = response.status_code
            meta["url"] = response.url
            meta["reason"] = response.reason
            try:
                meta["elapsed_s"] = response.elapsed.total_seconds()
            except AttributeError:
                pass
        if final_error is not None:
            meta["final_error"] = final_error

        return meta

    def _headers(
        self, request: RequestConfig, multipart: bool
    ) -> dict[str, str]:
        """Merge request headers, auth and the body content type."""
        headers = dict(request.headers)
        if request.auth is not None:
            scheme, credentials = request.auth
            formatted = format_auth(credentials, scheme)
            if formatted.ok:
                headers["authorization"] = formatted.value
        # requests generates the multipart content type and boundary.
        if isinstance(request.body, tuple) and not multipart:
            name, value = request.body[1]
            headers[name] = value
        return headers

    @staticmethod
    def _file_entry(part: tuple[Any, ...]) -> tuple[str, tuple[Any, ...]]:
        """Read a file part into a ``requests`` files entry."""
        _, path, extra, headers = part
        basename = os.path.basename(path)
        with open(path, "rb") as handle:
            content = handle.read()
        return (
            extra.get("name", basename),
            (
                extra.get("filename", basename),
                content,
                get_mime_type(path, "path"),
                dict(headers),
            ),
        )

    def _body_kwargs(self, request: RequestConfig) -> dict[str, Any]:
        """Map the request body and attached files to ``requests`` kwargs."""
        parts: list[Any] = list(request.files or ())
        data: Any = None
        if isinstance(request.body, list):
            parts = list(request.body) + parts
        elif request.body is not None:
            kind, _, payload = request.body
            data = payload
            if parts and kind == body_builder.ContentKind.URL_ENCODED.value:
                data = parse_qsl(payload, keep_blank_values=True)

        if not parts:
            return {"data": data}

        # Field parts travel as filename-less file entries so requests always
        # encodes multipart/form-data.
        files = [
            self._file_entry(part)
            if body_builder.is_file_part(part)
            else (part[0], (None, part[1]))
            for part in parts
        ]
        return {"data": data or None, "files": files}

    def send(
        self,
        request: RequestConfig,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result[requests.Response, Exception]:
        """Perform the HTTP request described by ``request``.

        Args:
            request: A fully assembled request.
            context: Optional caller context merged into the metadata.

        Returns:
            Result containing the response on success, or an error on failure.
        """
        try:
            body_kwargs = self._body_kwargs(request)
        except OSError as exc:
            return Err(
                HttpClientError(f"cannot read attached file: {exc}"),
                meta=self._build_meta(
                    request, None, context, final_error=type(exc).__name__
                ),
            )

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            response = self._session.request(
                request.method,
                request.url,
                headers=self._headers(request, "files" in body_kwargs),
                timeout=self._config.timeout_seconds,
                **body_kwargs,
            )
        except requests.exceptions.RequestException as exc:
            meta = self._build_meta(
                request,
                exc.response,
                context,
                final_error=type(exc).__name__,
            )
            if isinstance(exc, requests.exceptions.Timeout):
                return Err(RequestTimeoutError(str(exc)), meta=meta)
            return Err(HttpClientError(str(exc)), meta=meta)

        logger.info(
            "%s %s -> %s", request.method, request.url, response.status_code
        )
        return Ok(response, meta=self._build_meta(request, response, context))
