"""Fluent request assembly.

Each call returns a new ``Request``. Once a step fails, the chain keeps the
first ``Err`` and every later step (``send`` included) returns it untouched.

    result = (
        Request.new("post", "https://api.example.com/items")
        .put_auth("token", "bearer")
        .put_body({"name": "value"}, ContentKind.JSON)
        .send(transport)
    )
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

from . import body
from .config import RequestConfig
from .errors import (
    BodyPreconditionError,
    HttpClientError,
    MalformedPartsError,
)
from .types import Err, Ok, Result

if TYPE_CHECKING:
    import requests

    from .transport import HttpTransport

logger = logging.getLogger(__name__)


def format_auth(credentials: Any, scheme: str) -> Result[str, HttpClientError]:
    """Format ``credentials`` as an ``authorization`` header value."""
    scheme = scheme.lower()
    if scheme == "bearer" and isinstance(credentials, str):
        return Ok(f"Bearer {credentials}")
    if (
        scheme == "basic"
        and isinstance(credentials, (tuple, list))
        and len(credentials) == 2
    ):
        user, password = credentials
        token = base64.b64encode(f"{user}:{password}".encode()).decode("ascii")
        return Ok(f"Basic {token}")
    return Err(
        HttpClientError(f"unsupported credentials for auth scheme {scheme!r}")
    )


class Request:
    """A request under construction, or the error that stopped it."""

    def __init__(
        self, state: Result[RequestConfig, HttpClientError]
    ) -> None:
        self._state = state

    @classmethod
    def new(cls, method: str, url: str) -> Request:
        """Start a chain for an empty request to ``url``."""
        return cls(Ok(RequestConfig(method=method, url=url)))

    @property
    def result(self) -> Result[RequestConfig, HttpClientError]:
        return self._state

    @property
    def ok(self) -> bool:
        return self._state.ok

    def _then(
        self,
        step: Callable[[RequestConfig], Result[RequestConfig, HttpClientError]],
    ) -> Request:
        if not self._state.ok:
            return self
        return Request(step(self._state.value))

    def put_headers(self, headers: Mapping[str, str]) -> Request:
        """Merge ``headers`` into the request; later values win."""

        def step(config: RequestConfig) -> Result[RequestConfig, HttpClientError]:
            merged = dict(config.headers)
            merged.update({name.lower(): value for name, value in headers.items()})
            return Ok(config.update(headers=merged))

        return self._then(step)

    def put_header(self, name: str, value: str) -> Request:
        """Set a single header."""
        return self.put_headers({name: value})

    def put_auth(self, credentials: Any, scheme: str = "bearer") -> Request:
        """Attach credentials, formatted into ``authorization`` on send.

        Args:
            credentials: A token for ``bearer``, a ``(user, password)`` pair
                for ``basic``.
            scheme: ``"bearer"`` or ``"basic"``.
        """

        def step(config: RequestConfig) -> Result[RequestConfig, HttpClientError]:
            formatted = format_auth(credentials, scheme)
            if not formatted.ok:
                return formatted
            return Ok(config.update(auth=(scheme.lower(), credentials)))

        return self._then(step)

    def put_body(self, content: Any, content_kind: body.Kind) -> Request:
        """Build the body with ``body.put``."""
        return self._then(lambda config: body.put(config, content, content_kind))

    def attach_files(self, parts: Sequence[Any]) -> Request:
        """Attach file parts; only url-encoded or multipart bodies may follow."""

        def step(config: RequestConfig) -> Result[RequestConfig, HttpClientError]:
            errors = body.invalid_parts(parts, files_only=True)
            if errors:
                return Err(MalformedPartsError(errors))
            if (
                isinstance(config.body, tuple)
                and config.body[0] != body.ContentKind.URL_ENCODED.value
            ):
                return Err(BodyPreconditionError(body.FILES_ATTACHED_MESSAGE))
            existing = list(config.files or ())
            return Ok(config.update(files=existing + list(parts)))

        return self._then(step)

    def send(
        self,
        transport: HttpTransport,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Result[requests.Response, Exception]:
        """Dispatch the finished request, or return the chain's error."""
        if not self._state.ok:
            logger.debug("Not sending request: %s", self._state.error)
            return self._state
        return transport.send(self._state.value, context=context)
