"""Request body construction.

``put`` turns a piece of content plus a declared content kind into a body on
a ``RequestConfig``. It never raises for bad input: rejections come back as
``Err`` values so the surrounding chain can stop before sending.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Sequence, Union

from .config import RequestConfig
from .encoding import encode_json, encode_query
from .errors import (
    BodyEncodingError,
    BodyError,
    BodyPreconditionError,
    MalformedPartsError,
)
from .mime import get_mime_type
from .types import Err, Ok, Result

logger = logging.getLogger(__name__)

FILE_MARKER = "file"
URL_ENCODED_MIME_TYPE = "application/x-www-form-urlencoded"

FILES_ATTACHED_MESSAGE = (
    "Body must be of type :url_encoded or :multipart when files are attached"
)

PART_GUIDANCE = """\
A valid multipart part looks like one of the following:
(name, data)
("file", filename, extra, headers)
name, data, filename: a string
extra: a mapping
headers: a list of (name, value) pairs
"""


class ContentKind(str, Enum):
    JSON = "json"
    URL_ENCODED = "url_encoded"
    MULTIPART = "multipart"


# Anything that is not a ContentKind is an extension or MIME token.
Kind = Union[ContentKind, str]


def content_header(mime_type: str) -> tuple[str, str]:
    """Return the content-type header pair for ``mime_type``."""
    return ("content-type", mime_type)


def is_field_part(part: Any) -> bool:
    """Return True for a ``(name, data)`` form field part."""
    return (
        isinstance(part, tuple)
        and len(part) == 2
        and isinstance(part[0], str)
        and isinstance(part[1], str)
    )


def is_file_part(part: Any) -> bool:
    """Return True for a ``("file", filename, extra, headers)`` part."""
    return (
        isinstance(part, tuple)
        and len(part) == 4
        and part[0] == FILE_MARKER
        and isinstance(part[1], str)
        and isinstance(part[2], Mapping)
        and isinstance(part[3], (list, tuple))
    )


def invalid_parts(
    parts: Sequence[Any], *, files_only: bool = False
) -> list[tuple[Any, str]]:
    """Return ``(part, guidance)`` for every part matching neither shape."""
    return [
        (part, PART_GUIDANCE)
        for part in parts
        if not (is_file_part(part) or (not files_only and is_field_part(part)))
    ]


def _kind(content_kind: Kind) -> Kind:
    """Map known kind values onto ContentKind; leave tokens as given."""
    try:
        return ContentKind(content_kind)
    except ValueError:
        return content_kind


def put(
    request: RequestConfig, content: Any, content_kind: Kind
) -> Result[RequestConfig, BodyError]:
    """Put ``content`` into ``request`` as a body of ``content_kind``.

    Args:
        request: The request being assembled.
        content: A string payload, or a mapping/list to be serialized.
        content_kind: ``ContentKind`` member (or its value), or an extension
            or MIME token such as ``"xml"`` or ``"text/csv"``.

    Returns:
        ``Ok`` with a new request carrying the body, or ``Err`` with a
        ``BodyError``. The given request is never modified.
    """
    kind = _kind(content_kind)
    if request.files is not None and kind not in (
        ContentKind.URL_ENCODED,
        ContentKind.MULTIPART,
    ):
        logger.warning("Rejected %s body: files are attached", kind)
        return Err(BodyPreconditionError(FILES_ATTACHED_MESSAGE))

    if kind is ContentKind.JSON:
        if not isinstance(content, str):
            encoded = encode_json(content)
            if not encoded.ok:
                logger.warning("Rejected json body: %s", encoded.error)
                return encoded
            content = encoded.value
        return _put_raw(request, content, "json", ContentKind.JSON)

    if kind is ContentKind.URL_ENCODED:
        if not isinstance(content, str):
            encoded = encode_query(content)
            if not encoded.ok:
                logger.warning("Rejected url_encoded body: %s", encoded.error)
                return encoded
            content = encoded.value
        return _put_raw(
            request, content, URL_ENCODED_MIME_TYPE, ContentKind.URL_ENCODED
        )

    if kind is ContentKind.MULTIPART:
        return _put_multipart(request, content)

    return _put_raw(request, content, kind)


def _put_multipart(
    request: RequestConfig, parts: Any
) -> Result[RequestConfig, BodyError]:
    if isinstance(parts, (str, bytes, Mapping)) or not isinstance(
        parts, Sequence
    ):
        return Err(MalformedPartsError([(parts, PART_GUIDANCE)]))

    errors = invalid_parts(parts)
    if errors:
        logger.warning("Rejected multipart body with %d bad part(s)", len(errors))
        return Err(MalformedPartsError(errors))

    logger.debug("Built multipart body with %d part(s)", len(parts))
    return Ok(request.update(body=list(parts)))


def _put_raw(
    request: RequestConfig,
    content: Any,
    token: str,
    known_kind: ContentKind | None = None,
) -> Result[RequestConfig, BodyError]:
    if not isinstance(content, str):
        return Err(
            BodyEncodingError(
                f"{token} body content must be a string, "
                f"got {type(content).__name__}"
            )
        )
    mime_type = get_mime_type(token, "ext")
    label = known_kind.value if known_kind is not None else mime_type
    logger.debug("Built %s body (%d chars)", label, len(content))
    return Ok(request.update(body=(label, content_header(mime_type), content)))
