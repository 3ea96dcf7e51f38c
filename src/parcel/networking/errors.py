"""Error types carried inside ``Err`` results."""

from __future__ import annotations

from typing import Any, Sequence


class HttpClientError(Exception):
    """Base class for request construction and transport failures."""


class RequestTimeoutError(HttpClientError):
    """The transport gave up waiting for the server."""


class BodyError(HttpClientError):
    """A request body could not be built."""


class BodyPreconditionError(BodyError):
    """The requested body kind is not allowed for this request."""


class BodyEncodingError(BodyError):
    """Content could not be serialized for the requested body kind."""


class MalformedPartsError(BodyError):
    """One or more multipart parts have an invalid shape.

    ``parts`` holds every offending ``(original, guidance)`` pair in input
    order.
    """

    def __init__(self, parts: Sequence[tuple[Any, str]]) -> None:
        self.parts = list(parts)
        super().__init__(
            f"{len(self.parts)} invalid multipart part(s): "
            + ", ".join(repr(original) for original, _ in self.parts)
        )
