"""Configuration models for the request chain and the HttpTransport."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Sequence


def _default_headers() -> Mapping[str, str]:
    """Return immutable empty default headers mapping."""

    return MappingProxyType({})


@dataclass(frozen=True)
class HttpClientConfig:
    """Defaults applied by HttpTransport to every outgoing request."""

    user_agent: str | None = None
    default_headers: Mapping[str, str] = field(default_factory=_default_headers)
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0 when provided")

        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(
            self,
            "default_headers",
            MappingProxyType(dict(self.default_headers)),
        )


@dataclass(frozen=True)
class RequestConfig:
    """An HTTP request in the middle of being assembled.

    ``body`` is either ``None``, a ``(kind, ("content-type", mime), payload)``
    tuple, or a list of multipart parts. ``files`` is ``None`` until file
    parts are attached; its presence restricts the body kinds that may follow.
    """

    method: str = "GET"
    url: str = ""
    headers: Mapping[str, str] = field(default_factory=_default_headers)
    auth: tuple[str, Any] | None = None
    body: tuple[str, tuple[str, str], str] | list[Any] | None = None
    files: Sequence[Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(
            self,
            "headers",
            MappingProxyType(
                {name.lower(): value for name, value in self.headers.items()}
            ),
        )
        if self.files is not None:
            object.__setattr__(self, "files", tuple(self.files))

    def update(self, **changes: Any) -> RequestConfig:
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)
