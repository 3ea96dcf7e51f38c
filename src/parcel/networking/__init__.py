from .body import ContentKind, put
from .config import HttpClientConfig, RequestConfig
from .errors import (
    BodyEncodingError,
    BodyError,
    BodyPreconditionError,
    HttpClientError,
    MalformedPartsError,
    RequestTimeoutError,
)
from .mime import get_mime_type
from .request import Request
from .transport import HttpTransport
from .types import Err, Ok, Result

__all__ = [
    "BodyEncodingError",
    "BodyError",
    "BodyPreconditionError",
    "ContentKind",
    "Err",
    "HttpClientConfig",
    "HttpClientError",
    "HttpTransport",
    "MalformedPartsError",
    "Ok",
    "Request",
    "RequestConfig",
    "RequestTimeoutError",
    "Result",
    "get_mime_type",
    "put",
]
