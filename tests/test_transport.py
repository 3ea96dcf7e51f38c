# pyright: reportUnknownParameterType=false, reportUnknownMemberType=false
# pyright: reportUnknownVariableType=false, reportMissingParameterType=false
# pyright: reportUnknownArgumentType=false
from unittest.mock import Mock, patch

import pytest
import requests

from parcel.networking.body import ContentKind
from parcel.networking.config import HttpClientConfig, RequestConfig
from parcel.networking.errors import HttpClientError, RequestTimeoutError
from parcel.networking.request import Request
from parcel.networking.transport import HttpTransport


@pytest.fixture
def config():
    return HttpClientConfig(
        user_agent="TestAgent/1.0",
        default_headers={"X-Test": "yes"},
        timeout_seconds=5.0,
    )


@pytest.fixture
def transport(config):
    return HttpTransport(config)


def _mock_response(
    *,
    content: bytes = b"",
    status: int = 200,
    url: str = "http://example.com",
    reason: str = "OK",
):
    response = Mock()
    response.content = content
    response.status_code = status
    response.url = url
    response.reason = reason
    response.elapsed.total_seconds.return_value = 0.1
    return response


def test_init_sets_user_agent_and_default_headers(transport):
    assert transport._session.headers["User-Agent"] == "TestAgent/1.0"
    assert transport._session.headers["X-Test"] == "yes"


@patch("requests.Session.request")
def test_send_get_returns_response_and_metadata(mock_request, transport):
    response = _mock_response(content=b"hello")
    mock_request.return_value = response

    result = transport.send(RequestConfig(url="http://example.com"))

    assert result.ok
    assert result.value is response
    assert result.meta["method"] == "GET"
    assert result.meta["status_code"] == 200
    assert result.meta["timeout_s"] == 5.0
    assert result.meta["elapsed_s"] == 0.1
    mock_request.assert_called_once_with(
        "GET",
        "http://example.com",
        headers={},
        timeout=5.0,
        data=None,
    )


@patch("requests.Session.request")
def test_send_json_body_sets_content_type_and_auth(mock_request, transport):
    mock_request.return_value = _mock_response(status=201)

    result = (
        Request.new("post", "http://example.com")
        .put_auth("abc", "bearer")
        .put_body({"foo": "bar"}, ContentKind.JSON)
        .send(transport)
    )

    assert result.ok
    mock_request.assert_called_once_with(
        "POST",
        "http://example.com",
        headers={
            "authorization": "Bearer abc",
            "content-type": "application/json",
        },
        timeout=5.0,
        data='{"foo":"bar"}',
    )


@patch("requests.Session.request")
def test_send_multipart_sends_every_part_as_form_data(mock_request, transport, tmp_path):
    upload = tmp_path / "notes.txt"
    upload.write_bytes(b"contents")
    mock_request.return_value = _mock_response()

    result = (
        Request.new("POST", "http://example.com")
        .put_body(
            [
                ("title", "hello"),
                ("file", str(upload), {"name": "upload"}, [("x-part", "1")]),
            ],
            ContentKind.MULTIPART,
        )
        .send(transport)
    )

    assert result.ok
    kwargs = mock_request.call_args.kwargs
    assert kwargs["data"] is None
    assert kwargs["files"] == [
        ("title", (None, "hello")),
        ("upload", ("notes.txt", b"contents", "text/plain", {"x-part": "1"})),
    ]
    assert "content-type" not in kwargs["headers"]


@patch("requests.Session.request")
def test_send_url_encoded_with_files_decodes_pairs(
    mock_request, transport, tmp_path
):
    upload = tmp_path / "a.png"
    upload.write_bytes(b"\x89PNG")
    mock_request.return_value = _mock_response()

    (
        Request.new("POST", "http://example.com")
        .attach_files([("file", str(upload), {}, [])])
        .put_body({"a": "1 2"}, ContentKind.URL_ENCODED)
        .send(transport)
    )

    kwargs = mock_request.call_args.kwargs
    assert kwargs["data"] == [("a", "1 2")]
    assert kwargs["files"] == [("a.png", ("a.png", b"\x89PNG", "image/png", {}))]
    assert "content-type" not in kwargs["headers"]


def test_send_missing_file_is_error(transport, tmp_path):
    request = RequestConfig(
        method="POST",
        url="http://example.com",
        files=[("file", str(tmp_path / "missing.bin"), {}, [])],
    )

    result = transport.send(request)

    assert not result.ok
    assert isinstance(result.error, HttpClientError)
    assert result.meta["final_error"] == "FileNotFoundError"


@patch("requests.Session.request")
def test_timeout_is_mapped(mock_request, transport):
    mock_request.side_effect = requests.exceptions.Timeout("Timed out")

    result = transport.send(RequestConfig(url="http://example.com"))

    assert not result.ok
    assert isinstance(result.error, RequestTimeoutError)
    assert result.meta["final_error"] == "Timeout"
    assert mock_request.call_count == 1


@patch("requests.Session.request")
def test_generic_request_exception_is_mapped(mock_request, transport):
    mock_request.side_effect = requests.exceptions.ConnectionError("refused")

    result = transport.send(RequestConfig(url="http://example.com"))

    assert isinstance(result.error, HttpClientError)
    assert not isinstance(result.error, RequestTimeoutError)
    assert result.meta["final_error"] == "ConnectionError"


@patch("requests.Session.request")
def test_404_is_ok_result_with_status_metadata(mock_request, transport):
    mock_request.return_value = _mock_response(
        content=b"not found", status=404, reason="Not Found"
    )

    result = transport.send(RequestConfig(url="http://example.com/missing"))

    assert result.ok
    assert result.meta["status_code"] == 404
    assert result.meta["reason"] == "Not Found"


@patch("requests.Session.request")
def test_context_cannot_override_canonical_metadata(mock_request, transport):
    mock_request.return_value = _mock_response(url="http://response.example")

    result = transport.send(
        RequestConfig(url="http://example.com"),
        context={"url": "http://context.example", "crawler": "canary"},
    )

    assert result.meta["url"] == "http://response.example"
    assert result.meta["crawler"] == "canary"
    assert result.meta["context"]["url"] == "http://context.example"
