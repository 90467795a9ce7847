import pytest

from courier.networking.errors import DeserializationError
from courier.networking.response import ResponseCapture, decode_json


def test_decode_json_returns_object():
    capture = ResponseCapture(body=b'{"a": 1, "b": [true, null]}')

    assert decode_json(capture) == {"a": 1, "b": [True, None]}
    assert capture.json() == {"a": 1, "b": [True, None]}


@pytest.mark.parametrize(
    "body", [b"", b"not json", b"{\"a\": ", b"\xff\xfe\xfa"]
)
def test_decode_json_rejects_invalid_json(body):
    with pytest.raises(DeserializationError):
        decode_json(ResponseCapture(body=body))


@pytest.mark.parametrize("body", [b"[1, 2]", b'"text"', b"3", b"null"])
def test_decode_json_rejects_non_object_top_level(body):
    with pytest.raises(DeserializationError):
        decode_json(ResponseCapture(body=body))


def test_capture_defaults():
    capture = ResponseCapture(body=b"")

    assert capture.status_code == 200
    assert dict(capture.headers) == {}
