import copy
import io

import pytest

from courier.networking.errors import (
    EncodingError,
    SerializationError,
    UnsupportedPayloadError,
)
from courier.networking.payload import (
    Stream,
    Structured,
    Text,
    classify,
    encode,
    is_json,
)


def test_classify_infers_variant_from_shape():
    stream = io.BytesIO(b"raw")

    assert classify("hello") == Text("hello")
    assert classify({"a": 1}) == Structured({"a": 1})
    assert classify(stream) == Stream(stream)


def test_classify_keeps_explicit_variants():
    payload = Text('{"already": "tagged"}')

    assert classify(payload) is payload


@pytest.mark.parametrize("body", [None, 42, 1.5, b"bytes", ["a", 1], object()])
def test_classify_rejects_unknown_shapes(body):
    with pytest.raises(UnsupportedPayloadError):
        classify(body)


def test_classify_rejects_text_streams():
    with pytest.raises(UnsupportedPayloadError):
        classify(io.StringIO("text, not bytes"))


def test_unsupported_payload_is_an_encoding_error():
    with pytest.raises(EncodingError):
        encode(123)


def test_encode_text_as_json_string():
    assert encode("hello").read() == b'"hello"'


def test_encode_mapping_as_json_object():
    body = {"a": 1, "nested": {"b": [1, 2]}}
    snapshot = copy.deepcopy(body)

    stream = encode(body)

    assert stream.read() == b'{"a": 1, "nested": {"b": [1, 2]}}'
    assert body == snapshot


def test_encode_explicit_structured_variant():
    assert encode(Structured({"k": "v"})).read() == b'{"k": "v"}'


def test_encode_non_ascii_text_is_utf8():
    assert encode(Text("café")).read() == b'"caf\\u00e9"'


def test_encode_passes_streams_through_untouched():
    stream = io.BytesIO(b"raw bytes")
    stream.seek(4)

    result = encode(stream)

    assert result is stream
    assert stream.tell() == 4
    assert stream.read() == b"bytes"


def test_encode_unwraps_explicit_stream_variant():
    stream = io.BytesIO(b"raw")

    assert encode(Stream(stream)) is stream


def test_encode_rejects_unserializable_nested_value():
    with pytest.raises(SerializationError):
        encode({"when": object()})


def test_encode_rejects_cyclic_mapping():
    body = {}
    body["self"] = body

    with pytest.raises(SerializationError):
        encode(body)


def test_is_json_only_for_text_and_structured():
    assert is_json(Text("x"))
    assert is_json(Structured({}))
    assert not is_json(Stream(io.BytesIO()))
