import pytest
from redwire.encoder import Encoder
from redwire.exceptions import DataError


@pytest.fixture()
def encoder():
    return Encoder("utf-8", "strict", False)


@pytest.fixture()
def decoding_encoder():
    return Encoder("utf-8", "strict", True)


def test_encode_str(encoder):
    assert encoder.encode("Hello World") == b"Hello World"


def test_encode_unicode(encoder):
    assert encoder.encode("été") == "été".encode()


def test_encode_bytes_untouched(encoder):
    value = b"\x00\xff binary"
    assert encoder.encode(value) is value


def test_encode_bytearray(encoder):
    assert encoder.encode(bytearray(b"abc")) == b"abc"


def test_encode_memoryview(encoder):
    view = memoryview(b"abc")
    assert encoder.encode(view) is view


def test_encode_int(encoder):
    assert encoder.encode(123) == b"123"
    assert encoder.encode(-42) == b"-42"


def test_encode_float(encoder):
    assert encoder.encode(1e-2) == b"0.01"
    assert encoder.encode(3.14) == b"3.14"


def test_encode_bool_refused(encoder):
    with pytest.raises(DataError, match="bool"):
        encoder.encode(True)


@pytest.mark.parametrize("value", [None, [1], {"a": 1}, object()])
def test_encode_invalid_types(encoder, value):
    with pytest.raises(DataError):
        encoder.encode(value)


def test_encode_with_errors_handler():
    encoder = Encoder("ascii", "replace", False)
    assert encoder.encode("café") == b"caf?"


def test_decode_left_alone(encoder):
    assert encoder.decode(b"hello") == b"hello"


def test_decode_forced(encoder):
    assert encoder.decode(b"hello", force=True) == "hello"


def test_decode_responses(decoding_encoder):
    assert decoding_encoder.decode(b"hello") == "hello"
    assert decoding_encoder.decode(memoryview(b"hello")) == "hello"


def test_decode_non_bytes_untouched(decoding_encoder):
    assert decoding_encoder.decode(12) == 12
