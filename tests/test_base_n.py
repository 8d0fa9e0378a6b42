"""
Test cases for the generic base-N building blocks
"""

import os
import sys
import pytest

# Add the source directory to path to import pybasen without installing it
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pybasen.alphabet import Alphabet, BASE64, BASE32HEX, BASE16
from pybasen.base_n import (
    BadValue, BaseNTransformer, pad_binary, encode_groups, decode_groups,
    find_padding, normalize_text, check_padding_bits, strip_padding
)


@pytest.mark.parametrize("alphabet,bits,group_bits,group_chars,group_bytes,max_pad", [
    (BASE64, 6, 24, 4, 3, 2),
    (BASE32HEX, 5, 40, 8, 5, 6),
    (BASE16, 4, 8, 2, 1, 0),
])
def test_transformer_parameters(alphabet, bits, group_bits, group_chars, group_bytes, max_pad):
    """Group sizes follow from the least common multiple of 8 and the chunk width"""
    transformer = BaseNTransformer(alphabet.name, alphabet)
    assert transformer.bits_per_chunk == bits
    assert transformer.bits_per_group == group_bits
    assert transformer.chars_per_group == group_chars
    assert transformer.bytes_per_group == group_bytes
    assert transformer.max_padding_chars == max_pad


def test_encoded_length():
    transformer = BaseNTransformer("base64", BASE64)
    assert [transformer.encoded_length(n) for n in range(7)] == [0, 4, 4, 4, 8, 8, 8]

    transformer = BaseNTransformer("base32hex", BASE32HEX)
    assert [transformer.encoded_length(n) for n in (0, 1, 5, 6)] == [0, 8, 8, 16]


def test_alphabet_lookup():
    assert BASE64.zero_char == 'A'
    assert BASE32HEX.zero_char == '0'
    assert BASE16.zero_char == '0'

    assert BASE64.value('/') == 63
    assert len(BASE64) == 64
    assert len(BASE16) == 16
    assert BASE64.char(62) == '+'
    assert BASE32HEX.value('V') == 31
    assert BASE32HEX.value('v') is None
    assert BASE32HEX.value('W') is None
    assert BASE16.value('f') == 15
    assert BASE16.value('F') == 15
    assert BASE16.value('g') is None
    assert BASE64.value('=') is None
    assert BASE64.value('é') is None


def test_alphabet_rejects_bad_tables():
    with pytest.raises(ValueError):
        Alphabet("bad", "ABC")
    with pytest.raises(ValueError):
        Alphabet("bad", "AABC")


def test_pad_binary():
    assert pad_binary(b"", 3) == b""
    assert pad_binary(b"\x01", 3) == b"\x01\x00\x00"
    assert pad_binary(b"\x01\x02", 3) == b"\x01\x02\x00"
    assert pad_binary(b"\x01\x02\x03", 3) == b"\x01\x02\x03"
    assert pad_binary(b"\xff", 5) == b"\xff\x00\x00\x00\x00"
    assert pad_binary(b"\xff", 1) == b"\xff"


def test_encode_groups():
    assert encode_groups(b"foo", BASE64) == "Zm9v"
    assert encode_groups(b"f\x00\x00", BASE64) == "ZgAA"
    assert encode_groups(b"\x00\xff", BASE16) == "00FF"
    assert encode_groups(b"fooba", BASE32HEX) == "CPNMUOJ1"


def test_decode_groups():
    assert decode_groups("Zm9v", BASE64, "base64", "Zm9v") == bytearray(b"foo")
    assert decode_groups("ZgAA", BASE64, "base64", "Zg==") == bytearray(b"f\x00\x00")
    # Leftover bits that do not fill a byte are dropped
    assert decode_groups("QQ", BASE64, "base64", "QQ") == bytearray(b"A")
    assert decode_groups("00ff", BASE16, "base16", "00ff") == bytearray(b"\x00\xff")

    with pytest.raises(BadValue) as e:
        decode_groups("Zm*v", BASE64, "base64", "Zm*v")
    assert e.value.error_type == BadValue.ErrorType.INVALID_CHARACTER
    assert "'*'" in str(e.value)


def test_find_padding():
    assert find_padding("", 2, "base64") == (0, 0)
    assert find_padding("Zm9v", 2, "base64") == (4, 0)
    assert find_padding("Zg==", 2, "base64") == (2, 2)
    assert find_padding("Q Q= =\n", 2, "base64") == (3, 2)
    assert find_padding(" \t\n", 2, "base64") == (0, 0)
    assert find_padding("==", 2, "base64") == (0, 2)

    with pytest.raises(BadValue) as e:
        find_padding("Q===", 2, "base64")
    assert e.value.error_type == BadValue.ErrorType.TOO_MANY_PADDING

    with pytest.raises(BadValue):
        find_padding("00=", 0, "base16")


def test_normalize_text():
    assert normalize_text("Q Q==", 3, 'A') == "QQAA"
    assert normalize_text("Zm9v\r\nYg==\n", 8, 'A') == "Zm9vYgAA"
    # Padding before the boundary is left in place for the decoder to reject
    assert normalize_text("Zg==Zg==", 6, 'A') == "Zg==ZgAA"


@pytest.mark.parametrize("padchars,bits,padbytes", [
    (0, 6, 0), (1, 6, 1), (2, 6, 2),
    (0, 5, 0), (1, 5, 1), (3, 5, 2), (4, 5, 3), (6, 5, 4),
    (0, 4, 0),
])
def test_check_padding_bits(padchars, bits, padbytes):
    assert check_padding_bits(padchars, bits, "test", "") == padbytes


@pytest.mark.parametrize("padchars", [2, 5])
def test_check_padding_bits_rejects_base32hex_counts(padchars):
    """2 or 5 base32hex padding characters cannot end on a byte boundary"""
    with pytest.raises(BadValue) as e:
        check_padding_bits(padchars, 5, "base32hex", "x")
    assert e.value.error_type == BadValue.ErrorType.INVALID_PADDING


def test_strip_padding():
    assert strip_padding(bytearray(b"A\x00\x00"), 2, "base64", "QQ==") == b"A"
    assert strip_padding(bytearray(b"foo"), 0, "base64", "Zm9v") == b"foo"

    with pytest.raises(BadValue) as e:
        strip_padding(bytearray(b"A\x10\x00"), 2, "base64", "QR==")
    assert e.value.error_type == BadValue.ErrorType.NONZERO_PADDING


def test_bad_value_attributes():
    err = BadValue(BadValue.ErrorType.INVALID_PADDING, "base32hex", "CP==", "Invalid base32hex padding")
    assert isinstance(err, ValueError)
    assert err.algorithm == "base32hex"
    assert err.text == "CP=="
    assert str(err) == "invalid_padding: Invalid base32hex padding: CP=="


def test_transformer_repr():
    assert repr(BaseNTransformer("base16", BASE16)) == "BaseNTransformer('base16', bits_per_chunk=4)"
