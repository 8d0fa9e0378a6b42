"""
Padded base32hex (RFC4648 section 7) encoding and decoding
"""

from typing import Union

from .alphabet import BASE32HEX
from .base_n import BaseNTransformer, BytesLike

_transformer = BaseNTransformer("base32hex", BASE32HEX)


def encode_base32hex(data: BytesLike) -> str:
    """
    Encode bytes into a padded base32hex string

    Args:
        data: Bytes to encode

    Returns:
        Base32 encoded string, upper case
    """
    return _transformer.encode(data)


def decode_base32hex(text: Union[str, BytesLike]) -> bytes:
    """
    Decode a base32hex string into bytes

    Only upper case characters are part of the alphabet.

    Args:
        text: Base32 string to decode, whitespace is ignored

    Returns:
        Decoded bytes

    Raises:
        BadValue: If the string is not canonical base32hex
    """
    return _transformer.decode(text)
