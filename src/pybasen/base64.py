"""
Base64 encoding and decoding using the RFC4648 standard alphabet
"""

from typing import Union

from .alphabet import BASE64
from .base_n import BaseNTransformer, BytesLike

_transformer = BaseNTransformer("base64", BASE64)


def encode_base64(data: BytesLike) -> str:
    """
    Encode bytes into a padded base64 string

    Args:
        data: Bytes to encode

    Returns:
        Base64 encoded string
    """
    return _transformer.encode(data)


def decode_base64(text: Union[str, BytesLike]) -> bytes:
    """
    Decode a base64 string into bytes

    Args:
        text: Base64 string to decode, whitespace is ignored

    Returns:
        Decoded bytes

    Raises:
        BadValue: If the string is not canonical base64
    """
    return _transformer.decode(text)
