"""
Base16 (hex) encoding and decoding

Hex never needs padding: a single byte is exactly two characters.
"""

from typing import Union

from .alphabet import BASE16
from .base_n import BaseNTransformer, BytesLike

_transformer = BaseNTransformer("base16", BASE16)


def encode_hex(data: BytesLike) -> str:
    """Encode bytes into an upper case hex string"""
    return _transformer.encode(data)


def decode_hex(text: Union[str, BytesLike]) -> bytes:
    """
    Decode a hex string into bytes, accepting either case

    Raises:
        BadValue: If the string has an odd number of digits or a non hex
            character
    """
    return _transformer.decode(text)
