"""
pybasen: canonical base64, base32hex and base16 transcoding

Encodes byte strings into RFC4648 text encodings and decodes them back,
rejecting any text that is not the unique canonical encoding of some byte
string: wrong padding counts, set bits under padding, truncated groups and
characters outside the alphabet all raise BadValue.

Whitespace is ignored anywhere in the input to the decoders. base64 and
base32hex decoding is case sensitive; hex decoding accepts either case.
"""

import logging

from .base_n import (
    BadValue,
    BaseNTransformer,
    PADDING_CHAR,
)

from .alphabet import (
    Alphabet,
    BASE64,
    BASE32HEX,
    BASE16,
)

from .base64 import (
    encode_base64,
    decode_base64
)

from .base32 import (
    encode_base32hex,
    decode_base32hex
)

from .base16 import (
    encode_hex,
    decode_hex
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Codec functions
    "encode_base64",
    "decode_base64",
    "encode_base32hex",
    "decode_base32hex",
    "encode_hex",
    "decode_hex",

    # Errors
    "BadValue",

    # Building blocks
    "BaseNTransformer",
    "Alphabet",
    "BASE64",
    "BASE32HEX",
    "BASE16",
    "PADDING_CHAR",
]
