"""
Generic base-N transcoding between binary data and RFC4648 text encodings

Encoding:
    input bytes => pad_binary (append zero bytes up to a whole bit group)
                => encode_groups (split the bit stream into chunks and map
                                  each chunk through the alphabet)
                => append padding characters (=) up to the group length

Decoding:
    input text => find_padding (count trailing padding characters)
               => normalize_text (drop whitespace, turn padding into the
                                  alphabet's zero character)
               => decode_groups (map each character back to its chunk and
                                 concatenate the bits into bytes)
               => strip_padding (check that padding only covered zero bits
                                 and truncate it)

Only the canonical encoding of a byte sequence is accepted by the decoder.
"""

import logging
from enum import Enum
from math import gcd
from typing import Tuple, Union

from .alphabet import Alphabet

logger = logging.getLogger(__name__)

PADDING_CHAR = "="

# Same set as C isspace() in the "C" locale
WHITESPACE = frozenset(" \t\n\v\f\r")

BytesLike = Union[bytes, bytearray, memoryview]


class BadValue(ValueError):
    """A text that is not the canonical encoding of any byte sequence"""

    class ErrorType(Enum):
        """Ways a text can fail to decode"""
        TOO_MANY_PADDING = "too_many_padding"
        INVALID_PADDING = "invalid_padding"
        INVALID_CHARACTER = "invalid_character"
        INCOMPLETE_INPUT = "incomplete_input"
        NONZERO_PADDING = "nonzero_padding"

    def __init__(self, error_type: ErrorType, algorithm: str, text: str, message: str = ""):
        self.error_type = error_type
        self.algorithm = algorithm
        self.text = text
        detail = f"{error_type.value}: {message}" if message else error_type.value
        super().__init__(f"{detail}: {text}")


def pad_binary(data: bytes, bytes_per_group: int) -> bytes:
    """Extend data with zero bytes up to a multiple of bytes_per_group"""
    remainder = len(data) % bytes_per_group
    if remainder == 0:
        return data
    return data + bytes(bytes_per_group - remainder)


def encode_groups(data: bytes, alphabet: Alphabet) -> str:
    """
    Split a byte string into chunks of alphabet.bits_per_chunk bits, most
    significant bit first, and map each chunk to its character

    Bits left over after the last whole chunk are dropped, so callers pass
    group aligned data.
    """
    bits = alphabet.bits_per_chunk
    mask = (1 << bits) - 1
    out = []
    acc = 0
    nbits = 0
    for byte in data:
        acc = (acc << 8) | byte
        nbits += 8
        while nbits >= bits:
            nbits -= bits
            out.append(alphabet.char((acc >> nbits) & mask))
        acc &= (1 << nbits) - 1
    return "".join(out)


def decode_groups(chars: str, alphabet: Alphabet, algorithm: str, text: str) -> bytearray:
    """
    Map characters back to their chunk values and regroup the bits into bytes

    Args:
        chars: Normalized characters (no whitespace, no padding)
        alphabet: The alphabet the characters are drawn from
        algorithm: Algorithm name used in error messages
        text: The original input, used in error messages

    Returns:
        The decoded bytes. Trailing bits that do not fill a byte are dropped.

    Raises:
        BadValue: If a character is not part of the alphabet
    """
    bits = alphabet.bits_per_chunk
    result = bytearray()
    acc = 0
    nbits = 0
    for ch in chars:
        value = alphabet.value(ch)
        if value is None:
            raise BadValue(BadValue.ErrorType.INVALID_CHARACTER, algorithm, text,
                           f"Invalid {algorithm} character {ch!r}")
        acc = (acc << bits) | value
        nbits += bits
        # bits_per_chunk never exceeds 8, so at most one byte completes per character
        if nbits >= 8:
            nbits -= 8
            result.append((acc >> nbits) & 0xFF)
            acc &= (1 << nbits) - 1
    return result


def find_padding(text: str, max_padding_chars: int, algorithm: str) -> Tuple[int, int]:
    """
    Scan backward over trailing padding characters and whitespace

    Returns:
        (boundary, padchars) where boundary is the index just past the last
        character that is neither padding nor whitespace

    Raises:
        BadValue: If more than max_padding_chars padding characters are found
    """
    padchars = 0
    boundary = len(text)
    while boundary > 0:
        ch = text[boundary - 1]
        if ch == PADDING_CHAR:
            padchars += 1
            if padchars > max_padding_chars:
                raise BadValue(BadValue.ErrorType.TOO_MANY_PADDING, algorithm, text,
                               f"Too many {algorithm} padding characters")
        elif ch not in WHITESPACE:
            break
        boundary -= 1
    return boundary, padchars


def normalize_text(text: str, boundary: int, zero_char: str) -> str:
    """
    Drop whitespace and replace padding characters at or after boundary with
    zero_char

    Padding characters before the boundary are kept as is, so the decoder
    rejects them as invalid characters.
    """
    out = []
    for index, ch in enumerate(text):
        if ch in WHITESPACE:
            continue
        if ch == PADDING_CHAR and index >= boundary:
            out.append(zero_char)
        else:
            out.append(ch)
    return "".join(out)


def check_padding_bits(padchars: int, bits_per_chunk: int, algorithm: str, text: str) -> int:
    """
    Return the number of decoded bytes covered by padchars padding characters

    The padding must end on a byte boundary within one chunk of the bits the
    padding characters represent. For base32hex this rules out 2 and 5
    padding characters.
    """
    padbits = (padchars * bits_per_chunk + 7) & ~7
    if padbits > bits_per_chunk * (padchars + 1):
        raise BadValue(BadValue.ErrorType.INVALID_PADDING, algorithm, text,
                       f"Invalid {algorithm} padding")
    return padbits // 8


def strip_padding(decoded: bytearray, padbytes: int, algorithm: str, text: str) -> bytes:
    """
    Check that the trailing padbytes bytes are zero and truncate them

    Raises:
        BadValue: If any bit covered by padding is set
    """
    end = len(decoded) - padbytes
    if any(decoded[end:]):
        raise BadValue(BadValue.ErrorType.NONZERO_PADDING, algorithm, text,
                       f"Non 0 bits included in {algorithm} padding")
    return bytes(decoded[:end])


class BaseNTransformer:
    """
    An encoder/decoder pair for one alphabet

    bits_per_group is the number of bits in the smallest non empty bit string
    that encodes without padding: the least common multiple of 8 and
    bits_per_chunk, e.g. 24 for base64.

    max_padding_chars is the number of characters in a group minus the number
    of characters needed to represent a single byte. For base64 a group is 4
    characters and a byte needs 2, so at most 2 padding characters appear.
    """

    def __init__(self, algorithm: str, alphabet: Alphabet):
        self.algorithm = algorithm
        self.alphabet = alphabet
        self.bits_per_chunk = alphabet.bits_per_chunk
        self.bits_per_group = self.bits_per_chunk * 8 // gcd(self.bits_per_chunk, 8)
        self.chars_per_group = self.bits_per_group // self.bits_per_chunk
        self.bytes_per_group = self.bits_per_group // 8
        chars_per_byte = (8 + self.bits_per_chunk - 1) // self.bits_per_chunk
        self.max_padding_chars = self.chars_per_group - chars_per_byte

    def encoded_length(self, size: int) -> int:
        """Number of characters, padding included, that encode size bytes"""
        groups = (size * 8 + self.bits_per_group - 1) // self.bits_per_group
        return groups * self.chars_per_group

    def encode(self, data: BytesLike) -> str:
        """
        Encode bytes into text

        Args:
            data: Any bytes-like object

        Returns:
            The canonical, padded encoding of data
        """
        data = bytes(memoryview(data))
        length = self.encoded_length(len(data))
        significant = (len(data) * 8 + self.bits_per_chunk - 1) // self.bits_per_chunk
        encoded = encode_groups(pad_binary(data, self.bytes_per_group), self.alphabet)
        return encoded[:significant] + PADDING_CHAR * (length - significant)

    def decode(self, text: Union[str, BytesLike]) -> bytes:
        """
        Decode text into bytes

        Whitespace anywhere in the text is ignored.

        Args:
            text: Encoded text, or ASCII bytes holding it

        Returns:
            The decoded bytes

        Raises:
            BadValue: If text is not the canonical encoding of a byte sequence
        """
        try:
            return self._decode(text)
        except BadValue as e:
            logger.debug("Rejected %s input (%s)", self.algorithm, e.error_type.value)
            raise

    def _decode(self, text: Union[str, BytesLike]) -> bytes:
        if not isinstance(text, str):
            raw = bytes(memoryview(text))
            try:
                text = raw.decode("ascii")
            except UnicodeDecodeError as e:
                raise BadValue(BadValue.ErrorType.INVALID_CHARACTER, self.algorithm,
                               raw.decode("latin-1"),
                               f"Invalid {self.algorithm} character {chr(raw[e.start])!r}") from e

        boundary, padchars = find_padding(text, self.max_padding_chars, self.algorithm)
        padbytes = check_padding_bits(padchars, self.bits_per_chunk, self.algorithm, text)

        chars = normalize_text(text, boundary, self.alphabet.zero_char)
        decoded = decode_groups(chars, self.alphabet, self.algorithm, text)
        if len(chars) % self.chars_per_group:
            raise BadValue(BadValue.ErrorType.INCOMPLETE_INPUT, self.algorithm, text,
                           f"Incomplete input for {self.algorithm}")

        return strip_padding(decoded, padbytes, self.algorithm, text)

    def __repr__(self) -> str:
        return f"BaseNTransformer({self.algorithm!r}, bits_per_chunk={self.bits_per_chunk})"
