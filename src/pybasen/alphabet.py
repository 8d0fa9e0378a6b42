"""
Mapping tables between bit-group values and encoded characters

Each table covers one of the supported RFC4648 encodings: base64, base32
"extended hex" and base16.
"""

from typing import List, Optional


class Alphabet:
    """
    A mapping between the values 0..(2^bits - 1) and encoded characters

    The decoding direction is a 128 entry table indexed by ASCII code, holding
    -1 for characters that are not part of the alphabet.
    """

    def __init__(self, name: str, symbols: str, case_insensitive: bool = False):
        if len(symbols) & (len(symbols) - 1) or len(symbols) < 2:
            raise ValueError(f"Alphabet size must be a power of two: {len(symbols)}")
        if len(set(symbols)) != len(symbols):
            raise ValueError(f"Duplicate characters in {name} alphabet")

        self.name = name
        self.symbols = symbols
        self.bits_per_chunk = len(self).bit_length() - 1
        self.zero_char = symbols[0]

        inverse: List[int] = [-1] * 128
        for value, ch in enumerate(symbols):
            inverse[ord(ch)] = value
            if case_insensitive:
                inverse[ord(ch.lower())] = value
        self._inverse = inverse

    def char(self, value: int) -> str:
        """Return the encoded character for a chunk value"""
        return self.symbols[value]

    def value(self, ch: str) -> Optional[int]:
        """
        Return the chunk value of an encoded character

        Args:
            ch: A single character

        Returns:
            The value, or None if the character is not in the alphabet
        """
        code = ord(ch)
        if code >= len(self._inverse):
            return None
        value = self._inverse[code]
        return value if value >= 0 else None

    def __len__(self) -> int:
        return len(self.symbols)

    def __repr__(self) -> str:
        return f"Alphabet({self.name!r}, bits_per_chunk={self.bits_per_chunk})"


# RFC4648 standard base64 table
BASE64 = Alphabet(
    "base64",
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/",
)

# RFC4648 "extended hex" encoding table
BASE32HEX = Alphabet("base32hex", "0123456789ABCDEFGHIJKLMNOPQRSTUV")

# Hex digits are emitted in upper case but accepted in either case
BASE16 = Alphabet("base16", "0123456789ABCDEF", case_insensitive=True)
