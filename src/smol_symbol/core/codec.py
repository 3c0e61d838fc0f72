"""Bijective mixed-radix codec between symbol text and 128-bit integers.

Digits run 1..N in radix N + 1, most significant first. Because 0 is
never a digit, a string and any extension of it ("a", "aa") always map to
different integers, which a zero-padded base-N scheme cannot guarantee.
"""
from __future__ import annotations

from .alphabet import DEFAULT_ALPHABET, Alphabet
from .errors import SymbolParsingError


def encode(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Encode text as an integer under the given alphabet.

    Raises SymbolParsingError, checking in order: empty text, text longer
    than alphabet.max_len, then each character left to right.
    """
    if not text:
        raise SymbolParsingError("Symbol must have at least one character")
    if len(text) > alphabet.max_len:
        raise SymbolParsingError(
            f"Symbol {text!r} is {len(text)} characters; alphabet "
            f"{alphabet.name!r} allows at most {alphabet.max_len}")

    radix = alphabet.radix
    data = 0
    for c in text:
        data = data * radix + alphabet.invert_char(c)
    return data


def decode(data: int, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Decode an integer produced by encode() back to its text.

    No validation beyond refusing non-positive values and zero digits: the
    integer is trusted to have come from encode() under the same alphabet.
    """
    if data < 1:
        raise ValueError(f"Symbol values are positive, got {data}")
    radix = alphabet.radix
    chars = []
    while True:
        data, i = divmod(data, radix)
        if i == 0:
            raise ValueError(
                f"Value is not a symbol of alphabet {alphabet.name!r} (zero digit)")
        chars.append(alphabet.chars[i - 1])
        if data == 0:
            break
    return "".join(reversed(chars))


def is_encodable(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> bool:
    """Check whether text would encode under the alphabet."""
    try:
        encode(text, alphabet)
    except SymbolParsingError:
        return False
    return True


def digits(data: int, alphabet: Alphabet = DEFAULT_ALPHABET) -> tuple[int, ...]:
    """Return the base-(N+1) digits of an encoded value, most significant first."""
    radix = alphabet.radix
    out = []
    while data:
        data, i = divmod(data, radix)
        out.append(i)
    return tuple(reversed(out))
