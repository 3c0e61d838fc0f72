"""
smol_symbol - human-readable identifiers packed into 128-bit integers.

Usage:
    from smol_symbol import Symbol, custom_alphabet, s

    hello = s("hello")                  # default alphabet: a-z and _
    assert str(hello) == "hello"
    assert int(hello) == 5036767

    hexish = custom_alphabet("hexish", "0123456789abcdef")
    dead = Symbol.parse("dead", hexish)
"""

from .core.alphabet import (
    ALPHANUMERIC_ALPHABET,
    BUILTIN_ALPHABETS,
    DEFAULT_ALPHABET,
    IDENTIFIER_ALPHABET,
    SYMBOL_BITS,
    Alphabet,
    custom_alphabet,
    get_alphabet,
    max_symbol_len,
)

from .core.codec import (
    decode,
    encode,
    is_encodable,
)

from .core.errors import (
    PARSING_ERROR_MSG,
    AlphabetDefinitionError,
    AlphabetMismatchError,
    BindingError,
    SymbolError,
    SymbolParsingError,
)

from .core.symbol import (
    Symbol,
    s,
)

__version__ = "0.1.0"
