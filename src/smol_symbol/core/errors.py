"""Error types raised by symbol parsing, alphabet declaration and codegen."""

PARSING_ERROR_MSG = "Failed to parse symbol"


class SymbolError(ValueError):
    """Base class for all smol_symbol errors."""


class SymbolParsingError(SymbolError):
    """Input could not become a Symbol.

    Raised for exactly three conditions, checked in this order:
    empty input, input longer than the alphabet's MAX_LEN, and a
    character outside the alphabet. The message is for humans only.
    """

    def __init__(self, message: str = PARSING_ERROR_MSG) -> None:
        super().__init__(message)


class AlphabetDefinitionError(SymbolError):
    """An alphabet declaration violates the alphabet invariants."""


class AlphabetMismatchError(SymbolError, TypeError):
    """Symbols from different alphabets were mixed."""


class BindingError(SymbolError):
    """A build-time symbol binding failed validation."""
