"""Tests for smol_symbol.core.codec.

Tests the bijective mixed-radix encoding: digits 1..N in radix N + 1.
"""
import itertools

import pytest

from smol_symbol.core.alphabet import DEFAULT_ALPHABET, SYMBOL_MAX, custom_alphabet
from smol_symbol.core.codec import decode, digits, encode, is_encodable
from smol_symbol.core.errors import SymbolParsingError


class TestEncode:
    """Test encode()."""

    def test_single_characters(self):
        """Single characters encode to their position."""
        assert encode("a") == 1
        assert encode("z") == 26
        assert encode("_") == 27

    def test_most_significant_first(self):
        """The first character is the most significant digit."""
        # b a -> 2 * 28 + 1
        assert encode("ba") == 57
        assert encode("ab") == 30

    def test_hello(self):
        """'hello' encodes to 5036767."""
        # h=8 e=5 l=12 l=12 o=15 in radix 28
        assert encode("hello") == 5036767

    def test_prefix_does_not_collide(self):
        """'a' and 'aa' differ because digit 0 is never used."""
        assert encode("a") == 1
        assert encode("aa") == 29
        assert encode("aaa") == 29 * 28 + 1

    def test_max_length_symbol_fits(self):
        """A MAX_LEN symbol encodes without overflow."""
        data = encode("this_is_just_short_enough")
        assert 0 < data <= SYMBOL_MAX

    def test_largest_default_value_fits(self):
        """The largest default symbol stays below 2**128."""
        assert encode("_" * 25) == 28 ** 25 - 1
        assert encode("_" * 25) <= SYMBOL_MAX

    def test_single_character_alphabet_fills_128_bits(self):
        """A one-character alphabet allows 128 characters."""
        unary = custom_alphabet("unary", "x")
        assert unary.max_len == 128
        assert encode("x" * 128, unary) == SYMBOL_MAX


class TestEncodeValidation:
    """Test the three failure conditions and their order."""

    def test_empty_fails(self):
        """Empty text is not a symbol."""
        with pytest.raises(SymbolParsingError, match="at least one character"):
            encode("")

    def test_too_long_fails(self):
        """Text longer than MAX_LEN fails."""
        with pytest.raises(SymbolParsingError, match="at most 25"):
            encode("this_is_too_long_to_store_")

    def test_invalid_character_fails(self):
        """Characters outside the alphabet fail."""
        with pytest.raises(SymbolParsingError, match="'-' is not in alphabet"):
            encode("this-is-invalid")

    def test_length_checked_before_characters(self):
        """Length is reported before bad characters."""
        with pytest.raises(SymbolParsingError, match="at most 25"):
            encode("-" * 26)

    def test_uppercase_not_in_default(self):
        with pytest.raises(SymbolParsingError):
            encode("Hello")

    def test_bound_is_exact_for_every_builtin(self, hexish, wide, naive_hello_world):
        """MAX_LEN encodes and MAX_LEN + 1 fails for every alphabet."""
        for alphabet in (DEFAULT_ALPHABET, hexish, wide, naive_hello_world):
            c = alphabet.chars[-1]
            assert encode(c * alphabet.max_len, alphabet) <= SYMBOL_MAX
            with pytest.raises(SymbolParsingError):
                encode(c * (alphabet.max_len + 1), alphabet)

    def test_is_encodable(self):
        assert is_encodable("hello")
        assert not is_encodable("")
        assert not is_encodable("hello world")


class TestDecode:
    """Test decode()."""

    def test_known_values(self):
        """Known integers decode to known text."""
        assert decode(1) == "a"
        assert decode(27) == "_"
        assert decode(29) == "aa"
        assert decode(5036767) == "hello"

    def test_roundtrip_scenarios(self):
        """Decode inverts encode for typical symbols."""
        for text in ("hello", "a", "_", "hello_world", "this_is_just_short_enough"):
            assert decode(encode(text)) == text

    def test_zero_digit_rejected(self):
        """Values containing a zero digit are not symbols."""
        # 28 is "1 0" in radix 28: not produced by encode
        with pytest.raises(ValueError, match="zero digit"):
            decode(28)

    def test_non_positive_rejected(self):
        """Zero and negative values are not symbols."""
        with pytest.raises(ValueError):
            decode(0)
        with pytest.raises(ValueError):
            decode(-5)

    def test_digits(self):
        """digits() lists the digits most significant first."""
        assert digits(encode("hello")) == (8, 5, 12, 12, 15)
        assert digits(encode("aa")) == (1, 1)


class TestBijection:
    """Exhaustive checks over a small alphabet."""

    def test_all_short_strings_roundtrip_and_are_distinct(self):
        """Every string up to length 4 has its own value."""
        abc = custom_alphabet("abc", "abc")
        seen = {}
        for length in range(1, 5):
            for chars in itertools.product("abc", repeat=length):
                text = "".join(chars)
                data = encode(text, abc)
                assert data not in seen, f"{text!r} collides with {seen.get(data)!r}"
                seen[data] = text
                assert decode(data, abc) == text

    def test_encoding_is_dense(self):
        """Strings of length 1..3 are exactly the zero-free radix-4 numbers below 64."""
        abc = custom_alphabet("abc", "abc")
        values = sorted(
            encode("".join(chars), abc)
            for length in range(1, 4)
            for chars in itertools.product("abc", repeat=length)
        )
        # 3 + 9 + 27 strings, every digit 1..3 in radix 4
        assert len(values) == 39
        assert values == [v for v in range(1, 64) if 0 not in digits(v, abc)]

    def test_same_text_different_alphabets(self, naive_hello_world):
        """The same text encodes differently per alphabet."""
        default_value = encode("hello_world")
        naive_value = encode("hello_world", naive_hello_world)
        assert default_value != naive_value
        assert decode(default_value) == "hello_world"
        assert decode(naive_value, naive_hello_world) == "hello_world"
