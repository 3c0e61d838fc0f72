"""Build-time symbol binding.

Runs the runtime encoder ahead of time and writes a Python module of
ready-made constants, so importing it never re-parses symbol text:

    HELLO = Symbol.from_raw(5036767, BUILTIN_ALPHABETS["default"])  # hello

Any token that would fail encode() aborts generation with a BindingError
naming the token, the alphabet and the reason.

Manifest format (JSON):

    {
      "alphabets": {"hexish": "0123456789abcdef"},
      "symbols": {
        "HELLO": "hello",
        "DEAD": ["dead", "hexish"]
      }
    }
"""
from __future__ import annotations

import json
import keyword
from dataclasses import dataclass
from pathlib import Path

from ..core.alphabet import BUILTIN_ALPHABETS, DEFAULT_ALPHABET, Alphabet, custom_alphabet
from ..core.codec import encode
from ..core.errors import BindingError, SymbolParsingError
from ..core.symbol import Symbol

HEADER = '"""Generated by smol-symbol. Do not edit."""\n'
# Names the generated module binds itself
RESERVED_NAMES = frozenset({"Symbol", "BUILTIN_ALPHABETS", "custom_alphabet", "__all__"})


@dataclass(frozen=True)
class Binding:
    """One generated constant: its name, source token and encoded symbol."""
    name: str
    token: str
    symbol: Symbol


def bind(token: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> Symbol:
    """Validate and encode an identifier-like token, or raise BindingError."""
    if not isinstance(token, str):
        raise BindingError(f"Symbol token must be a string, got {token!r}")
    token = token.strip()
    if token and not token.isidentifier():
        raise BindingError(f"Symbol token {token!r} is not identifier-like")
    try:
        data = encode(token, alphabet)
    except SymbolParsingError as err:
        raise BindingError(
            f"Cannot bind {token!r} with alphabet {alphabet.name!r}: {err}") from err
    return Symbol.from_raw(data, alphabet)


def constant_name(token: str) -> str:
    return token.strip().upper()


def load_manifest(path: str | Path) -> tuple[dict[str, Alphabet], list[tuple[str, str, str | None]]]:
    """Read a JSON manifest.

    Returns the declared alphabets and a list of (constant, token, alphabet
    name or None) entries in file order.
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    return parse_manifest(raw)


def parse_manifest(raw: dict) -> tuple[dict[str, Alphabet], list[tuple[str, str, str | None]]]:
    if not isinstance(raw, dict):
        raise BindingError("Manifest must be a JSON object")

    declared = raw.get("alphabets", {})
    symbols = raw.get("symbols", {})
    for section, value in (("alphabets", declared), ("symbols", symbols)):
        if not isinstance(value, dict):
            raise BindingError(f"Manifest section {section!r} must be a JSON object")

    alphabets = {}
    for name, chars in declared.items():
        if name in BUILTIN_ALPHABETS:
            raise BindingError(f"Manifest redefines builtin alphabet {name!r}")
        if not isinstance(chars, str):
            raise BindingError(f"Alphabet {name!r} characters must be a string, got {chars!r}")
        alphabets[name] = custom_alphabet(name, chars)

    entries = []
    for const, value in symbols.items():
        if isinstance(value, str):
            entries.append((const, value, None))
        elif (isinstance(value, list) and len(value) == 2
              and all(isinstance(v, str) for v in value)):
            entries.append((const, value[0], value[1]))
        else:
            raise BindingError(f"Bad manifest entry for {const!r}: {value!r}")
    return alphabets, entries


def resolve(entries, alphabets: dict[str, Alphabet] | None = None,
            default: Alphabet = DEFAULT_ALPHABET) -> list[Binding]:
    """Bind manifest entries, checking constant names are unique identifiers."""
    alphabets = alphabets or {}
    bindings = []
    seen = set()
    for const, token, alphabet_name in entries:
        if alphabet_name is None:
            alphabet = default
        elif alphabet_name in alphabets:
            alphabet = alphabets[alphabet_name]
        elif alphabet_name in BUILTIN_ALPHABETS:
            alphabet = BUILTIN_ALPHABETS[alphabet_name]
        else:
            raise BindingError(f"Symbol {const!r} uses unknown alphabet {alphabet_name!r}")

        symbol = bind(token, alphabet)
        if not const.isidentifier() or keyword.iskeyword(const):
            raise BindingError(f"Constant name {const!r} is not a usable identifier")
        if const in RESERVED_NAMES:
            raise BindingError(f"Constant name {const!r} is reserved by the generated module")
        if const in seen:
            raise BindingError(f"Constant {const!r} defined twice")
        seen.add(const)
        bindings.append(Binding(const, token.strip(), symbol))

    alphabet_vars = {_alphabet_var(b.symbol.alphabet) for b in bindings
                     if BUILTIN_ALPHABETS.get(b.symbol.alphabet.name) != b.symbol.alphabet}
    for b in bindings:
        if b.name in alphabet_vars:
            raise BindingError(f"Constant name {b.name!r} shadows a generated alphabet")
    return bindings


def _alphabet_var(alphabet: Alphabet) -> str:
    return f"{alphabet.name.upper()}_ALPHABET"


def render_module(bindings: list[Binding]) -> str:
    """Render bindings as Python source."""
    custom = {}
    for b in bindings:
        a = b.symbol.alphabet
        if BUILTIN_ALPHABETS.get(a.name) != a:
            custom[a.name] = a

    imports = ["Symbol"]
    if len(custom) < len({b.symbol.alphabet.name for b in bindings}):
        imports.insert(0, "BUILTIN_ALPHABETS")
    if custom:
        imports.append("custom_alphabet")

    lines = [HEADER, f"from smol_symbol import {', '.join(imports)}", ""]
    for name, a in custom.items():
        strict = "" if a.strict else ", strict=False"
        lines.append(f"{_alphabet_var(a)} = custom_alphabet({name!r}, {str(a)!r}{strict})")
    if custom:
        lines.append("")

    for b in bindings:
        a = b.symbol.alphabet
        ref = _alphabet_var(a) if a.name in custom else f"BUILTIN_ALPHABETS[{a.name!r}]"
        lines.append(f"{b.name} = Symbol.from_raw({b.symbol.data}, {ref})  # {b.token}")

    lines.append("")
    names = ", ".join(repr(b.name) for b in bindings)
    lines.append(f"__all__ = [{names}]")
    return "\n".join(lines) + "\n"


def generate(tokens=(), alphabet: Alphabet = DEFAULT_ALPHABET,
             manifest: str | Path | None = None) -> str:
    """Bind bare tokens (under alphabet) plus any manifest entries and render them."""
    alphabets: dict[str, Alphabet] = {}
    entries = [(constant_name(t), t, None) for t in tokens]
    if manifest is not None:
        declared, manifest_entries = load_manifest(manifest)
        alphabets.update(declared)
        entries.extend(manifest_entries)
    if not entries:
        raise BindingError("No symbols to generate")
    return render_module(resolve(entries, alphabets, default=alphabet))
