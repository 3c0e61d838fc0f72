"""
Command-line interface for smol-symbol.

Usage:
    smol-symbol encode <text...>        Print the raw integer for each symbol
    smol-symbol decode <int...>         Print the text for each raw integer
    smol-symbol info                    Alphabet size, radix and max length
    smol-symbol generate [tokens...]    Emit a module of symbol constants

Environment:
    SMOL_SYMBOL_ALPHABET    Default alphabet name (default: default)
"""
from __future__ import annotations

import argparse
import os
import sys

from .core.alphabet import BUILTIN_ALPHABETS, get_alphabet
from .core.errors import SymbolError
from .core.symbol import Symbol

DEFAULT_ALPHABET_NAME = os.environ.get("SMOL_SYMBOL_ALPHABET", "default")


def error(message: str) -> int:
    print(f"ERROR: {message}", file=sys.stderr)
    return 1


def cmd_encode(args: argparse.Namespace) -> int:
    """Encode text to raw integers."""
    alphabet = get_alphabet(args.alphabet)
    status = 0
    for text in args.text:
        try:
            sym = Symbol.parse(text, alphabet)
        except SymbolError as err:
            status = error(str(err))
            continue
        if args.verbose:
            print(f"{text}\t{sym.data}\t0x{sym.data:032x}")
        else:
            print(sym.data)
    return status


def cmd_decode(args: argparse.Namespace) -> int:
    """Decode raw integers to text."""
    alphabet = get_alphabet(args.alphabet)
    status = 0
    for raw in args.value:
        try:
            text = Symbol.from_raw(int(raw, 0), alphabet).to_string()
        except ValueError as err:
            status = error(f"{raw}: {err}")
            continue
        if args.verbose:
            print(f"{raw}\t{text}")
        else:
            print(text)
    return status


def cmd_info(args: argparse.Namespace) -> int:
    """Show alphabet constants."""
    alphabet = get_alphabet(args.alphabet)
    print(f"Alphabet: {alphabet.name}")
    print(f"Characters: {alphabet}")
    print(f"LEN: {alphabet.size}")
    print(f"RADIX: {alphabet.radix}")
    print(f"MAX_LEN: {alphabet.max_len}")
    if args.verbose:
        print(f"Bits per character: {alphabet.bits_per_char}")
    return 0


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a constants module."""
    from .codegen.generate import generate

    source = generate(args.tokens, alphabet=get_alphabet(args.alphabet),
                      manifest=args.manifest)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(source)
        if args.verbose:
            print(f"Wrote {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(source)
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="smol-symbol",
        description="Human-readable identifiers packed into 128-bit integers",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-a", "--alphabet",
        default=DEFAULT_ALPHABET_NAME,
        help=f"Alphabet name ({', '.join(BUILTIN_ALPHABETS)})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    encode_parser = subparsers.add_parser("encode", help="Encode text to integers")
    encode_parser.add_argument("text", nargs="+", help="Symbol text")
    encode_parser.set_defaults(func=cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Decode integers to text")
    decode_parser.add_argument("value", nargs="+", help="Raw integer (decimal or 0x hex)")
    decode_parser.set_defaults(func=cmd_decode)

    info_parser = subparsers.add_parser("info", help="Show alphabet constants")
    info_parser.set_defaults(func=cmd_info)

    generate_parser = subparsers.add_parser("generate", help="Generate symbol constants")
    generate_parser.add_argument("tokens", nargs="*", help="Identifier-like tokens")
    generate_parser.add_argument("-m", "--manifest", help="JSON manifest of symbols")
    generate_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    generate_parser.set_defaults(func=cmd_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (ValueError, OSError) as err:
        return error(str(err))


if __name__ == "__main__":
    sys.exit(main())
