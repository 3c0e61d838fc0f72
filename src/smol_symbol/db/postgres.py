"""PostgreSQL adapters for symbols.

Symbols are 128-bit, wider than bigint, so they travel as NUMERIC(39, 0).
Dumping writes the raw integer; loading a numeric column yields Symbols of
the alphabet given at registration.
"""

import psycopg
from psycopg.adapt import Dumper, Loader

from ..core.alphabet import DEFAULT_ALPHABET
from ..core.symbol import Symbol

DB_CONFIG = {
    "dbname": "smol_symbol",
    "user": "smol",
    "password": "smol_dev",
    "host": "localhost",
    "port": 5432,
}

NUMERIC_OID = psycopg.adapters.types["numeric"].oid


class SymbolDumper(Dumper):
    """Dump a Symbol as its raw integer in numeric text format."""

    oid = NUMERIC_OID

    def dump(self, obj):
        return str(obj.data).encode("ascii")


class SymbolLoader(Loader):
    """Load numeric text as a Symbol of `alphabet`."""

    alphabet = DEFAULT_ALPHABET

    def load(self, data):
        return Symbol.from_raw(int(bytes(data)), self.alphabet)


def make_symbol_loader(alphabet):
    """Return a SymbolLoader subclass bound to alphabet."""
    return type(f"{alphabet.name.title()}SymbolLoader", (SymbolLoader,),
                {"alphabet": alphabet})


def register_symbol_adapters(context, alphabet=DEFAULT_ALPHABET):
    """Register Symbol adapters on a connection, cursor or other adapt context.

    Note that every numeric column read through this context loads as a
    Symbol, so scope it to a connection or cursor used for symbol tables.
    """
    context.adapters.register_dumper(Symbol, SymbolDumper)
    context.adapters.register_loader("numeric", make_symbol_loader(alphabet))


def connect(alphabet=DEFAULT_ALPHABET, **overrides):
    """Connect with DB_CONFIG and register symbol adapters on the connection."""
    conn = psycopg.connect(**{**DB_CONFIG, **overrides})
    register_symbol_adapters(conn, alphabet)
    return conn


def init_schema(conn):
    """Create the symbol tables if they don't exist."""
    with conn.cursor() as cur:
        cur.execute("""
            CREATE TABLE IF NOT EXISTS symbols (
                symbol      NUMERIC(39, 0) NOT NULL,
                alphabet    TEXT NOT NULL,
                label       TEXT,
                PRIMARY KEY (alphabet, symbol)
            );
        """)
    conn.commit()


def store_symbol(conn, symbol, label=None):
    """Insert or update a symbol row."""
    with conn.cursor() as cur:
        cur.execute("""
            INSERT INTO symbols (symbol, alphabet, label)
            VALUES (%s, %s, %s)
            ON CONFLICT (alphabet, symbol) DO UPDATE SET label = EXCLUDED.label
        """, (symbol, symbol.alphabet.name, label))


def fetch_symbols(conn, alphabet=DEFAULT_ALPHABET):
    """Return all stored symbols of alphabet, in symbol order."""
    with conn.cursor() as cur:
        register_symbol_adapters(cur, alphabet)
        cur.execute("""
            SELECT symbol FROM symbols WHERE alphabet = %s ORDER BY symbol
        """, (alphabet.name,))
        return [row[0] for row in cur.fetchall()]
