"""Tests for smol_symbol.db.postgres adapters.

Adapter tests run without a server; tests marked `db` need PostgreSQL
reachable with DB_CONFIG and are skipped otherwise.
"""
from types import SimpleNamespace

import psycopg
import pytest
from psycopg.adapt import AdaptersMap, PyFormat
from psycopg.pq import Format

from smol_symbol import DEFAULT_ALPHABET, Symbol, s
from smol_symbol.db.postgres import (
    NUMERIC_OID,
    SymbolDumper,
    SymbolLoader,
    connect,
    fetch_symbols,
    init_schema,
    make_symbol_loader,
    register_symbol_adapters,
    store_symbol,
)


class TestAdapters:
    """Test dumper/loader behaviour without a connection."""

    def test_dump_writes_raw_integer(self):
        """Symbols dump as their decimal integer."""
        dumper = SymbolDumper(Symbol)
        assert dumper.dump(s("hello")) == b"5036767"
        assert dumper.oid == NUMERIC_OID

    def test_loader_builds_symbol(self):
        """NUMERIC text loads as a Symbol."""
        loader = make_symbol_loader(DEFAULT_ALPHABET)(NUMERIC_OID)
        assert loader.load(b"5036767") == s("hello")

    def test_loader_bound_to_alphabet(self, hexish):
        """Loaders made for an alphabet tag loaded symbols with it."""
        loader_cls = make_symbol_loader(hexish)
        assert issubclass(loader_cls, SymbolLoader)
        sym = loader_cls(NUMERIC_OID).load(b"18")
        assert sym.alphabet == hexish
        assert str(sym) == "00"

    def test_loader_accepts_memoryview(self):
        """Loaders accept memoryview input."""
        loader = SymbolLoader(NUMERIC_OID)
        assert loader.load(memoryview(b"1")) == s("a")

    def test_register(self):
        """Registering adds the dumper to the context."""
        context = SimpleNamespace(adapters=AdaptersMap(psycopg.adapters))
        register_symbol_adapters(context)
        assert context.adapters.get_dumper(Symbol, PyFormat.TEXT) is SymbolDumper
        loader = context.adapters.get_loader(NUMERIC_OID, Format.TEXT)
        assert issubclass(loader, SymbolLoader)

    def test_register_does_not_touch_global_adapters(self):
        """Registration stays local to the given context."""
        context = SimpleNamespace(adapters=AdaptersMap(psycopg.adapters))
        register_symbol_adapters(context)
        assert not issubclass(
            psycopg.adapters.get_loader(NUMERIC_OID, Format.TEXT), SymbolLoader)


@pytest.fixture
def conn():
    try:
        conn = connect()
    except psycopg.OperationalError:
        pytest.skip("PostgreSQL not available")
    init_schema(conn)
    yield conn
    conn.rollback()
    conn.close()


@pytest.mark.db
class TestDatabase:
    """Round trips through a live server."""

    def test_select_roundtrip(self, conn):
        """A symbol parameter comes back as a Symbol."""
        with conn.cursor() as cur:
            cur.execute("SELECT %s", (s("hello"),))
            assert cur.fetchone()[0] == s("hello")

    def test_store_and_fetch_ordered(self, conn):
        """Fetched symbols are ordered by value."""
        with conn.cursor() as cur:
            cur.execute("DELETE FROM symbols WHERE alphabet = %s", ("default",))
        for text in ("hello", "aa", "a"):
            store_symbol(conn, s(text), label=text)
        assert fetch_symbols(conn) == [s("a"), s("aa"), s("hello")]

    def test_large_values(self, conn):
        """The largest symbols fit NUMERIC(39,0)."""
        big = s("this_is_just_short_enough")
        with conn.cursor() as cur:
            cur.execute("SELECT %s", (big,))
            assert cur.fetchone()[0] == big
