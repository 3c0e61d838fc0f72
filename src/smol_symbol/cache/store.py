"""Symbol-keyed value store on LMDB.

Keys are packed 16-byte symbols, so LMDB's byte ordering iterates
entries in symbol order. Each alphabet gets its own named sub-database,
keeping symbols of different alphabets apart. Values are msgpack-encoded
(symbols inside values are allowed, see core.packing).

This is a plain key-value store: it never maps text to symbols.
"""

import os

import lmdb

from ..core.alphabet import DEFAULT_ALPHABET
from ..core.errors import AlphabetMismatchError
from ..core.packing import from_bytes, packb, to_bytes, unpackb
from ..core.symbol import Symbol

DEFAULT_MAP_SIZE = int(os.environ.get("SMOL_SYMBOL_STORE_MAP_SIZE", 100 * 1024 * 1024))


class SymbolStore:
    """LMDB-backed mapping from Symbol to msgpack-serializable values.

    Symbols nested inside values may use the store's own alphabet, a builtin,
    or any alphabet passed in `alphabets`; other values are refused on write.
    """

    def __init__(self, path, alphabet=DEFAULT_ALPHABET, map_size=DEFAULT_MAP_SIZE,
                 max_dbs=8, alphabets=None):
        self.alphabet = alphabet
        self._alphabets = dict(alphabets or {})
        self._alphabets[alphabet.name] = alphabet
        self.env = lmdb.open(str(path), map_size=map_size, max_dbs=max_dbs)
        self.db = self.env.open_db(alphabet.name.encode("ascii"))

    def _key(self, symbol):
        if not isinstance(symbol, Symbol):
            raise TypeError(f"SymbolStore keys must be Symbols, got {type(symbol).__name__}")
        if symbol.alphabet != self.alphabet:
            raise AlphabetMismatchError(
                f"Store holds alphabet {self.alphabet.name!r}, "
                f"got symbol of {symbol.alphabet.name!r}")
        return to_bytes(symbol)

    def _pack(self, value):
        # Refuse symbols that get() could not restore
        return packb(value, self._alphabets)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def put(self, symbol, value):
        """Store value under symbol, replacing any previous value."""
        key = self._key(symbol)
        packed = self._pack(value)
        with self.env.begin(write=True) as txn:
            txn.put(key, packed, db=self.db)

    def put_many(self, items):
        """Store (symbol, value) pairs in a single transaction."""
        packed = [(self._key(symbol), self._pack(value)) for symbol, value in items]
        with self.env.begin(write=True) as txn:
            for key, val in packed:
                txn.put(key, val, db=self.db)

    def delete(self, symbol):
        """Remove symbol. Returns True if it was present."""
        key = self._key(symbol)
        with self.env.begin(write=True) as txn:
            return txn.delete(key, db=self.db)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, symbol, default=None):
        """Read the value stored under symbol, or default on a miss."""
        key = self._key(symbol)
        with self.env.begin(db=self.db) as txn:
            val = txn.get(key)
            if val is None:
                return default
            return unpackb(val, self._alphabets)

    def __contains__(self, symbol):
        key = self._key(symbol)
        with self.env.begin(db=self.db) as txn:
            return txn.get(key) is not None

    def __len__(self):
        with self.env.begin(db=self.db) as txn:
            return txn.stat(self.db)["entries"]

    def items(self, start=None):
        """Yield (symbol, value) pairs in ascending symbol order.

        With start, iteration begins at the first symbol >= start.
        """
        with self.env.begin(db=self.db) as txn:
            cursor = txn.cursor()
            if start is None:
                positioned = cursor.first()
            else:
                positioned = cursor.set_range(self._key(start))
            if not positioned:
                return
            for key, val in cursor:
                yield from_bytes(key, self.alphabet), unpackb(val, self._alphabets)

    def keys(self):
        """Yield stored symbols in ascending order."""
        with self.env.begin(db=self.db) as txn:
            for key in txn.cursor().iternext(keys=True, values=False):
                yield from_bytes(key, self.alphabet)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self):
        """Close LMDB environment."""
        self.env.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
