"""

    Beygja: Icelandic verb inflection tools

    Database module

    Copyright © 2023 Miðeind ehf.

    This software is licensed under the MIT License:

        Permission is hereby granted, free of charge, to any person
        obtaining a copy of this software and associated documentation
        files (the "Software"), to deal in the Software without restriction,
        including without limitation the rights to use, copy, modify, merge,
        publish, distribute, sublicense, and/or sell copies of the Software,
        and to permit persons to whom the Software is furnished to do so,
        subject to the following conditions:

        The above copyright notice and this permission notice shall be
        included in all copies or substantial portions of the Software.

        THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
        EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
        MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
        IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY
        CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT,
        TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN CONNECTION WITH THE
        SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.

    This module stores the DIM data in an SQLite database.

    All access goes through work blocks, which can be nested:

        with db.work("rw"):
            ...
            with db.work("r"):
                ...

    The outermost block begins a transaction, deferred for read-only
    ("r") work and immediate for read-write ("rw") work, and commits it
    when the block exits normally. If an exception propagates out of
    the outermost block, the transaction is rolled back. A read-write
    block can not be nested within a read-only block.

"""

from typing import (
    Dict,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
)
from typing_extensions import TypedDict

import os
import sqlite3
import logging

from contextlib import contextmanager
from types import TracebackType

from .basics import BeygjaError, Collator, VERB_CLASS
from .paradigm import InflectionRecord


logger = logging.getLogger(__name__)

# Inflection values with special meaning when building paradigms
IVAL_DOMINANT = "RIK"
IVAL_IDIOM_ONLY = "OSB"

# Word visibility (DIM 'Birting' field)
VISIBILITY_CORE = 0
VISIBILITY_EXTENDED = 1
VISIBILITY_CORRECTION = 2

# Domain level of proper names
DOMAIN_LEVEL_NAME = 2

# Infinitive verb codes, by kind
INFINITIVE_CODES: Dict[str, str] = {
    "active": "Ia",
    "middle": "Im",
    "past": "Iap",
}

SCHEMA = """
CREATE TABLE wclass (
  cid   INTEGER PRIMARY KEY ASC,
  ctx   TEXT UNIQUE NOT NULL
);

CREATE TABLE dom (
  did   INTEGER PRIMARY KEY ASC,
  dtx   TEXT UNIQUE NOT NULL,
  dlv   INTEGER NOT NULL
);

CREATE TABLE reg (
  rid   INTEGER PRIMARY KEY ASC,
  rtx   TEXT UNIQUE NOT NULL
);

CREATE TABLE gflag (
  fid   INTEGER PRIMARY KEY ASC,
  ftx   TEXT UNIQUE NOT NULL
);

CREATE TABLE ival (
  jid   INTEGER PRIMARY KEY ASC,
  jtx   TEXT UNIQUE NOT NULL
);

CREATE TABLE word (
  wid   INTEGER PRIMARY KEY ASC,
  wbid  INTEGER UNIQUE NOT NULL,
  wlem  TEXT NOT NULL,
  cid   INTEGER NOT NULL REFERENCES wclass(cid),
  wcp   INTEGER NOT NULL,
  grade INTEGER NOT NULL,
  wvs   INTEGER NOT NULL,
  wsy   INTEGER NOT NULL
);

CREATE INDEX ix_word_wlem ON word(wlem);

CREATE TABLE wdom (
  hid   INTEGER PRIMARY KEY ASC,
  wid   INTEGER NOT NULL REFERENCES word(wid),
  did   INTEGER NOT NULL REFERENCES dom(did),
  UNIQUE (wid, did)
);

CREATE TABLE wreg (
  xid   INTEGER PRIMARY KEY ASC,
  wid   INTEGER NOT NULL REFERENCES word(wid),
  rid   INTEGER NOT NULL REFERENCES reg(rid),
  UNIQUE (wid, rid)
);

CREATE TABLE wflag (
  yid   INTEGER PRIMARY KEY ASC,
  wid   INTEGER NOT NULL REFERENCES word(wid),
  fid   INTEGER NOT NULL REFERENCES gflag(fid),
  UNIQUE (wid, fid)
);

CREATE TABLE infl (
  iid   INTEGER PRIMARY KEY ASC,
  wid   INTEGER NOT NULL REFERENCES word(wid),
  icode TEXT NOT NULL,
  iord  INTEGER NOT NULL,
  iform TEXT NOT NULL,
  grade INTEGER NOT NULL,
  UNIQUE (wid, icode, iord)
);

CREATE INDEX ix_infl_wid ON infl(wid);
CREATE INDEX ix_infl_icode ON infl(icode);

CREATE TABLE ireg (
  qid   INTEGER PRIMARY KEY ASC,
  iid   INTEGER NOT NULL REFERENCES infl(iid),
  rid   INTEGER NOT NULL REFERENCES reg(rid),
  UNIQUE (iid, rid)
);

CREATE TABLE iflag (
  nid   INTEGER PRIMARY KEY ASC,
  iid   INTEGER NOT NULL REFERENCES infl(iid),
  jid   INTEGER NOT NULL REFERENCES ival(jid),
  UNIQUE (iid, jid)
);

CREATE TABLE mixverb (
  mvid  INTEGER PRIMARY KEY ASC,
  inf   TEXT UNIQUE NOT NULL,
  pres  TEXT NOT NULL,
  opt   INTEGER NOT NULL
);
"""

# Lookup tables: table name -> (id column, text column)
LOOKUP_TABLES: Dict[str, Tuple[str, str]] = {
    "wclass": ("cid", "ctx"),
    "dom": ("did", "dtx"),
    "reg": ("rid", "rtx"),
    "gflag": ("fid", "ftx"),
    "ival": ("jid", "jtx"),
}

# Tables that can be checked for emptiness
DATA_TABLES = frozenset(
    ("word", "wdom", "wreg", "wflag", "infl", "ireg", "iflag", "mixverb")
)


class TableCounts(TypedDict):

    """ Row counts of the data tables, as returned by BeygjaDb.stats() """

    word: int
    wdom: int
    wreg: int
    wflag: int
    infl: int
    ireg: int
    iflag: int
    mixverb: int


class DbError(BeygjaError):
    """Exception class for database errors"""


class BeygjaDb:

    """An SQLite database holding DIM words and verb inflections"""

    def __init__(self, path: str, conn: sqlite3.Connection) -> None:
        self._path = path
        self._conn: Optional[sqlite3.Connection] = conn
        # Nesting level and mode of the current work block
        self._nest = 0
        self._mode = ""
        # Cache of lookup codes, per table
        self._lookup: Dict[str, Dict[str, int]] = {}

    @staticmethod
    def _connect(path: str) -> sqlite3.Connection:
        # Transactions are managed explicitly by work blocks
        conn = sqlite3.connect(path, isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @classmethod
    def create(cls, path: str) -> "BeygjaDb":
        """Create a new database with an empty schema"""
        if os.path.exists(path):
            raise DbError("Database path '{0}' already exists".format(path))
        db = cls(path, cls._connect(path))
        with db.work("rw") as conn:
            for statement in SCHEMA.split(";"):
                if statement.strip():
                    conn.execute(statement)
        logger.info("Created database '%s'", path)
        return db

    @classmethod
    def open(cls, path: str) -> "BeygjaDb":
        """Open an existing database"""
        if not os.path.isfile(path):
            raise DbError("Database path '{0}' does not exist".format(path))
        return cls(path, cls._connect(path))

    @property
    def path(self) -> str:
        return self._path

    def close(self) -> None:
        if self._nest > 0:
            raise DbError("Can't close database with an active work block")
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "BeygjaDb":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise DbError("Database '{0}' is closed".format(self._path))
        return self._conn

    @contextmanager
    def work(self, mode: str = "r") -> Iterator[sqlite3.Connection]:
        """A (possibly nested) work block, yielding the connection"""
        if mode not in ("r", "rw"):
            raise DbError("Invalid work block mode '{0}'".format(mode))
        conn = self._connection()
        if self._nest > 0:
            if mode == "rw" and self._mode == "r":
                raise DbError("Can't write when active transaction is read-only")
            self._nest += 1
            try:
                yield conn
            finally:
                self._nest -= 1
            return
        conn.execute(
            "BEGIN IMMEDIATE TRANSACTION" if mode == "rw" else "BEGIN DEFERRED TRANSACTION"
        )
        self._nest = 1
        self._mode = mode
        try:
            yield conn
        except BaseException:
            self._nest = 0
            self._mode = ""
            conn.execute("ROLLBACK TRANSACTION")
            # Cached lookup ids may refer to rolled back rows
            self._lookup = {}
            raise
        self._nest = 0
        self._mode = ""
        conn.execute("COMMIT TRANSACTION")

    # Lookup tables

    def _lookup_cache(self, table: str) -> Dict[str, int]:
        if table not in LOOKUP_TABLES:
            raise DbError("Unknown lookup table '{0}'".format(table))
        cache = self._lookup.get(table)
        if cache is None:
            id_col, tx_col = LOOKUP_TABLES[table]
            with self.work("r") as conn:
                cache = {
                    tx: ix
                    for ix, tx in conn.execute(
                        "SELECT {0}, {1} FROM {2}".format(id_col, tx_col, table)
                    )
                }
            self._lookup[table] = cache
        return cache

    def find_code(self, table: str, code: str) -> Optional[int]:
        """Return the id of a code in a lookup table, or None"""
        return self._lookup_cache(table).get(code)

    def code_id(self, table: str, code: str, level: int = 0) -> int:
        """Return the id of a code in a lookup table, adding the
        code if it is not already present. The level only applies
        to domains."""
        cache = self._lookup_cache(table)
        ix = cache.get(code)
        if ix is not None:
            return ix
        with self.work("rw") as conn:
            if table == "dom":
                cur = conn.execute(
                    "INSERT INTO dom (dtx, dlv) VALUES (?,?)", (code, level)
                )
            else:
                _, tx_col = LOOKUP_TABLES[table]
                cur = conn.execute(
                    "INSERT INTO {0} ({1}) VALUES (?)".format(table, tx_col), (code,)
                )
            ix = cur.lastrowid
        cache[code] = ix
        return ix

    def is_empty(self, table: str) -> bool:
        if table not in DATA_TABLES and table not in LOOKUP_TABLES:
            raise DbError("Unknown table '{0}'".format(table))
        with self.work("r") as conn:
            row = conn.execute("SELECT 1 FROM {0} LIMIT 1".format(table)).fetchone()
        return row is None

    # Words

    def word_id(self, dim_id: int) -> Optional[int]:
        """Return the word key for a DIM id, or None"""
        with self.work("r") as conn:
            row = conn.execute(
                "SELECT wid FROM word WHERE wbid=?", (dim_id,)
            ).fetchone()
        return None if row is None else row[0]

    def insert_word(
        self,
        dim_id: int,
        headword: str,
        wclass: str,
        compound: bool,
        grade: int,
        visibility: int,
        syllables: int,
        domains: Sequence[int] = (),
        registers: Sequence[int] = (),
        gflags: Sequence[int] = (),
    ) -> int:
        """Insert a word record and its associations, returning its key"""
        cid = self.code_id("wclass", wclass)
        with self.work("rw") as conn:
            cur = conn.execute(
                "INSERT INTO word (wbid, wlem, cid, wcp, grade, wvs, wsy) "
                "VALUES (?,?,?,?,?,?,?)",
                (dim_id, headword, cid, int(compound), grade, visibility, syllables),
            )
            wid = cur.lastrowid
            conn.executemany(
                "INSERT INTO wdom (wid, did) VALUES (?,?)", [(wid, d) for d in domains]
            )
            conn.executemany(
                "INSERT INTO wreg (wid, rid) VALUES (?,?)", [(wid, r) for r in registers]
            )
            conn.executemany(
                "INSERT INTO wflag (wid, fid) VALUES (?,?)", [(wid, f) for f in gflags]
            )
        return wid

    def headword(self, wid: int) -> Optional[str]:
        with self.work("r") as conn:
            row = conn.execute("SELECT wlem FROM word WHERE wid=?", (wid,)).fetchone()
        return None if row is None else row[0]

    def verb_ids_by_headword(self, headword: str) -> List[int]:
        """Return the keys of all verbs with the given headword"""
        with self.work("r") as conn:
            return [
                r[0]
                for r in conn.execute(
                    "SELECT wid FROM word INNER JOIN wclass ON wclass.cid = word.cid "
                    "WHERE wlem=? AND ctx=? ORDER BY wid",
                    (headword, VERB_CLASS),
                )
            ]

    def stem_syllables(self, wid: int) -> Optional[int]:
        """Return the recorded stem syllable count of a word,
        or None if it is unknown"""
        with self.work("r") as conn:
            row = conn.execute("SELECT wsy FROM word WHERE wid=?", (wid,)).fetchone()
        if row is None:
            raise DbError("Failed to query word key {0}".format(wid))
        return row[0] if row[0] >= 1 else None

    def word_list(
        self,
        collator: Collator,
        default_grade: int,
        kind: str = "core",
        wclass: str = VERB_CLASS,
    ) -> List[Tuple[str, int]]:
        """Return (headword, key) tuples of the words in a word set,
        sorted by headword. The core set holds the words of the default
        grade with core visibility that have no register and are not
        proper names."""
        if kind != "core":
            raise DbError("Unsupported word list set code '{0}'".format(kind))
        with self.work("r") as conn:
            rows: List[Tuple[str, int]] = [
                (r[0], r[1])
                for r in conn.execute(
                    "SELECT wlem, wid FROM word "
                    "INNER JOIN wclass ON wclass.cid = word.cid "
                    "WHERE ctx=? AND grade=? AND wvs=? "
                    "AND wid NOT IN (SELECT wid FROM wreg) "
                    "AND wid NOT IN ("
                    "SELECT wid FROM wdom INNER JOIN dom ON dom.did = wdom.did "
                    "WHERE dom.dlv=?) ORDER BY wid",
                    (wclass, default_grade, VISIBILITY_CORE, DOMAIN_LEVEL_NAME),
                )
            ]
        return collator.sort(rows, key=lambda r: r[0])

    # Inflections

    def max_order(self, wid: int, code: str, lo: int, hi: int) -> Optional[int]:
        """Return the highest order in [lo, hi) stored for a word and code"""
        with self.work("r") as conn:
            row = conn.execute(
                "SELECT MAX(iord) FROM infl "
                "WHERE wid=? AND icode=? AND iord>=? AND iord<?",
                (wid, code, lo, hi),
            ).fetchone()
        return None if row is None else row[0]

    def insert_inflection(
        self,
        wid: int,
        code: str,
        order: int,
        form: str,
        grade: int,
        registers: Sequence[int] = (),
        values: Sequence[int] = (),
    ) -> int:
        with self.work("rw") as conn:
            cur = conn.execute(
                "INSERT INTO infl (wid, icode, iord, iform, grade) VALUES (?,?,?,?,?)",
                (wid, code, order, form, grade),
            )
            iid = cur.lastrowid
            conn.executemany(
                "INSERT INTO ireg (iid, rid) VALUES (?,?)", [(iid, r) for r in registers]
            )
            conn.executemany(
                "INSERT INTO iflag (iid, jid) VALUES (?,?)", [(iid, v) for v in values]
            )
        return iid

    def inflections(self, wid: int, default_grade: int) -> List[InflectionRecord]:
        """Return the accepted inflection records of a word: those of
        the default grade that have no register and are not only used
        in idioms, with their dominance flags"""
        rik = self.find_code("ival", IVAL_DOMINANT)
        osb = self.find_code("ival", IVAL_IDIOM_ONLY)
        # Ids that never occur if the values are not in the database
        rik = -1 if rik is None else rik
        osb = -1 if osb is None else osb
        with self.work("r") as conn:
            return [
                InflectionRecord(r[0], r[1], r[2] is not None)
                for r in conn.execute(
                    "SELECT infl.icode, infl.iform, t2.nid FROM infl "
                    "LEFT OUTER JOIN iflag AS t2 "
                    "ON ((t2.iid = infl.iid) AND (t2.jid = ?)) "
                    "LEFT OUTER JOIN iflag AS t3 "
                    "ON ((t3.iid = infl.iid) AND (t3.jid = ?)) "
                    "WHERE wid=? AND grade=? "
                    "AND infl.iid NOT IN (SELECT iid FROM ireg) "
                    "AND t3.nid IS NULL "
                    "ORDER BY infl.icode, infl.iord",
                    (rik, osb, wid, default_grade),
                )
            ]

    def past_forms(self, wid: int, code: str) -> List[str]:
        """Return all recorded forms of a word whose code ends with
        the given code, i.e. including prefixed codes"""
        with self.work("r") as conn:
            return [
                r[0]
                for r in conn.execute(
                    "SELECT iform FROM infl WHERE wid=? AND icode LIKE ?",
                    (wid, "%" + code),
                )
            ]

    def infinitives(self, kind: str) -> List[str]:
        """Return the distinct infinitives of the given kind:
        'active', 'middle' or 'past'"""
        code = INFINITIVE_CODES.get(kind)
        if code is None:
            raise DbError("Unknown infinitive type '{0}'".format(kind))
        with self.work("r") as conn:
            return [
                r[0]
                for r in conn.execute(
                    "SELECT DISTINCT iform FROM infl WHERE icode=?", (code,)
                )
            ]

    # Mixed verbs

    def insert_mixed_verb(self, infinitive: str, present: str, optional: bool) -> None:
        with self.work("rw") as conn:
            conn.execute(
                "INSERT INTO mixverb (inf, pres, opt) VALUES (?,?,?)",
                (infinitive, present, int(optional)),
            )

    def mixed_verbs(self) -> List[str]:
        """Return the infinitives of all mixed verbs"""
        with self.work("r") as conn:
            return [r[0] for r in conn.execute("SELECT inf FROM mixverb")]

    def stats(self) -> TableCounts:
        """Return the number of rows in each data table"""
        with self.work("r") as conn:

            def count(table: str) -> int:
                return conn.execute(
                    "SELECT COUNT(*) FROM {0}".format(table)
                ).fetchone()[0]

            return TableCounts(
                word=count("word"),
                wdom=count("wdom"),
                wreg=count("wreg"),
                wflag=count("wflag"),
                infl=count("infl"),
                ireg=count("ireg"),
                iflag=count("iflag"),
                mixverb=count("mixverb"),
            )
