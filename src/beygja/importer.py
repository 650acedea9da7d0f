"""

    Beygja: Icelandic verb inflection tools

    DIM import module

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

    This module imports the DIM Comprehensive Format files into
    a Beygja database:

    * import_words() reads the word file (Storasnid_ord.csv)
    * import_verbs() reads the verb records of the inflection file
      (Storasnid_beygm.csv), converting the DIM tags to verb codes
    * import_mixed_verbs() stores the configured mixed verbs

    Each import runs within a single read-write work block, so a
    failed import leaves the database unchanged.

"""

from typing import Callable, Iterable, List, Optional, Sequence

import time
import logging

from .basics import BeygjaError, VERB_CLASS
from .db import BeygjaDb
from .dimcsv import DimReader, parse_array
from .settings import Domains, MixedVerb, MAX_GRADE
from .verbcode import TagFailure, VerbCodeMapper


logger = logging.getLogger(__name__)

# Progress reporting callback, called with the fraction of lines read
ProgressFunc = Callable[[float], None]

# Check the clock once every this many lines at most
STATUS_COUNT = 1024

# Number of stored orders reserved for each DIM variant number
ORDER_BLOCK = 10

WORD_FIELDS = 13
INFLECTION_FIELDS = 8

# DIM visibility codes (Birting)
VISIBILITY_CODES = {"K": 0, "V": 1, "L": 2}

# DIM word formation codes: g(runnorð) = simple, s(amsett) = compound
FORMATION_CODES = {"g": False, "s": True}

# Misspelled grammar flags in DIM, and their corrections
GFLAG_CORRECTIONS = {"Í-I": "I-Í"}


class DimImportError(BeygjaError):

    """An error in a DIM CSV file, with the line number where it occurred"""

    def __init__(self, msg: str, line: int = 0) -> None:
        super().__init__(msg)
        self.line = line

    def __str__(self) -> str:
        s = Exception.__str__(self)
        if not self.line:
            return s
        return "CSV line {0}: {1}".format(self.line, s)


class _Progress:

    """Calls the progress function with the fraction of lines read,
    at most once per status interval"""

    def __init__(
        self, func: Optional[ProgressFunc], total: int, interval: float
    ) -> None:
        self._func = func
        self._total = max(total, 1)
        self._interval = interval
        self._last = time.monotonic()
        self._countdown_total = max(self._total // STATUS_COUNT, 1)
        self._countdown = self._countdown_total

    def update(self, lines_read: int) -> None:
        if self._func is None:
            return
        self._countdown -= 1
        if self._countdown > 0:
            return
        self._countdown = self._countdown_total
        now = time.monotonic()
        if now - self._last < self._interval:
            return
        self._last = now
        self._func(min(max(lines_read, 0), self._total) / self._total)

    def done(self) -> None:
        if self._func is not None:
            self._func(1.0)


def _require_empty(db: BeygjaDb, tables: Sequence[str]) -> None:
    for table in tables:
        if not db.is_empty(table):
            raise DimImportError("{0} table is not empty".format(table))


def _parse_int(s: str, what: str, line: int) -> int:
    if not s.isdigit() or not s.isascii():
        raise DimImportError("Invalid {0} field".format(what), line)
    return int(s)


def _parse_grade(s: str, line: int) -> int:
    grade = _parse_int(s, "grade", line)
    if grade > MAX_GRADE:
        raise DimImportError("Grade '{0}' out of range".format(grade), line)
    return grade


def _codes(
    db: BeygjaDb, table: str, codes: Sequence[str], what: str, line: int
) -> List[int]:
    """Convert array field elements to lookup table ids, checking for duplicates"""
    ids: List[int] = []
    for code in codes:
        if not code:
            raise DimImportError("Empty {0}".format(what), line)
        if table == "dom":
            ix = db.code_id(table, code, Domains.level(code))
        else:
            ix = db.code_id(table, code)
        if ix in ids:
            raise DimImportError("Duplicate {0}s".format(what), line)
        ids.append(ix)
    return ids


def import_words(
    db: BeygjaDb,
    path: str,
    skip: int = 0,
    progress_func: Optional[ProgressFunc] = None,
    status_interval: float = 5.0,
) -> int:
    """Import the DIM word file, returning the number of words imported"""
    count = 0
    with db.work("rw"), DimReader(path) as csv:
        _require_empty(db, ("word", "wdom", "wreg", "wflag"))
        csv.scan()
        logger.info("Total lines: %d", csv.count)
        progress = _Progress(progress_func, csv.count, status_interval)
        csv.skip(skip)
        for rec in csv:
            line = csv.line_number
            progress.update(line)
            if len(rec) < WORD_FIELDS:
                raise DimImportError("Record has too few fields", line)

            headword = rec[0]
            dim_id = _parse_int(rec[1], "ID", line)
            if db.word_id(dim_id) is not None:
                raise DimImportError("Duplicate ID field", line)
            wclass = rec[2]
            if not wclass:
                raise DimImportError("Missing word class", line)
            compound = FORMATION_CODES.get(rec[3])
            if compound is None:
                raise DimImportError(
                    "Unrecognized word formation '{0}'".format(rec[3]), line
                )
            domains = _codes(db, "dom", parse_array(rec[4]), "domain", line)
            grade = _parse_grade(rec[5], line)
            registers = _codes(db, "reg", parse_array(rec[6]), "register", line)
            gflags = _codes(
                db,
                "gflag",
                [GFLAG_CORRECTIONS.get(f, f) for f in parse_array(rec[7])],
                "grammar flag",
                line,
            )
            visibility = VISIBILITY_CODES.get(rec[8])
            if visibility is None:
                raise DimImportError(
                    "Unrecognized visibility '{0}'".format(rec[8]), line
                )
            syllables = _parse_int(rec[12] or "0", "syllable count", line)

            db.insert_word(
                dim_id,
                headword,
                wclass,
                compound,
                grade,
                visibility,
                syllables,
                domains,
                registers,
                gflags,
            )
            count += 1
        progress.done()
    logger.info("Imported %d words from '%s'", count, path)
    return count


def import_verbs(
    db: BeygjaDb,
    path: str,
    skip: int = 0,
    mapper: Optional[VerbCodeMapper] = None,
    progress_func: Optional[ProgressFunc] = None,
    status_interval: float = 5.0,
) -> int:
    """Import the verb records of the DIM inflection file, returning
    the number of inflections imported. The words must have been
    imported already."""
    if mapper is None:
        mapper = VerbCodeMapper()
    count = 0
    with db.work("rw"), DimReader(path) as csv:
        _require_empty(db, ("infl", "ireg", "iflag"))
        csv.scan()
        logger.info("Total lines: %d", csv.count)
        progress = _Progress(progress_func, csv.count, status_interval)
        csv.skip(skip)
        for rec in csv:
            line = csv.line_number
            progress.update(line)
            if len(rec) < INFLECTION_FIELDS:
                raise DimImportError("Record has too few fields", line)
            if rec[2] != VERB_CLASS:
                continue

            dim_id = _parse_int(rec[1], "ID", line)
            wid = db.word_id(dim_id)
            if wid is None:
                raise DimImportError(
                    "Can't find matching word ID '{0}'".format(dim_id), line
                )
            form = rec[3]
            tag = rec[4]
            result = mapper.map_tag(tag)
            if isinstance(result, TagFailure):
                raise DimImportError(
                    "Failed to convert inflection tag '{0}': {1}".format(
                        tag, result.reason
                    ),
                    line,
                )
            grade = _parse_grade(rec[5], line)
            registers = _codes(db, "reg", parse_array(rec[6]), "register", line)
            values = _codes(db, "ival", parse_array(rec[7]), "inflectional value", line)

            # Variants are stored in blocks of ten orders, so that
            # inconsistently numbered DIM variants do not collide
            base = result.order * ORDER_BLOCK
            max_ord = db.max_order(wid, result.code, base, base + ORDER_BLOCK)
            if max_ord is None:
                order = base
            elif max_ord < base + ORDER_BLOCK - 1:
                order = max_ord + 1
            else:
                raise DimImportError("Too many inflectional variants", line)

            db.insert_inflection(wid, result.code, order, form, grade, registers, values)
            count += 1
        progress.done()
    logger.info("Imported %d verb inflections from '%s'", count, path)
    return count


def import_mixed_verbs(db: BeygjaDb, entries: Iterable[MixedVerb]) -> int:
    """Store the mixed verbs, returning their number"""
    count = 0
    with db.work("rw"):
        _require_empty(db, ("mixverb",))
        for mv in entries:
            db.insert_mixed_verb(mv.infinitive, mv.present, mv.optional)
            count += 1
    logger.info("Imported %d mixed verbs", count)
    return count
