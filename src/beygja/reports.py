"""

    Beygja: Icelandic verb inflection tools

    Reports module

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

    This module produces the verb listings of the command line tool.

"""

from typing import Dict, Iterable, Iterator, List, Tuple

from .basics import BeygjaError, Collator
from .classify import MIDDLE_SUFFIX
from .compare import CheckResult, FiniteChecker
from .db import BeygjaDb
from .paradigm import ParadigmValue, build_paradigm
from .verbcode import TagFailure, VerbCode, VerbCodeMapper, split_order


class ReportError(BeygjaError):

    """An error in the input of a report"""

    def __init__(self, msg: str, line: int = 0) -> None:
        super().__init__(msg)
        self.line = line

    def __str__(self) -> str:
        s = Exception.__str__(self)
        if not self.line:
            return s
        return "Line {0}: {1}".format(self.line, s)


def verb_paradigm(
    db: BeygjaDb, wid: int, collator: Collator, default_grade: int
) -> Dict[str, ParadigmValue]:
    """Build the paradigm of a verb in the database"""
    return build_paradigm(db.inflections(wid, default_grade), collator)


def conjugation(
    db: BeygjaDb, wid: int, collator: Collator, default_grade: int
) -> List[Tuple[str, List[str]]]:
    """The filtered forms of a verb, sorted by verb code"""
    paradigm = verb_paradigm(db, wid, collator, default_grade)
    return [
        (code, [value] if isinstance(value, str) else list(value))
        for code, value in sorted(paradigm.items())
    ]


def strong_verbs(db: BeygjaDb, collator: Collator, default_grade: int) -> List[str]:
    """Return the strong verbs of the core word list, sorted. Unlike the
    paradigm checks, all recorded past tense forms are examined,
    including those of impersonal constructions."""
    result: List[str] = []
    with db.work("r"):
        for headword, wid in db.word_list(collator, default_grade):
            if headword.endswith(MIDDLE_SUFFIX):
                forms = db.past_forms(wid, "Fmip3v")
                ending = "i" + MIDDLE_SUFFIX
            else:
                forms = db.past_forms(wid, "Faip3v")
                ending = "i"
            if any(not f.endswith(ending) for f in forms):
                result.append(headword)
    return collator.sort(result)


def multi_variant_verbs(
    db: BeygjaDb, collator: Collator, default_grade: int
) -> Iterator[Tuple[str, List[Tuple[str, List[str]]]]]:
    """Yield the verbs of the core word list that have variant forms,
    along with the codes that have variants"""
    with db.work("r"):
        for headword, wid in db.word_list(collator, default_grade):
            paradigm = verb_paradigm(db, wid, collator, default_grade)
            multi = [
                (code, list(value))
                for code, value in sorted(paradigm.items())
                if not isinstance(value, str)
            ]
            if multi:
                yield headword, multi


def sorted_infinitives(db: BeygjaDb, collator: Collator, kind: str) -> List[str]:
    """Return the distinct infinitives of a kind, sorted from the
    end of the word to the front"""
    reversed_infs = [inf[::-1] for inf in db.infinitives(kind)]
    return [inf[::-1] for inf in collator.sort(reversed_infs)]


def check_finite(
    db: BeygjaDb, checker: FiniteChecker, collator: Collator, default_grade: int
) -> Iterator[CheckResult]:
    """Check the finite forms of all verbs in the core word list"""
    with db.work("r"):
        for headword, wid in db.word_list(collator, default_grade):
            paradigm = verb_paradigm(db, wid, collator, default_grade)
            yield checker.check(headword, wid, paradigm, db.stem_syllables(wid))


def _tag_lines(lines: Iterable[str]) -> Iterator[Tuple[int, str]]:
    """Yield (line number, tag) for the non-blank lines of a tag list"""
    for n, s in enumerate(lines, start=1):
        if n == 1:
            s = s.lstrip("\ufeff")
        s = s.strip()
        if s:
            yield n, s


def check_tags(
    lines: Iterable[str], mapper: VerbCodeMapper
) -> Iterator[Tuple[str, VerbCode]]:
    """Convert each tag in a list, yielding the tag and its conversion.
    Raises ReportError if a tag does not convert, or if two
    different tags convert to the same code and order."""
    seen: Dict[VerbCode, str] = {}
    for n, tag in _tag_lines(lines):
        vc = mapper.map_tag(tag)
        if isinstance(vc, TagFailure):
            raise ReportError("Conversion failed for '{0}': {1}".format(tag, vc.reason), n)
        other = seen.setdefault(vc, tag)
        if other != tag:
            raise ReportError(
                "Conversion conflict '{0}' and '{1}'".format(tag, other), n
            )
        yield tag, vc


def tag_elements(lines: Iterable[str]) -> List[str]:
    """Return the sorted distinct elements of the tags in a list"""
    elements = set()
    for n, tag in _tag_lines(lines):
        body, _ = split_order(tag)
        if not body:
            raise ReportError("Invalid tag", n)
        elements.update(VerbCodeMapper.elements(tag))
    return sorted(elements)
