"""

    Beygja: Icelandic verb inflection tools

    Basic classes module

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


    This module contains basic functions and classes that are used by
    the other modules: the Icelandic alphabet, Icelandic collation,
    the exception hierarchy and the configuration line reader.
    They have been collected here to avoid circular imports.

"""

from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
)

import os
import locale

from contextlib import contextmanager
import importlib.resources as importlib_resources


# The locale used by default for Icelandic collation
_DEFAULT_LOCALE = "is_IS.UTF-8"

# The lowercase Icelandic letters, in Icelandic alphabetical order.
# The letters c, q, w and z only occur in loanwords but they are
# accepted in headwords and forms.
ICELANDIC_ALPHABET = "aábcdðeéfghiíjklmnoópqrstuúvwxyýzþæö"
ICELANDIC_LETTERS = frozenset(ICELANDIC_ALPHABET)

# Vowels, as seen by the U-shift nucleus scanner
VOWELS = frozenset("aeiouyáéíóúýæö")

# DIM word class of verbs
VERB_CLASS = "so"

_ALPHABET_ORDER: Dict[str, int] = {c: ix for ix, c in enumerate(ICELANDIC_ALPHABET)}
_ALPHABET_SIZE = len(ICELANDIC_ALPHABET)


def is_icelandic(s: Any) -> bool:
    """Return True if s is a non-empty string of lowercase Icelandic letters"""
    return isinstance(s, str) and bool(s) and all(c in ICELANDIC_LETTERS for c in s)


@contextmanager
def changedlocale(
    new_locale: Optional[str] = None, category: str = "LC_COLLATE"
) -> Iterator[Callable[[str], str]]:
    """Change locale for collation temporarily within a context (with-statement)"""
    # The category should be a string such as 'LC_TIME', 'LC_NUMERIC' etc.
    cat = getattr(locale, category)
    old_locale = locale.setlocale(cat)
    # Raises locale.Error if the locale is not installed
    locale.setlocale(cat, new_locale or _DEFAULT_LOCALE)
    try:
        yield locale.strxfrm  # Function to transform string for sorting
    finally:
        locale.setlocale(cat, old_locale)


def _alphabet_key(s: str) -> Tuple[Tuple[int, ...], str]:
    """Sort key based on the Icelandic alphabet, for systems
    where the Icelandic locale is not installed"""
    return (
        tuple(_ALPHABET_ORDER.get(c, _ALPHABET_SIZE + ord(c)) for c in s.lower()),
        s,
    )


class Collator:

    """Icelandic collation of strings. Uses the Icelandic locale
    if the system has it, otherwise a sort key derived from the
    Icelandic alphabet."""

    def __init__(self, loc: Optional[str] = None) -> None:
        self._locale = loc or _DEFAULT_LOCALE
        try:
            with changedlocale(self._locale):
                pass
            self._has_locale = True
        except locale.Error:
            self._has_locale = False

    @property
    def uses_locale(self) -> bool:
        return self._has_locale

    def key(self, s: str) -> Any:
        """Return a sort key for the string s"""
        if self._has_locale:
            with changedlocale(self._locale) as strxfrm:
                return (strxfrm(s), s)
        return _alphabet_key(s)

    def sort(
        self, strings: Iterable[str], *, key: Optional[Callable[[Any], str]] = None
    ) -> List[Any]:
        """Return the given items sorted in Icelandic order. If key is
        given, it extracts the string to collate from each item."""
        get = key or (lambda x: x)
        if self._has_locale:
            with changedlocale(self._locale) as strxfrm:
                return sorted(strings, key=lambda x: (strxfrm(get(x)), get(x)))
        return sorted(strings, key=lambda x: _alphabet_key(get(x)))

    def compare(self, a: str, b: str) -> int:
        """Return -1, 0 or 1 as a sorts before, with or after b"""
        ka = self.key(a)
        kb = self.key(b)
        return (ka > kb) - (ka < kb)


def sort_strings(strings: Iterable[str], loc: Optional[str] = None) -> List[str]:
    """Sort a list of strings using Icelandic collation order"""
    return Collator(loc).sort(strings)


class BeygjaError(Exception):
    """Base class for errors raised by this package"""


class ConfigError(BeygjaError, ValueError):
    """Exception class for configuration errors"""

    def __init__(self, s: str) -> None:
        super().__init__(s)
        self.fname: Optional[str] = None
        self.line = 0

    def set_pos(self, fname: str, line: int) -> None:
        """Set file name and line information, if not already set"""
        if not self.fname:
            self.fname = fname
            self.line = line

    def __str__(self) -> str:
        """Return a string representation of this exception"""
        s = Exception.__str__(self)
        if not self.fname:
            return s
        return "File {0}, line {1}: {2}".format(self.fname, self.line, s)


class LineReader:
    """Read lines from a text file, recognizing $include directives"""

    def __init__(
        self,
        fname: str,
        *,
        package_name: Optional[str] = None,
        outer_fname: Optional[str] = None,
        outer_line: int = 0
    ) -> None:
        self._fname = fname
        self._package_name = package_name
        self._line = 0
        self._inner_rdr: Optional[LineReader] = None
        self._outer_fname = outer_fname
        self._outer_line = outer_line

    def fname(self) -> str:
        """The name of the file being read"""
        return self._fname if self._inner_rdr is None else self._inner_rdr.fname()

    def line(self) -> int:
        """The number of the current line within the file"""
        return self._line if self._inner_rdr is None else self._inner_rdr.line()

    def lines(self) -> Iterator[str]:
        """Generator yielding lines from a text file"""
        self._line = 0
        try:
            if self._package_name:
                ref = importlib_resources.files("beygja").joinpath(self._fname)
                stream = ref.open("rb")
            else:
                stream = open(self._fname, "rb")
            with stream as inp:
                accumulator = ""
                for b in inp:
                    s = b.decode("utf-8-sig" if self._line == 0 else "utf-8")
                    self._line += 1
                    if s.rstrip().endswith("\\"):
                        # Backslash at end of line: continuation in next line
                        accumulator += s.strip()[:-1]
                        continue
                    if accumulator:
                        s = accumulator + s.lstrip()
                        accumulator = ""
                    # Check for include directive: $include filename.conf
                    if s.startswith("$") and s.lower().startswith("$include "):
                        iname = s.split(maxsplit=1)[1].strip()
                        # The included path is relative to the current file
                        head, _ = os.path.split(self._fname)
                        iname = os.path.join(head, iname)
                        rdr = self._inner_rdr = LineReader(
                            iname,
                            package_name=self._package_name,
                            outer_fname=self._fname,
                            outer_line=self._line,
                        )
                        yield from rdr.lines()
                        self._inner_rdr = None
                    else:
                        yield s
                if accumulator:
                    # Last line of file ends with a backslash
                    yield accumulator
        except (IOError, OSError):
            if self._outer_fname:
                c = ConfigError(
                    "Error while opening or reading include file '{0}'".format(
                        self._fname
                    )
                )
                c.set_pos(self._outer_fname, self._outer_line)
            else:
                c = ConfigError(
                    "Error while opening or reading config file '{0}'".format(
                        self._fname
                    )
                )
            raise c
