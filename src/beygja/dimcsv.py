"""

    Beygja: Icelandic verb inflection tools

    DIM CSV reader module

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

    This module reads CSV files in the DIM (BÍN) Comprehensive Format,
    such as Storasnid_ord.csv and Storasnid_beygm.csv.

    The files are UTF-8 encoded, optionally starting with a byte order
    mark, with LF or CR+LF line breaks. Fields are separated by
    semicolons and trimmed of spaces and tabs. Lines that are empty or
    only contain spaces and tabs are skipped. Some fields hold arrays
    of comma-separated values; use parse_array() to split those.

"""

from typing import IO, Iterator, List, Optional, Type

from types import TracebackType


_BLANK = " \t"


def parse_array(s: str) -> List[str]:
    """Split an array field into its trimmed elements. A field that only
    contains spaces and tabs is an empty array. Empty elements at the
    end of the array are dropped."""
    if not s.strip(_BLANK):
        return []
    result = [e.strip(_BLANK) for e in s.split(",")]
    while result and not result[-1]:
        result.pop()
    return result


def split_record(line: str) -> List[str]:
    """Split a line into trimmed fields, keeping trailing empty fields"""
    return [f.strip(_BLANK) for f in line.split(";")]


class DimReader:

    """Reads records from a DIM CSV file. Use as a context manager,
    or call close() when done."""

    def __init__(self, path: str) -> None:
        self._path = path
        self._f: Optional[IO[str]] = open(path, "r", encoding="utf-8-sig", newline=None)
        self._line = 0
        self._count: Optional[int] = None

    def __enter__(self) -> "DimReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._f is not None:
            self._f.close()
            self._f = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def line_number(self) -> int:
        """The number of the line most recently read or skipped,
        or zero if nothing has been read since opening or rewinding"""
        return self._line

    @property
    def count(self) -> int:
        """The total number of lines in the file, at least one.
        Only available after scan()."""
        if self._count is None:
            raise ValueError("The file has not been scanned")
        return self._count

    def _file(self) -> IO[str]:
        if self._f is None:
            raise ValueError("The CSV file '{0}' is closed".format(self._path))
        return self._f

    def rewind(self) -> None:
        self._file().seek(0)
        self._line = 0

    def scan(self) -> None:
        """Count the lines in the file, then rewind"""
        self.rewind()
        if self._count is None:
            f = self._file()
            n = sum(1 for _ in f)
            self._count = max(n, 1)
        self.rewind()

    def skip(self, n: int) -> None:
        """Skip n lines without parsing them, stopping early at the end of the file"""
        if n < 0:
            raise ValueError("Skip count must not be negative")
        f = self._file()
        for _ in range(n):
            if not f.readline():
                return
            self._line += 1

    def read_record(self) -> Optional[List[str]]:
        """Return the fields of the next non-blank line,
        or None at the end of the file"""
        f = self._file()
        while True:
            line = f.readline()
            if not line:
                return None
            self._line += 1
            line = line.rstrip("\n")
            if line.strip(_BLANK):
                return split_record(line)

    def __iter__(self) -> Iterator[List[str]]:
        while True:
            rec = self.read_record()
            if rec is None:
                return
            yield rec
