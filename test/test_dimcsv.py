"""

    test_dimcsv.py

    Tests for the DIM CSV reader

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

"""

import pytest

from beygja.dimcsv import DimReader, parse_array, split_record


def test_parse_array() -> None:
    assert parse_array("") == []
    assert parse_array(" \t ") == []
    assert parse_array("ism") == ["ism"]
    assert parse_array(" ism , föð ") == ["ism", "föð"]
    assert parse_array("ism,föð,,") == ["ism", "föð"]
    assert parse_array("ism,,föð") == ["ism", "", "föð"]


def test_split_record() -> None:
    assert split_record("kalla; 433568 ;so;") == ["kalla", "433568", "so", ""]
    assert split_record("a;;\tb\t;") == ["a", "", "b", ""]


def test_reader(tmp_path) -> None:
    path = tmp_path / "words.csv"
    path.write_bytes(
        "\ufeffkalla;1;so\r\n \t\r\nheyra;2;so\n\nsegja;3;so".encode("utf-8")
    )
    with DimReader(str(path)) as rdr:
        assert rdr.path == str(path)
        assert rdr.line_number == 0
        with pytest.raises(ValueError):
            rdr.count
        rdr.scan()
        assert rdr.count == 5
        assert rdr.line_number == 0
        assert rdr.read_record() == ["kalla", "1", "so"]
        assert rdr.line_number == 1
        assert rdr.read_record() == ["heyra", "2", "so"]
        assert rdr.line_number == 3
        assert list(rdr) == [["segja", "3", "so"]]
        assert rdr.line_number == 5
        assert rdr.read_record() is None
        rdr.rewind()
        rdr.skip(2)
        assert rdr.line_number == 2
        assert rdr.read_record() == ["heyra", "2", "so"]
        rdr.skip(100)
        assert rdr.line_number == 5
        with pytest.raises(ValueError):
            rdr.skip(-1)
    with pytest.raises(ValueError):
        rdr.read_record()


def test_empty_file(tmp_path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with DimReader(str(path)) as rdr:
        rdr.scan()
        assert rdr.count == 1
        assert list(rdr) == []
