"""

    test_stems.py

    Tests for the stem alternations

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

from beygja.stems import j_stem, u_shift


def test_u_shift() -> None:
    assert u_shift("kall", 1) == "köll"
    assert u_shift("kallað", 3) == "kölluð"
    assert u_shift("kallað", 2) == "kölluð"
    assert u_shift("kallað", 1) == "kallöð"
    assert u_shift("dansað", 2) == "dönsuð"
    assert u_shift("tala", 2) == "tölu"
    assert u_shift("tala", 1) == "talö"
    # The base nucleus is clamped to the first one
    assert u_shift("kall", 5) == "köll"


def test_u_shift_digraphs() -> None:
    # Digraphs count as one nucleus and are restored afterwards
    assert u_shift("heyr", 1) == "heyr"
    assert u_shift("sauma", 2) == "saumu"
    assert u_shift("leiga", 1) == "leigö"
    assert u_shift("baula", 1) == "baulö"


def test_u_shift_without_a() -> None:
    assert u_shift("heyrð", 1) == "heyrð"
    assert u_shift("fylgj", 1) == "fylgj"
    assert u_shift("lif", 3) == "lif"


def test_u_shift_contract() -> None:
    with pytest.raises(ValueError):
        u_shift("Kall", 1)
    with pytest.raises(ValueError):
        u_shift("", 1)
    with pytest.raises(ValueError):
        u_shift("kall ", 1)
    with pytest.raises(ValueError):
        u_shift("kall", 0)
    with pytest.raises(ValueError):
        u_shift("kall", -1)


def test_j_stem() -> None:
    assert j_stem("fylgj") == "fylg"
    assert j_stem("sækj") == "sæk"
    assert j_stem("flýj") == "flý"
    assert j_stem("heyj") == "hey"
    assert j_stem("eyj") == "ey"
    assert j_stem("temj") == "temj"
    assert j_stem("heyr") == "heyr"
    assert j_stem("kall") == "kall"
