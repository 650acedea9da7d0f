"""

    test_verbcode.py

    Tests for the DIM tag to verb code conversion

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

from beygja.verbcode import (
    TagError,
    TagFailure,
    VerbCode,
    VerbCodeMapper,
    split_order,
)


@pytest.fixture(scope="module")
def m():
    """Provide a module-scoped tag mapper as a test fixture"""
    return VerbCodeMapper()


def test_split_order() -> None:
    assert split_order("GM-FH-NT-1P-ET") == ("GM-FH-NT-1P-ET", 1)
    assert split_order("OP-ÞGF-MM-VH-ÞT-3P-FT2") == ("OP-ÞGF-MM-VH-ÞT-3P-FT", 2)
    assert split_order("GM-BH-ST12") == ("GM-BH-ST", 12)
    assert split_order("3") == ("", 3)


def test_finite(m: VerbCodeMapper) -> None:
    assert m.map_tag("GM-FH-NT-1P-ET") == VerbCode("Fair1v", 1)
    assert m.map_tag("MM-FH-NT-1P-ET") == VerbCode("Fmir1v", 1)
    assert m.map_tag("GM-VH-ÞT-3P-FT") == VerbCode("Fasp3w", 1)
    assert m.map_tag("GM-FH-ÞT-2P-FT2") == VerbCode("Faip2w", 2)
    assert m.map_tag("SP-GM-FH-NT-2P-ET") == VerbCode("Qair2v", 1)


def test_nonfinite(m: VerbCodeMapper) -> None:
    assert m.map_tag("GM-NH") == VerbCode("Ia", 1)
    assert m.map_tag("MM-NH") == VerbCode("Im", 1)
    assert m.map_tag("GM-NH-ÞT") == VerbCode("Iap", 1)
    assert m.map_tag("GM-BH-ET") == VerbCode("Mav", 1)
    assert m.map_tag("GM-BH-ST") == VerbCode("Maz", 1)
    assert m.map_tag("GM-BH-ST2") == VerbCode("Maz", 2)
    assert m.map_tag("LHNT") == VerbCode("R", 1)
    assert m.map_tag("GM-SAGNB") == VerbCode("Sa", 1)
    assert m.map_tag("MM-SAGNB2") == VerbCode("Sm", 2)
    assert m.map_tag("LHÞT-SB-KK-NFET") == VerbCode("Ps1v4", 1)
    assert m.map_tag("LHÞT-VB-KVK-ÞGFFT") == VerbCode("Pi3w6", 1)


def test_impersonal(m: VerbCodeMapper) -> None:
    assert m.map_tag("OP-ÞGF-MM-VH-ÞT-3P-FT2") == VerbCode(",Fmsp3w", 2)
    assert m.map_tag("OP-ÞF-GM-FH-NT-1P-ET") == VerbCode(":Fair1v", 1)
    assert m.map_tag("OP-EF-GM-FH-ÞT-3P-FT") == VerbCode(";Faip3w", 1)
    assert m.map_tag("OP-það-GM-FH-NT-3P-ET") == VerbCode(".Fair3v", 1)
    # The impersonal marker alone contributes nothing
    assert m.map_tag("OP-GM-FH-NT-3P-ET") == VerbCode("Fair3v", 1)


def _reason(m: VerbCodeMapper, tag: str) -> str:
    result = m.map_tag(tag)
    assert isinstance(result, TagFailure)
    assert result.tag == tag
    return result.reason


def test_failures(m: VerbCodeMapper) -> None:
    assert _reason(m, "") == "empty tag"
    assert _reason(m, "2") == "empty tag"
    assert _reason(m, "GM-XX") == "unknown element 'XX'"
    assert _reason(m, "GM-MM-FH-NT-1P-ET") == "conflicting values in category 2"
    assert _reason(m, "KK-FH-NT-1P-ET-HK") == "conflicting values in category 5"
    assert _reason(m, "MM-NH-ÞT") == "category 4 not allowed for class I"
    assert _reason(m, "GM-FH-NT-1P") == "category 6 missing for class F"
    assert _reason(m, "OP-ÞGF-GM-NH") == "category 0 not allowed for class I"
    assert _reason(m, "GM-FH-NT-1P-ST") == "clipped number only allowed in 'Maz'"
    assert _reason(m, "MM-BH-ST") == "clipped number only allowed in 'Maz'"
    assert (
        _reason(m, "OP-það-GM-FH-NT-1P-ET")
        == "dummy subject requires 3rd person singular"
    )
    assert (
        _reason(m, "OP-það-GM-FH-NT-3P-FT")
        == "dummy subject requires 3rd person singular"
    )
    assert (
        _reason(m, "OP-ÞF-MM-FH-NT-3P-ET")
        == "oblique subject ':' requires active voice"
    )
    assert (
        _reason(m, "OP-EF-MM-FH-NT-3P-ET")
        == "oblique subject ';' requires active voice"
    )
    # A tag of separators only defaults to class F, which lacks
    # its mandatory categories
    assert _reason(m, "-") == "category 2 missing for class F"


def test_cache() -> None:
    m = VerbCodeMapper()
    assert len(m) == 0
    m.map_tag("GM-NH")
    m.map_tag("GM-NH")
    assert len(m) == 1
    m.map_tag("GM-XX")
    assert len(m) == 1
    m.map_tag("GM-FH-NT-1P-ET")
    assert len(m) == 2


def test_verb_code(m: VerbCodeMapper) -> None:
    assert m.verb_code("GM-NH") == ("Ia", 1)
    with pytest.raises(TagError) as exc:
        m.verb_code("GM-FH-NT-1P")
    assert exc.value.tag == "GM-FH-NT-1P"
    assert exc.value.reason == "category 6 missing for class F"
    # TagError is also a ValueError
    with pytest.raises(ValueError):
        m.verb_code("GM-XX")


def test_elements() -> None:
    assert VerbCodeMapper.elements("OP-ÞGF-MM-VH-ÞT-3P-FT2") == [
        "OP",
        "ÞGF",
        "MM",
        "VH",
        "ÞT",
        "3P",
        "FT",
    ]
    assert VerbCodeMapper.elements("GM--NH") == ["GM", "NH"]
