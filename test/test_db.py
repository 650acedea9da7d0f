"""

    test_db.py

    Tests for the Beygja database

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

from beygja.basics import Collator
from beygja.db import BeygjaDb, DbError, VISIBILITY_CORE, VISIBILITY_EXTENDED


@pytest.fixture
def db(tmp_path):
    """Provide a new, empty database as a test fixture"""
    d = BeygjaDb.create(str(tmp_path / "test.db"))
    yield d
    d.close()


def test_create_and_open(tmp_path) -> None:
    path = str(tmp_path / "x.db")
    with pytest.raises(DbError):
        BeygjaDb.open(path)
    BeygjaDb.create(path).close()
    with pytest.raises(DbError):
        BeygjaDb.create(path)
    with BeygjaDb.open(path) as db:
        assert db.path == path
        assert db.is_empty("word")
        assert db.stats()["infl"] == 0


def test_work_blocks(db: BeygjaDb) -> None:
    with db.work("rw"):
        with db.work("r"):
            pass
        with db.work("rw"):
            pass
    with db.work("r"):
        with pytest.raises(DbError):
            with db.work("rw"):
                pass
    with pytest.raises(DbError):
        with db.work("x"):
            pass


def test_rollback(db: BeygjaDb) -> None:
    with pytest.raises(RuntimeError):
        with db.work("rw"):
            db.code_id("reg", "SKALD")
            db.insert_word(1, "kalla", "so", False, 1, VISIBILITY_CORE, 2)
            assert not db.is_empty("word")
            raise RuntimeError("abort")
    assert db.is_empty("word")
    assert db.find_code("reg", "SKALD") is None
    # The database is usable after the rollback
    with db.work("rw"):
        db.insert_word(1, "kalla", "so", False, 1, VISIBILITY_CORE, 2)
    assert db.word_id(1) is not None


def test_close_in_block(db: BeygjaDb) -> None:
    with db.work("r"):
        with pytest.raises(DbError):
            db.close()


def test_lookup_codes(db: BeygjaDb) -> None:
    assert db.find_code("dom", "ism") is None
    ix = db.code_id("dom", "ism", 2)
    assert db.code_id("dom", "ism", 2) == ix
    assert db.find_code("dom", "ism") == ix
    assert db.code_id("dom", "föð", 2) != ix
    with pytest.raises(DbError):
        db.find_code("nosuchtable", "x")
    with pytest.raises(DbError):
        db.is_empty("nosuchtable")


def test_words(db: BeygjaDb) -> None:
    collator = Collator()
    name = db.code_id("dom", "ism", 2)
    common = db.code_id("dom", "alm", 0)
    reg = db.code_id("reg", "URE")
    with db.work("rw"):
        w1 = db.insert_word(10, "kalla", "so", False, 1, VISIBILITY_CORE, 2, [common])
        w2 = db.insert_word(11, "ala", "so", False, 1, VISIBILITY_CORE, 0)
        db.insert_word(12, "Jón", "so", False, 1, VISIBILITY_CORE, 1, [name])
        db.insert_word(13, "forna", "so", False, 1, VISIBILITY_CORE, 1, [], [reg])
        db.insert_word(14, "hesta", "so", False, 1, VISIBILITY_EXTENDED, 1)
        db.insert_word(15, "ýta", "so", False, 2, VISIBILITY_CORE, 1)
        db.insert_word(16, "hestur", "kk", False, 1, VISIBILITY_CORE, 1)
        w8 = db.insert_word(17, "kalla", "so", True, 1, VISIBILITY_CORE, 1)
    assert db.word_id(10) == w1
    assert db.word_id(99) is None
    assert db.headword(w2) == "ala"
    assert db.headword(12345) is None
    assert db.verb_ids_by_headword("kalla") == [w1, w8]
    assert db.verb_ids_by_headword("hestur") == []
    assert db.stem_syllables(w1) == 2
    assert db.stem_syllables(w2) is None
    with pytest.raises(DbError):
        db.stem_syllables(12345)
    assert db.word_list(collator, 1) == [("ala", w2), ("kalla", w1), ("kalla", w8)]
    with pytest.raises(DbError):
        db.word_list(collator, 1, "all")


def test_inflections(db: BeygjaDb) -> None:
    rik = db.code_id("ival", "RIK")
    osb = db.code_id("ival", "OSB")
    reg = db.code_id("reg", "URE")
    with db.work("rw"):
        wid = db.insert_word(1, "hjálpa", "so", False, 1, VISIBILITY_CORE, 1)
        assert db.max_order(wid, "Faip3v", 10, 20) is None
        db.insert_inflection(wid, "Ia", 10, "hjálpa", 1)
        db.insert_inflection(wid, "Faip3v", 10, "hjálpaði", 1)
        db.insert_inflection(wid, "Faip3v", 11, "hjálpði", 1, values=[rik])
        db.insert_inflection(wid, "Faip3v", 12, "hjalpaði", 1, registers=[reg])
        db.insert_inflection(wid, "Faip3v", 13, "hjálpaðí", 1, values=[osb])
        db.insert_inflection(wid, "Faip3v", 14, "hjálfaði", 2)
        db.insert_inflection(wid, ":Faip3v", 10, "hjálpaði", 1)
    assert db.max_order(wid, "Faip3v", 10, 20) == 14
    assert db.max_order(wid, "Faip3v", 20, 30) is None
    records = db.inflections(wid, 1)
    assert [(r.code, r.form, r.dominant) for r in records] == [
        (":Faip3v", "hjálpaði", False),
        ("Faip3v", "hjálpaði", False),
        ("Faip3v", "hjálpði", True),
        ("Ia", "hjálpa", False),
    ]
    assert sorted(db.past_forms(wid, "Faip3v")) == sorted(
        ["hjálpaði", "hjálpði", "hjalpaði", "hjálpaðí", "hjálfaði", "hjálpaði"]
    )
    assert db.infinitives("active") == ["hjálpa"]
    assert db.infinitives("middle") == []
    with pytest.raises(DbError):
        db.infinitives("passive")


def test_mixed_verbs(db: BeygjaDb) -> None:
    db.insert_mixed_verb("selja", "selur", False)
    db.insert_mixed_verb("skilja", "skilur", True)
    assert sorted(db.mixed_verbs()) == ["selja", "skilja"]
    assert not db.is_empty("mixverb")
    assert db.stats()["mixverb"] == 2
