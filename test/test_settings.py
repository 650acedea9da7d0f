"""

    test_settings.py

    Tests for the configuration reader

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

from beygja.basics import ConfigError
from beygja.settings import (
    DOMAIN_COMMON,
    DOMAIN_NAME,
    DOMAIN_SPECIALIZED,
    Domains,
    MixedVerb,
    MixedVerbs,
    Settings,
)


@pytest.fixture
def restore():
    """Reload the packaged configuration after a test"""
    yield
    Settings.read(force=True)


def write(tmp_path, text: str) -> str:
    path = tmp_path / "test.conf"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_packaged_config() -> None:
    Settings.read()
    assert Settings.loaded
    assert Settings.DEFAULT_GRADE == 1
    assert Settings.STATUS_INTERVAL == 5.0
    assert Domains.level("ism") == DOMAIN_NAME
    assert Domains.level("tölv") == DOMAIN_SPECIALIZED
    assert Domains.level("alm") == DOMAIN_COMMON
    infs = [mv.infinitive for mv in MixedVerbs.LIST]
    assert "selja" in infs
    assert "vilja" in infs
    assert MixedVerb("skilja", "skilur", True) in MixedVerbs.LIST
    assert MixedVerb("selja", "selur", False) in MixedVerbs.LIST


def test_file_config(tmp_path, restore) -> None:
    inc = tmp_path / "inc.conf"
    inc.write_text("[mixed_verbs]\nvelja velur\n", encoding="utf-8")
    fname = write(
        tmp_path,
        "# Test\n"
        "[settings]\n"
        "database = /tmp/x.db  # comment\n"
        "status_interval = 0.5\n"
        "default_grade = 2\n"
        "locale = C\n"
        "[name_domains]\n"
        "ism \\\n"
        "  föð\n"
        "[ mixed_verbs ]\n"
        "selja selur optional\n"
        "$include inc.conf\n",
    )
    Settings.read(fname, force=True, package=False)
    assert Settings.DATABASE == "/tmp/x.db"
    assert Settings.STATUS_INTERVAL == 0.5
    assert Settings.DEFAULT_GRADE == 2
    assert Settings.LOCALE == "C"
    assert Domains.level("föð") == DOMAIN_NAME
    assert Domains.level("tölv") == DOMAIN_COMMON
    assert MixedVerbs.LIST == [
        MixedVerb("selja", "selur", True),
        MixedVerb("velja", "velur", False),
    ]


def test_database_env(tmp_path, restore, monkeypatch) -> None:
    Settings.read(write(tmp_path, "[settings]\ndatabase = a.db\n"), True, False)
    monkeypatch.delenv("BEYGJA_DB", raising=False)
    assert Settings.database() == "a.db"
    monkeypatch.setenv("BEYGJA_DB", "b.db")
    assert Settings.database() == "b.db"


@pytest.mark.parametrize(
    "text,message,line",
    [
        ("[settings]\ncolour = blue\n", "Unknown configuration parameter 'colour'", 2),
        ("[settings]\ndefault_grade = 9\n", "Invalid parameter value: default_grade = 9", 2),
        ("[settings]\nstatus_interval = -1\n", "Invalid parameter value: status_interval = -1", 2),
        ("[settings]\ndatabase\n", "Expected 'parameter = value'", 2),
        ("[nonsense]\n", "Unknown section name 'nonsense'", 1),
        ("selja selur\n", "No handler for config line 'selja selur'", 1),
        ("[mixed_verbs]\nselja\n", "Expected 'infinitive present [optional]'", 2),
        ("[mixed_verbs]\nselja selur maybe\n", "Unknown mixed verb flag 'maybe'", 2),
        ("[mixed_verbs]\nSelja selur\n", "Invalid infinitive form 'Selja'", 2),
        ("[mixed_verbs]\nselja selur\n\nselja selur\n", "Mixed verb 'selja' is repeated", 4),
        (
            "[name_domains]\nism\n[specialized_domains]\nism\n",
            "Domain 'ism' is assigned more than one level",
            4,
        ),
    ],
)
def test_config_errors(tmp_path, restore, text: str, message: str, line: int) -> None:
    fname = write(tmp_path, text)
    with pytest.raises(ConfigError) as exc:
        Settings.read(fname, force=True, package=False)
    assert exc.value.fname == fname
    assert exc.value.line == line
    assert str(exc.value) == "File {0}, line {1}: {2}".format(fname, line, message)


def test_missing_file(tmp_path, restore) -> None:
    with pytest.raises(ConfigError):
        Settings.read(str(tmp_path / "nothere.conf"), force=True, package=False)
