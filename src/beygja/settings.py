"""

    Beygja: Icelandic verb inflection tools

    Settings module

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


    This module is written in Python 3

    This module reads and interprets the Beygja.conf configuration
    file. The file can include other files using the $include
    directive, making it easier to arrange configuration sections
    into logical and manageable pieces.

    Sections are identified like so: [ section_name ]

    Comments start with # signs.

    Sections are interpreted by section handlers.

"""

from typing import Callable, Dict, List, NamedTuple, Optional, Set

import os
import threading

from .basics import ConfigError, LineReader, is_icelandic


# The configuration file within the package
DEFAULT_CONFIG = os.path.join("config", "Beygja.conf")

# Environment variable that overrides the database path
DB_ENV_VAR = "BEYGJA_DB"

# Domain levels
DOMAIN_COMMON = 0
DOMAIN_SPECIALIZED = 1
DOMAIN_NAME = 2

# Highest DIM grade
MAX_GRADE = 5


class MixedVerb(NamedTuple):
    infinitive: str
    present: str
    optional: bool


class Domains:

    """ Levels of semantic domains, from the [name_domains] and
        [specialized_domains] sections. Domains not listed there
        are common domains. """

    LEVELS: Dict[str, int] = dict()

    @staticmethod
    def add(domain: str, level: int) -> None:
        if domain in Domains.LEVELS and Domains.LEVELS[domain] != level:
            raise ConfigError(
                "Domain '{0}' is assigned more than one level".format(domain)
            )
        Domains.LEVELS[domain] = level

    @staticmethod
    def level(domain: str) -> int:
        """ Return the level of the given domain """
        return Domains.LEVELS.get(domain, DOMAIN_COMMON)


class MixedVerbs:

    """ The mixed verbs, from the [mixed_verbs] section """

    LIST: List[MixedVerb] = []
    _SEEN: Set[str] = set()

    @staticmethod
    def add(infinitive: str, present: str, optional: bool) -> None:
        if infinitive in MixedVerbs._SEEN:
            raise ConfigError("Mixed verb '{0}' is repeated".format(infinitive))
        MixedVerbs._SEEN.add(infinitive)
        MixedVerbs.LIST.append(MixedVerb(infinitive, present, optional))


class Settings:

    """ Global settings """

    _lock = threading.Lock()
    loaded: bool = False

    # Configuration settings from the Beygja.conf file

    DATABASE: str = "beygja.db"
    STATUS_INTERVAL: float = 5.0
    DEFAULT_GRADE: int = 1
    LOCALE: str = "is_IS.UTF-8"

    @staticmethod
    def database() -> str:
        """ Return the database path, which can be overridden
            by an environment variable """
        return os.environ.get(DB_ENV_VAR) or Settings.DATABASE

    @staticmethod
    def _handle_settings(s: str) -> None:
        """ Handle config parameters in the settings section """
        a = s.split("=", maxsplit=1)
        if len(a) != 2:
            raise ConfigError("Expected 'parameter = value'")
        par = a[0].strip().lower()
        val = a[1].strip()
        if par not in ("database", "status_interval", "default_grade", "locale"):
            raise ConfigError("Unknown configuration parameter '{0}'".format(par))
        try:
            if par == "database":
                Settings.DATABASE = val
            elif par == "status_interval":
                interval = float(val)
                if interval < 0.0:
                    raise ValueError
                Settings.STATUS_INTERVAL = interval
            elif par == "default_grade":
                grade = int(val)
                if not 0 <= grade <= MAX_GRADE:
                    raise ValueError
                Settings.DEFAULT_GRADE = grade
            else:
                Settings.LOCALE = val
        except ValueError:
            raise ConfigError("Invalid parameter value: {0} = {1}".format(par, val))

    @staticmethod
    def _handle_name_domains(s: str) -> None:
        """ Handle domains whose words are proper names """
        for domain in s.split():
            Domains.add(domain, DOMAIN_NAME)

    @staticmethod
    def _handle_specialized_domains(s: str) -> None:
        """ Handle specialized domains """
        for domain in s.split():
            Domains.add(domain, DOMAIN_SPECIALIZED)

    @staticmethod
    def _handle_mixed_verbs(s: str) -> None:
        """ Handle mixed verbs: infinitive present [optional] """
        a = s.split()
        if len(a) not in (2, 3):
            raise ConfigError("Expected 'infinitive present [optional]'")
        if len(a) == 3 and a[2] != "optional":
            raise ConfigError("Unknown mixed verb flag '{0}'".format(a[2]))
        infinitive, present = a[0], a[1]
        if not is_icelandic(infinitive):
            raise ConfigError("Invalid infinitive form '{0}'".format(infinitive))
        if not is_icelandic(present):
            raise ConfigError("Invalid present form '{0}'".format(present))
        MixedVerbs.add(infinitive, present, len(a) == 3)

    @staticmethod
    def _reset() -> None:
        Settings.DATABASE = "beygja.db"
        Settings.STATUS_INTERVAL = 5.0
        Settings.DEFAULT_GRADE = 1
        Settings.LOCALE = "is_IS.UTF-8"
        Domains.LEVELS = dict()
        MixedVerbs.LIST = []
        MixedVerbs._SEEN = set()

    @staticmethod
    def read(
        fname: Optional[str] = None, force: bool = False, package: bool = True
    ) -> None:
        """ Read configuration file. By default, the file is read
            from the package; if package is False, fname is a path
            in the file system. """

        with Settings._lock:

            if Settings.loaded and not force:
                return

            Settings._reset()

            CONFIG_HANDLERS: Dict[str, Callable[[str], None]] = {
                "settings": Settings._handle_settings,
                "name_domains": Settings._handle_name_domains,
                "specialized_domains": Settings._handle_specialized_domains,
                "mixed_verbs": Settings._handle_mixed_verbs,
            }
            handler: Optional[Callable[[str], None]] = None  # Current section handler

            rdr: Optional[LineReader] = None
            try:
                rdr = LineReader(
                    fname or DEFAULT_CONFIG,
                    package_name=__name__ if package else None,
                )
                for s in rdr.lines():
                    # Ignore comments
                    ix = s.find("#")
                    if ix >= 0:
                        s = s[0:ix]
                    s = s.strip()
                    if not s:
                        # Blank line: ignore
                        continue
                    if s[0] == "[" and s[-1] == "]":
                        # New section
                        section = s[1:-1].strip().lower()
                        if section in CONFIG_HANDLERS:
                            handler = CONFIG_HANDLERS[section]
                            continue
                        raise ConfigError("Unknown section name '{0}'".format(section))
                    if handler is None:
                        raise ConfigError("No handler for config line '{0}'".format(s))
                    # Call the correct handler depending on the section
                    try:
                        handler(s)
                    except ConfigError as e:
                        # Add file name and line number information to the exception
                        # if it's not already there
                        e.set_pos(rdr.fname(), rdr.line())
                        raise e

            except ConfigError as e:
                # Add file name and line number information to the exception
                # if it's not already there
                if rdr:
                    e.set_pos(rdr.fname(), rdr.line())
                raise e

            Settings.loaded = True
