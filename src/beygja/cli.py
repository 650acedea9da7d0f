"""

    Beygja: Icelandic verb inflection tools

    Command line interface

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

    The beygja command. A typical session builds a database from the
    DIM files and then checks the regular verbs:

        beygja createdb
        beygja words Storasnid_ord.csv
        beygja verbs Storasnid_beygm.csv
        beygja mixverbs
        beygja finite strict
        beygja finite loose -A +F_ip__

"""

from typing import Callable, Dict, Iterator, List, Optional, TextIO

import sys
import argparse
import logging

from .basics import BeygjaError, Collator
from .binsource import BinParadigmSource
from .classify import MixedVerbSet
from .compare import FiniteChecker, STATUS_MATCH, STATUS_SKIPPED
from .db import BeygjaDb, INFINITIVE_CODES
from .importer import import_mixed_verbs, import_verbs, import_words
from .predict import CodeFilter
from .reports import (
    check_finite,
    check_tags,
    conjugation,
    multi_variant_verbs,
    sorted_infinitives,
    strong_verbs,
    tag_elements,
)
from .settings import MixedVerbs, Settings
from .verbcode import VerbCodeMapper


logger = logging.getLogger(__name__)


def _progress(fraction: float) -> None:
    print("Progress: {0:5.1f}%".format(fraction * 100.0), file=sys.stderr)


def _open_db(args: argparse.Namespace) -> BeygjaDb:
    return BeygjaDb.open(args.db or Settings.database())


def _collator() -> Collator:
    collator = Collator(Settings.LOCALE)
    if not collator.uses_locale:
        logger.info(
            "Locale %s not available; sorting by the Icelandic alphabet",
            Settings.LOCALE,
        )
    return collator


def _input_lines(fname: Optional[str]) -> Iterator[str]:
    if not fname or fname == "-":
        yield from sys.stdin
        return
    with open(fname, "r", encoding="utf-8") as f:
        yield from f


def _print_forms(code: str, forms: List[str], out: TextIO) -> None:
    print("{0} - {1}".format(code, " ".join(forms)), file=out)


def cmd_createdb(args: argparse.Namespace) -> int:
    path = args.db or Settings.database()
    BeygjaDb.create(path).close()
    print("Created database '{0}'".format(path))
    return 0


def cmd_words(args: argparse.Namespace) -> int:
    with _open_db(args) as db:
        n = import_words(
            db,
            args.path,
            args.skip,
            progress_func=_progress,
            status_interval=Settings.STATUS_INTERVAL,
        )
    print("Imported {0} words".format(n))
    return 0


def cmd_verbs(args: argparse.Namespace) -> int:
    with _open_db(args) as db:
        n = import_verbs(
            db,
            args.path,
            args.skip,
            VerbCodeMapper(),
            progress_func=_progress,
            status_interval=Settings.STATUS_INTERVAL,
        )
    print("Imported {0} verb inflections".format(n))
    return 0


def cmd_mixverbs(args: argparse.Namespace) -> int:
    with _open_db(args) as db:
        n = import_mixed_verbs(db, MixedVerbs.LIST)
    print("Imported {0} mixed verbs".format(n))
    return 0


def cmd_finite(args: argparse.Namespace) -> int:
    try:
        code_filter = CodeFilter(args.filters)
    except ValueError as e:
        raise BeygjaError(str(e))
    collator = _collator()
    strict = args.mode == "strict"
    counts: Dict[str, int] = {}

    if args.bin:
        # Check verbs from the islenska BÍN database
        mixed = MixedVerbSet(mv.infinitive for mv in MixedVerbs.LIST)
        checker = FiniteChecker(mixed, collator, code_filter, strict)
        source = BinParadigmSource(collator, Settings.DEFAULT_GRADE)
        for lemma in args.bin:
            for bin_id, paradigm in source.paradigms(lemma):
                result = checker.check(lemma, bin_id, paradigm)
                counts[result.status] = counts.get(result.status, 0) + 1
                msg = result.message()
                if msg:
                    print(msg)
    else:
        with _open_db(args) as db:
            checker = FiniteChecker(
                MixedVerbSet(db.mixed_verbs()), collator, code_filter, strict
            )
            for result in check_finite(db, checker, collator, Settings.DEFAULT_GRADE):
                counts[result.status] = counts.get(result.status, 0) + 1
                msg = result.message()
                if msg:
                    print(msg)

    logger.info(
        "Checked %d verbs, skipped %d irregular verbs, %d matched",
        sum(counts.values()) - counts.get(STATUS_SKIPPED, 0),
        counts.get(STATUS_SKIPPED, 0),
        counts.get(STATUS_MATCH, 0),
    )
    return 0


def cmd_conj(args: argparse.Namespace) -> int:
    collator = _collator()
    with _open_db(args) as db:
        if args.word.isdigit():
            wids = [int(args.word)]
        else:
            wids = db.verb_ids_by_headword(args.word)
            if not wids:
                raise BeygjaError("Verb '{0}' not found".format(args.word))
        for wid in wids:
            if len(wids) > 1:
                print("{0} ({1})".format(db.headword(wid), wid))
            for code, forms in conjugation(db, wid, collator, Settings.DEFAULT_GRADE):
                _print_forms(code, forms, sys.stdout)
    return 0


def cmd_strong(args: argparse.Namespace) -> int:
    collator = _collator()
    with _open_db(args) as db:
        for headword in strong_verbs(db, collator, Settings.DEFAULT_GRADE):
            print(headword)
    return 0


def cmd_multi(args: argparse.Namespace) -> int:
    collator = _collator()
    with _open_db(args) as db:
        for headword, multi in multi_variant_verbs(db, collator, Settings.DEFAULT_GRADE):
            print(headword)
            for code, forms in multi:
                print("  ", end="")
                _print_forms(code, forms, sys.stdout)
    return 0


def cmd_inf(args: argparse.Namespace) -> int:
    collator = _collator()
    with _open_db(args) as db:
        for inf in sorted_infinitives(db, collator, args.kind):
            print(inf)
    return 0


def cmd_tagcheck(args: argparse.Namespace) -> int:
    for tag, vc in check_tags(_input_lines(args.file), VerbCodeMapper()):
        print("{0} => {1}, {2}".format(tag, vc.code, vc.order))
    return 0


def cmd_tagparse(args: argparse.Namespace) -> int:
    for element in tag_elements(_input_lines(args.file)):
        print(element)
    return 0


def get_argument_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the beygja command"""
    parser = argparse.ArgumentParser(
        prog="beygja", description="Beygja: Icelandic verb inflection tools"
    )
    parser.add_argument("--db", help="Database path (overrides the configuration)")
    parser.add_argument(
        "--config", help="Configuration file (default: the packaged Beygja.conf)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    def add(
        name: str, func: Callable[[argparse.Namespace], int], help: str
    ) -> argparse.ArgumentParser:
        p = sub.add_parser(name, help=help, description=help)
        p.set_defaults(func=func)
        return p

    add("createdb", cmd_createdb, "Create an empty database")

    p = add("words", cmd_words, "Import the DIM word file")
    p.add_argument("path", help="Path of Storasnid_ord.csv")
    p.add_argument("skip", nargs="?", type=int, default=0, help="Lines to skip")

    p = add("verbs", cmd_verbs, "Import the verbs of the DIM inflection file")
    p.add_argument("path", help="Path of Storasnid_beygm.csv")
    p.add_argument("skip", nargs="?", type=int, default=0, help="Lines to skip")

    add("mixverbs", cmd_mixverbs, "Import the configured mixed verbs")

    p = add("finite", cmd_finite, "Check the finite forms of regular verbs")
    p.add_argument(
        "--bin",
        action="append",
        metavar="LEMMA",
        help="Check this verb from the islenska BÍN database instead",
    )
    p.add_argument("mode", choices=("strict", "loose"), help="Matching mode")
    p.add_argument(
        "filters",
        nargs=argparse.REMAINDER,
        help="Filter codes: +PATTERN adds, -PATTERN removes; _ matches any symbol",
    )

    p = add("conj", cmd_conj, "List the filtered forms of a verb")
    p.add_argument("word", help="Word key or headword")

    add("strong", cmd_strong, "List the strong verbs")
    add("multi", cmd_multi, "List the verbs with inflectional variants")

    p = add("inf", cmd_inf, "List infinitives sorted from the back")
    p.add_argument("kind", choices=sorted(INFINITIVE_CODES), help="Kind of infinitive")

    p = add("tagcheck", cmd_tagcheck, "Check the conversion of a list of DIM tags")
    p.add_argument("file", nargs="?", help="Tag list (default: standard input)")

    p = add("tagparse", cmd_tagparse, "List the elements of a list of DIM tags")
    p.add_argument("file", nargs="?", help="Tag list (default: standard input)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = get_argument_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        if args.config:
            Settings.read(args.config, force=True, package=False)
        else:
            Settings.read()
        return args.func(args)
    except (BeygjaError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
