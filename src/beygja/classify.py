"""

    Beygja: Icelandic verb inflection tools

    Verb classification module

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

    This module sorts out the verbs that the regular verb predictor
    does not apply to: strong verbs, the special (preterite-present)
    verbs and the mixed verbs.

"""

from typing import FrozenSet, Iterable, Optional

from .basics import is_icelandic
from .paradigm import Paradigm, forms_of


# The preterite-present verbs, plus the copula 'vera'
SPECIAL_VERBS: FrozenSet[str] = frozenset(
    (
        "eiga",
        "kunna",
        "mega",
        "muna",
        "munu",
        "skulu",
        "unna",
        "vera",
        "vilja",
        "vita",
        "þurfa",
    )
)

MIDDLE_SUFFIX = "st"


def is_strong(paradigm: Paradigm) -> bool:
    """A verb is strong if any past tense 3rd person singular form
    does not end in 'i' (active) or 'ist' (middle voice)"""
    if any(not f.endswith("i") for f in forms_of(paradigm, "Faip3v")):
        return True
    return any(not f.endswith("ist") for f in forms_of(paradigm, "Fmip3v"))


def is_special(infinitive: str) -> bool:
    if not is_icelandic(infinitive):
        raise ValueError("Invalid infinitive: {0!r}".format(infinitive))
    return infinitive in SPECIAL_VERBS


def active_infinitive(infinitive: str) -> str:
    """Return the active infinitive of a middle voice infinitive"""
    if infinitive.endswith(MIDDLE_SUFFIX):
        return infinitive[: -len(MIDDLE_SUFFIX)]
    return infinitive


class MixedVerbSet:

    """The set of mixed verb infinitives, such as 'vilja' and 'selja',
    which are matched against the ends of other infinitives"""

    def __init__(self, infinitives: Iterable[str] = ()) -> None:
        self._set: FrozenSet[str] = frozenset(infinitives)
        if self._set:
            self._min_len = min(len(s) for s in self._set)
            self._max_len = max(len(s) for s in self._set)
        else:
            self._min_len = self._max_len = 0

    def __len__(self) -> int:
        return len(self._set)

    def __contains__(self, infinitive: object) -> bool:
        return infinitive in self._set

    @property
    def min_len(self) -> int:
        return self._min_len

    @property
    def max_len(self) -> int:
        return self._max_len

    def find_base(self, infinitive: str) -> Optional[str]:
        """Return the longest mixed verb infinitive that the given
        infinitive ends with, or None if it is not a mixed verb.
        A middle voice infinitive is converted to active first."""
        if not is_icelandic(infinitive):
            raise ValueError("Invalid infinitive: {0!r}".format(infinitive))
        if not self._set:
            return None
        inf = active_infinitive(infinitive)
        for i in range(min(len(inf), self._max_len), max(self._min_len, 1) - 1, -1):
            ending = inf[-i:]
            if ending in self._set:
                return ending
        return None


def find_mixed_base(mixed: MixedVerbSet, infinitive: str) -> Optional[str]:
    return mixed.find_base(infinitive)
