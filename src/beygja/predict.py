"""

    Beygja: Icelandic verb inflection tools

    Paradigm prediction module

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

    This module predicts the finite active forms of a regular (weak)
    verb from its principal parts, i.e. the infinitive and the past
    tense 3rd person singular, together with the number of syllables
    in the verb stem.

    It also contains the filter language used on the command line to
    select which finite verb codes are examined:

        +PATTERN    add the codes matching PATTERN
        -PATTERN    remove the codes matching PATTERN

    where '_' in a pattern matches any single symbol of a code and
    the pattern 'A' matches all codes. For example, '-A +F_ip__'
    selects only the past indicative forms of both voices.

"""

from typing import Dict, Iterable, List, Mapping, Optional, Set

import itertools

from .basics import is_icelandic
from .stems import u_shift, j_stem


# Infinitives that take the -ar present tense although
# the infinitive stem does not end in 'a'
AR_EXCEPTIONS = frozenset(("meina",))

# The pattern that matches every code in a filter
MATCH_ALL = "A"
WILDCARD = "_"


def all_finite_codes() -> List[str]:
    """Return all 48 finite verb codes, in canonical order"""
    return [
        "F" + "".join(t)
        for t in itertools.product("am", "is", "rp", "123", "vw")
    ]


def predict_finite(infinitive: str, past: str, syllables: int) -> Dict[str, str]:
    """Predict the finite active forms of a regular weak verb, given
    its infinitive, a past tense singular form ending in 'i' and the
    number of syllables in the stem. Returns a dict mapping each of
    the 24 active finite verb codes to its predicted form."""
    if not is_icelandic(infinitive):
        raise ValueError("Invalid infinitive: {0!r}".format(infinitive))
    if not is_icelandic(past):
        raise ValueError("Invalid past tense form: {0!r}".format(past))
    if not past.endswith("i"):
        raise ValueError(
            "Past tense form of a weak verb must end in 'i': {0!r}".format(past)
        )

    # The final 'a' of the infinitive belongs to the stem of
    # verbs with past tense in -aði, as in kalla/kallaði
    inf_stem = infinitive
    if infinitive.endswith("a") and not past.endswith("aði"):
        inf_stem = infinitive[:-1]

    v_stem = inf_stem[:-1] if inf_stem.endswith("a") else inf_stem
    u_stem = u_shift(v_stem, syllables)
    vj_stem = j_stem(v_stem)

    vp: Dict[str, str] = {}

    # Present indicative
    if inf_stem.endswith("a") or infinitive in AR_EXCEPTIONS:
        vp["Fair1v"] = v_stem + "a"
        vp["Fair2v"] = v_stem + "ar"
        vp["Fair3v"] = v_stem + "ar"
    else:
        vp["Fair1v"] = vj_stem + "i"
        vp["Fair2v"] = vj_stem + "ir"
        vp["Fair3v"] = vj_stem + "ir"
    vp["Fair1w"] = u_stem + "um"
    vp["Fair2w"] = vj_stem + "ið"
    vp["Fair3w"] = infinitive

    # Present subjunctive
    vp["Fasr1v"] = vj_stem + "i"
    vp["Fasr2v"] = vj_stem + "ir"
    vp["Fasr3v"] = vj_stem + "i"
    vp["Fasr1w"] = u_stem + "um"
    vp["Fasr2w"] = vj_stem + "ið"
    vp["Fasr3w"] = vj_stem + "i"

    # Past indicative; a stem ending in -að has an extra syllable
    past_stem = past[:-1]
    past_count = syllables + 1 if past_stem.endswith("að") else syllables
    past_plural = u_shift(past_stem, past_count)

    vp["Faip1v"] = past_stem + "i"
    vp["Faip2v"] = past_stem + "ir"
    vp["Faip3v"] = past_stem + "i"
    vp["Faip1w"] = past_plural + "um"
    vp["Faip2w"] = past_plural + "uð"
    vp["Faip3w"] = past_plural + "u"

    # The past subjunctive of weak verbs equals the past indicative
    for person in "123":
        for number in "vw":
            vp["Fasp" + person + number] = vp["Faip" + person + number]

    return vp


def filter_match(pattern: str, code: str) -> bool:
    """Return True if the code matches the filter pattern"""
    if pattern == MATCH_ALL:
        return True
    if len(pattern) != len(code):
        return False
    return all(p == WILDCARD or p == c for p, c in zip(pattern, code))


class CodeFilter:

    """A set of allowed verb codes, initially all finite codes,
    modified by a sequence of +PATTERN and -PATTERN arguments"""

    def __init__(self, args: Optional[Iterable[str]] = None) -> None:
        self._universe = all_finite_codes()
        self._allowed: Set[str] = set(self._universe)
        for arg in args or ():
            self.apply(arg)

    def apply(self, arg: str) -> None:
        """Apply a single filter argument"""
        if len(arg) < 2 or arg[0] not in "+-":
            raise ValueError("Invalid filter code '{0}'".format(arg))
        mode, pattern = arg[0], arg[1:]
        if mode == "+":
            self._allowed.update(c for c in self._universe if filter_match(pattern, c))
        else:
            self._allowed.difference_update(
                [c for c in self._allowed if filter_match(pattern, c)]
            )

    def __contains__(self, code: object) -> bool:
        return code in self._allowed

    def __len__(self) -> int:
        return len(self._allowed)

    @property
    def codes(self) -> List[str]:
        """The allowed codes, in canonical order"""
        return [c for c in self._universe if c in self._allowed]


def merge_predictions(
    predictions: Iterable[Mapping[str, str]], allowed: Optional[CodeFilter] = None
) -> Dict[str, List[str]]:
    """Merge predictions made from several past tense forms into one,
    keeping only allowed codes. Each code maps to its distinct
    predicted forms, in the order first seen."""
    merged: Dict[str, List[str]] = {}
    for pred in predictions:
        for code, form in pred.items():
            if allowed is not None and code not in allowed:
                continue
            forms = merged.setdefault(code, [])
            if form not in forms:
                forms.append(form)
    return merged
