"""

    Beygja: Icelandic verb inflection tools

    Verb code module

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

    This module converts DIM (BÍN) inflection tags for verbs, such as
    'GM-FH-NT-1P-ET' or 'OP-ÞGF-MM-VH-ÞT-3P-FT2', into Beygja verb codes
    and variant order numbers.

    A Beygja verb code is a string of up to eight symbols, one from each
    of the following categories, in this order:

        prefix      .  :  ,  ;      (optional: impersonal subject)
        class       F Q I M R P S   (mandatory)
        voice       a m
        mood        i s             (indicative/subjunctive, or strength)
        tense       r p
        person      1 2 3           (or gender for participles)
        number      v w z
        case        4 5 6 7

    Which categories must be present depends on the class. For
    instance, 'GM-FH-NT-1P-ET' becomes 'Fair1v' and 'GM-NH' becomes 'Ia'.

"""

from typing import Dict, FrozenSet, List, NamedTuple, Optional, Tuple, Union

import re

from .basics import BeygjaError


# Mapping of DIM tag elements to Beygja verb code fragments.
# The mapping is not one-to-one: several elements can map to the same
# symbol, one element can map to several symbols (e.g. case and number
# of participles) and the impersonal marker OP maps to nothing.
VERBCODE_MAPPING: Dict[str, str] = {
    "GM": "a",
    "MM": "m",
    "FH": "i",
    "VH": "s",
    "NT": "r",
    "ÞT": "p",
    "ET": "v",
    "FT": "w",
    "1P": "1",
    "2P": "2",
    "3P": "3",
    "NH": "I",
    "BH": "M",
    "LHNT": "R",
    "LHÞT": "P",
    "SAGNB": "S",
    "SB": "s",
    "VB": "i",
    "KK": "1",
    "HK": "2",
    "KVK": "3",
    "NFET": "v4",
    "ÞFET": "v5",
    "ÞGFET": "v6",
    "EFET": "v7",
    "NFFT": "w4",
    "ÞFFT": "w5",
    "ÞGFFT": "w6",
    "EFFT": "w7",
    "OP": "",
    "það": ".",
    "ÞF": ":",
    "ÞGF": ",",
    "EF": ";",
    "SP": "Q",
    "ST": "z",
}

# Slot indices of the verb code categories
SLOT_PREFIX = 0
SLOT_CLASS = 1
SLOT_VOICE = 2
SLOT_MOOD = 3
SLOT_TENSE = 4
SLOT_PERSON = 5
SLOT_NUMBER = 6
SLOT_CASE = 7
NUM_SLOTS = 8

# The slot of each symbol in the verb code alphabet
VERBCODE_ORDER: Dict[str, int] = {
    c: slot
    for slot, symbols in enumerate(
        (".:,;", "FQIMRPS", "am", "is", "rp", "123", "vwz", "4567")
    )
    for c in symbols
}

_ALL_CLASSES = frozenset("FQIMRPS")

# For each slot, the set of classes that have a value in that slot.
# A slot is mandatory for the classes in its set and forbidden for
# the others, except that the prefix slot is always optional.
# The exceptional past infinitive 'Iap', the clipped imperative
# number and the prefix restrictions are handled separately.
VERBCODE_ALLOW: Tuple[FrozenSet[str], ...] = (
    frozenset("F"),
    _ALL_CLASSES,
    frozenset("FQIMS"),
    frozenset("FQP"),
    frozenset("FQ"),
    frozenset("FQP"),
    frozenset("FQMP"),
    frozenset("P"),
)

DEFAULT_CLASS = "F"
# Exceptional past tense active infinitive, e.g. 'mundu'
PAST_INFINITIVE = "Iap"
# The only code where the clipped number 'z' may appear,
# i.e. the clipped active imperative, e.g. 'kallaðu' -> 'kalla'
CLIPPED_IMPERATIVE = "Maz"

_ORDER_SUFFIX = re.compile(r"[0-9]+$")


class VerbCode(NamedTuple):
    code: str
    order: int


class TagFailure(NamedTuple):
    tag: str
    reason: str


MapResult = Union[VerbCode, TagFailure]


class TagError(BeygjaError, ValueError):

    """Raised when a DIM tag can not be converted to a verb code"""

    def __init__(self, failure: TagFailure) -> None:
        super().__init__(
            "Failed to convert inflection tag '{0}': {1}".format(
                failure.tag, failure.reason
            )
        )
        self.tag = failure.tag
        self.reason = failure.reason


def split_order(tag: str) -> Tuple[str, int]:
    """Split a trailing decimal order number off a DIM tag,
    returning the remaining tag and the order number (default 1)"""
    m = _ORDER_SUFFIX.search(tag)
    if m is None:
        return tag, 1
    return tag[: m.start()], int(m.group(0))


class VerbCodeMapper:

    """Converts DIM inflection tags to Beygja verb codes, caching
    successful conversions. Failed conversions are not cached."""

    def __init__(self) -> None:
        self._cache: Dict[str, VerbCode] = {}

    def __len__(self) -> int:
        """Number of cached conversions"""
        return len(self._cache)

    def map_tag(self, tag: str) -> MapResult:
        """Convert a DIM tag to a VerbCode, or return a TagFailure
        explaining why the tag is not valid"""
        cached = self._cache.get(tag)
        if cached is not None:
            return cached
        result = self._convert(tag)
        if isinstance(result, VerbCode):
            self._cache[tag] = result
        return result

    def verb_code(self, tag: str) -> VerbCode:
        """Convert a DIM tag to a VerbCode, raising TagError on failure"""
        result = self.map_tag(tag)
        if isinstance(result, TagFailure):
            raise TagError(result)
        return result

    @staticmethod
    def elements(tag: str) -> List[str]:
        """Return the non-empty elements of a DIM tag,
        not including the order number suffix"""
        body, _ = split_order(tag)
        return [el for el in body.split("-") if el]

    def _convert(self, tag: str) -> MapResult:

        def fail(reason: str) -> TagFailure:
            return TagFailure(tag, reason)

        body, order = split_order(tag)
        if not body:
            return fail("empty tag")

        slots: List[Optional[str]] = [None] * NUM_SLOTS
        for el in body.split("-"):
            if not el:
                continue
            fragment = VERBCODE_MAPPING.get(el)
            if fragment is None:
                return fail("unknown element '{0}'".format(el))
            for c in fragment:
                slot = VERBCODE_ORDER[c]
                if slots[slot] is not None:
                    return fail("conflicting values in category {0}".format(slot))
                slots[slot] = c

        if slots[SLOT_CLASS] is None:
            slots[SLOT_CLASS] = DEFAULT_CLASS
        iclass = slots[SLOT_CLASS]

        code = "".join(c for c in slots if c is not None)

        if code == PAST_INFINITIVE:
            return VerbCode(code, order)

        for slot, allowed in enumerate(VERBCODE_ALLOW):
            if slots[slot] is not None:
                if iclass not in allowed:
                    return fail(
                        "category {0} not allowed for class {1}".format(slot, iclass)
                    )
            elif slot != SLOT_PREFIX and iclass in allowed:
                return fail(
                    "category {0} missing for class {1}".format(slot, iclass)
                )

        if slots[SLOT_NUMBER] == "z" and code != CLIPPED_IMPERATIVE:
            return fail("clipped number only allowed in '{0}'".format(CLIPPED_IMPERATIVE))

        prefix = slots[SLOT_PREFIX]
        if prefix == ".":
            # Dummy subject only with 3rd person singular
            if slots[SLOT_PERSON] != "3" or slots[SLOT_NUMBER] != "v":
                return fail("dummy subject requires 3rd person singular")
        elif prefix in (":", ";"):
            # Accusative and genitive subjects only with active voice
            if slots[SLOT_VOICE] != "a":
                return fail("oblique subject '{0}' requires active voice".format(prefix))

        return VerbCode(code, order)
