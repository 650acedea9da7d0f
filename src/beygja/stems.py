"""

    Beygja: Icelandic verb inflection tools

    Stem mutation module

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

    This module implements the phonological stem alternations used
    when predicting verb forms: the U-shift (u-umlaut), where a stem
    'a' becomes 'ö' and following 'a' vowels become 'u', as in
    kalla -> köllum, and the j-deletion of present tense -ir stems,
    as in segja -> segi.

"""

from typing import List, Tuple

import re

from .basics import is_icelandic


# Digraphs that count as a single syllable nucleus, and the
# placeholder characters that stand in for them while scanning.
# The placeholders never occur in Icelandic words.
_DIGRAPHS: Tuple[Tuple[str, str], ...] = (("au", "1"), ("ei", "2"), ("ey", "3"))

_NUCLEI = frozenset("aeiouyáéíóúýæö123")

_J_AFTER = re.compile(r"([gkæý])j$")
_EYJ = re.compile(r"eyj$")


def u_shift(stem: str, syllables: int) -> str:
    """Apply the U-shift to a verb stem. The base nucleus is the
    syllables-th nucleus counting from the end of the stem, or the
    first nucleus if the stem has fewer. A base 'a' becomes 'ö' and
    every 'a' after the base becomes 'u'. Stems without an 'a' (not
    counting the digraph 'au') are returned unchanged."""
    if not is_icelandic(stem):
        raise ValueError("Stem must be a lowercase Icelandic word: {0!r}".format(stem))
    if not isinstance(syllables, int) or syllables <= 0:
        raise ValueError("Syllable count must be positive: {0!r}".format(syllables))

    s = stem
    for digraph, placeholder in _DIGRAPHS:
        s = s.replace(digraph, placeholder)
    if "a" not in s:
        return stem

    nuclei: List[int] = [i for i, c in enumerate(s) if c in _NUCLEI]
    base = max(len(nuclei) - syllables, 0)
    pos = nuclei[base]

    prefix = s[:pos]
    base_v = "ö" if s[pos] == "a" else s[pos]
    suffix = s[pos + 1 :].replace("a", "u")
    s = prefix + base_v + suffix

    for digraph, placeholder in _DIGRAPHS:
        s = s.replace(placeholder, digraph)
    return s


def j_stem(stem: str) -> str:
    """Drop a stem-final 'j' after g, k, æ or ý, and reduce
    a final 'eyj' to 'ey'"""
    stem = _J_AFTER.sub(r"\1", stem)
    return _EYJ.sub("ey", stem)
