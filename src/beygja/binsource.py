"""

    Beygja: Icelandic verb inflection tools

    BÍN paradigm source module

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

    This module builds verb paradigms from the compressed BÍN database
    of the islenska package, without importing the DIM CSV files. The
    paradigms are filtered in the same way as paradigms built from a
    Beygja database, so that the regular verb checks can be run on
    either source.

"""

from typing import Any, Dict, List, Optional, Tuple

import logging

from islenska import Bin

from .basics import Collator, VERB_CLASS
from .db import IVAL_DOMINANT, IVAL_IDIOM_ONLY
from .paradigm import InflectionRecord, ParadigmValue, build_paradigm
from .verbcode import TagFailure, VerbCodeMapper


logger = logging.getLogger(__name__)


class BinParadigmSource:

    """Verb paradigms from the islenska BÍN database"""

    def __init__(
        self,
        collator: Collator,
        default_grade: int = 1,
        bin_db: Optional[Any] = None,
        mapper: Optional[VerbCodeMapper] = None,
    ) -> None:
        self._collator = collator
        self._default_grade = default_grade
        self._bin = bin_db
        self._mapper = mapper or VerbCodeMapper()

    @property
    def bin_db(self) -> Any:
        """The islenska Bin instance, created on first use"""
        if self._bin is None:
            self._bin = Bin()
        return self._bin

    def verb_ids(self, lemma: str) -> List[int]:
        """Return the BÍN ids of the verbs with the given lemma"""
        _, entries = self.bin_db.lookup_lemmas(lemma)
        return sorted(
            {e.bin_id for e in entries if e.ofl == VERB_CLASS and e.ord == lemma}
        )

    def records(self, bin_id: int) -> List[InflectionRecord]:
        """Return the accepted inflection records of a verb"""
        result: List[InflectionRecord] = []
        for k in self.bin_db.lookup_id(bin_id):
            if k.ofl != VERB_CLASS:
                continue
            if k.beinkunn != self._default_grade or k.bmalsnid:
                continue
            if k.bgildi == IVAL_IDIOM_ONLY:
                continue
            vc = self._mapper.map_tag(k.mark)
            if isinstance(vc, TagFailure):
                logger.warning(
                    "Skipping form '%s' of verb %d: %s", k.bmynd, bin_id, vc.reason
                )
                continue
            result.append(
                InflectionRecord(vc.code, k.bmynd, k.bgildi == IVAL_DOMINANT)
            )
        return result

    def paradigm(self, bin_id: int) -> Dict[str, ParadigmValue]:
        return build_paradigm(self.records(bin_id), self._collator)

    def paradigms(self, lemma: str) -> List[Tuple[int, Dict[str, ParadigmValue]]]:
        """Return (BÍN id, paradigm) tuples for all verbs with the given lemma"""
        return [(bin_id, self.paradigm(bin_id)) for bin_id in self.verb_ids(lemma)]
