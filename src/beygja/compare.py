"""

    Beygja: Icelandic verb inflection tools

    Paradigm comparison module

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

    This module checks the finite forms of regular verbs. For each verb,
    the principal parts (infinitive and past tense singular) are taken
    from its recorded paradigm, the finite forms are predicted from the
    principal parts, and the prediction is compared with the paradigm.

    In strict mode, the predicted forms of a code must be exactly the
    recorded forms. In loose mode, the predicted forms only need to be
    a subset of the recorded forms.

"""

from typing import Dict, List, NamedTuple, Optional

import logging

from .basics import Collator, is_icelandic
from .classify import MixedVerbSet, is_special, is_strong, MIDDLE_SUFFIX
from .paradigm import Paradigm, ParadigmValue, forms_of, form_set
from .predict import CodeFilter, merge_predictions, predict_finite


logger = logging.getLogger(__name__)

# Default syllable count when none is recorded for a verb
DEFAULT_SYLLABLES = 1

# Check result status values
STATUS_SKIPPED = "skipped"
STATUS_NO_PRINCIPAL_PARTS = "no_principal_parts"
STATUS_MATCH = "match"
STATUS_MISMATCH = "mismatch"


class PrincipalParts(NamedTuple):
    infinitive: str
    past: List[str]


class CheckResult(NamedTuple):
    status: str
    headword: str
    word_id: int
    prediction: Optional[Dict[str, ParadigmValue]] = None

    def message(self) -> Optional[str]:
        """The diagnostic line to report for this result, if any"""
        if self.status == STATUS_MISMATCH:
            return "Misprediction: '{0}' {1}".format(self.headword, self.word_id)
        if self.status == STATUS_NO_PRINCIPAL_PARTS:
            return "Failed to get principal parts for '{0}' (key {1})!".format(
                self.headword, self.word_id
            )
        return None


def derive_principal_parts(
    headword: str, paradigm: Paradigm
) -> Optional[PrincipalParts]:
    """Return the principal parts of a weak verb, or None if they can
    not be derived. A verb without active past tense forms gets
    artificial principal parts from its middle voice forms."""
    if headword.endswith(MIDDLE_SUFFIX):
        mv_past = forms_of(paradigm, "Fmip3v")
        if not mv_past:
            return None
        past = [
            f[: -len(MIDDLE_SUFFIX)] if f.endswith(MIDDLE_SUFFIX) else f
            for f in mv_past
        ]
        infinitive = headword[: -len(MIDDLE_SUFFIX)]
        if not is_icelandic(infinitive):
            return None
        if not all(is_icelandic(f) and f.endswith("i") for f in past):
            return None
        return PrincipalParts(infinitive, past)

    past = forms_of(paradigm, "Faip3v")
    if not past:
        return derive_principal_parts(headword + MIDDLE_SUFFIX, paradigm)
    if not all(is_icelandic(f) and f.endswith("i") for f in past):
        return None
    return PrincipalParts(headword, past)


def compare(predicted: Paradigm, actual: Paradigm, strict: bool) -> bool:
    """Compare predicted forms with actual forms, for the codes that
    are present in both"""
    for code in predicted:
        if code not in actual:
            continue
        pred_vals = form_set(predicted, code)
        para_vals = form_set(actual, code)
        if not pred_vals <= para_vals:
            return False
        if strict and len(pred_vals) != len(para_vals):
            return False
    return True


class FiniteChecker:

    """Checks the finite forms of regular verbs against predictions"""

    def __init__(
        self,
        mixed: MixedVerbSet,
        collator: Collator,
        code_filter: Optional[CodeFilter] = None,
        strict: bool = True,
    ) -> None:
        self._mixed = mixed
        self._collator = collator
        self._filter = code_filter if code_filter is not None else CodeFilter()
        self._strict = strict

    @property
    def strict(self) -> bool:
        return self._strict

    def is_irregular(self, headword: str, paradigm: Paradigm) -> bool:
        """True if the verb is not handled by the regular predictor"""
        return (
            is_special(headword)
            or is_strong(paradigm)
            or self._mixed.find_base(headword) is not None
        )

    def predict(
        self, parts: PrincipalParts, syllables: int
    ) -> Dict[str, ParadigmValue]:
        """Predict the allowed finite forms from the principal parts,
        merging the predictions for each past tense form"""
        merged = merge_predictions(
            (predict_finite(parts.infinitive, p, syllables) for p in parts.past),
            self._filter,
        )
        prediction: Dict[str, ParadigmValue] = {}
        for code, forms in merged.items():
            prediction[code] = forms[0] if len(forms) == 1 else self._collator.sort(forms)
        return prediction

    def check(
        self,
        headword: str,
        word_id: int,
        paradigm: Paradigm,
        syllables: Optional[int] = None,
    ) -> CheckResult:
        """Check a single verb"""
        if not is_icelandic(headword):
            logger.debug("Skipping headword '%s' (%d)", headword, word_id)
            return CheckResult(STATUS_SKIPPED, headword, word_id)
        if self.is_irregular(headword, paradigm):
            return CheckResult(STATUS_SKIPPED, headword, word_id)
        parts = derive_principal_parts(headword, paradigm)
        if parts is None:
            logger.debug("No principal parts for '%s' (%d)", headword, word_id)
            return CheckResult(STATUS_NO_PRINCIPAL_PARTS, headword, word_id)
        if not syllables:
            syllables = DEFAULT_SYLLABLES
        prediction = self.predict(parts, syllables)
        status = (
            STATUS_MATCH
            if compare(prediction, paradigm, self._strict)
            else STATUS_MISMATCH
        )
        return CheckResult(status, headword, word_id, prediction)
