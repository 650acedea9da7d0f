"""

    Beygja: Icelandic verb inflection tools

    Package initialization

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

    This file is the main entry point for the Beygja package. It exposes
    the public API, which is directly accessible via the beygja module
    object after importing it.

"""

# Expose the Beygja API

from .basics import (
    BeygjaError,
    ConfigError,
    Collator,
    sort_strings,
    is_icelandic,
    ICELANDIC_ALPHABET,
)
from .verbcode import (
    VerbCode,
    TagFailure,
    TagError,
    VerbCodeMapper,
    split_order,
)
from .stems import u_shift, j_stem
from .predict import (
    CodeFilter,
    all_finite_codes,
    predict_finite,
    merge_predictions,
)
from .classify import (
    MixedVerbSet,
    find_mixed_base,
    is_special,
    is_strong,
    SPECIAL_VERBS,
)
from .paradigm import Paradigm, InflectionRecord, build_paradigm
from .compare import (
    CheckResult,
    FiniteChecker,
    PrincipalParts,
    compare,
    derive_principal_parts,
)
from .db import BeygjaDb, DbError
from .importer import DimImportError, import_words, import_verbs, import_mixed_verbs
from .binsource import BinParadigmSource
from .settings import Settings, MixedVerbs
from .version import __version__

__author__ = "Miðeind ehf."
__copyright__ = "(C) 2023 Miðeind ehf."

__all__ = (
    "BeygjaError",
    "ConfigError",
    "Collator",
    "sort_strings",
    "is_icelandic",
    "ICELANDIC_ALPHABET",
    "VerbCode",
    "TagFailure",
    "TagError",
    "VerbCodeMapper",
    "split_order",
    "u_shift",
    "j_stem",
    "CodeFilter",
    "all_finite_codes",
    "predict_finite",
    "merge_predictions",
    "MixedVerbSet",
    "find_mixed_base",
    "is_special",
    "is_strong",
    "SPECIAL_VERBS",
    "Paradigm",
    "InflectionRecord",
    "build_paradigm",
    "CheckResult",
    "FiniteChecker",
    "PrincipalParts",
    "compare",
    "derive_principal_parts",
    "BeygjaDb",
    "DbError",
    "DimImportError",
    "import_words",
    "import_verbs",
    "import_mixed_verbs",
    "BinParadigmSource",
    "Settings",
    "MixedVerbs",
    "__version__",
    "__author__",
    "__copyright__",
)

Settings.read()
