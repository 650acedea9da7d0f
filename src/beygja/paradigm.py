"""

    Beygja: Icelandic verb inflection tools

    Verb paradigm module

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

    A verb paradigm maps verb codes to forms. A code with a single
    accepted form maps to that form as a string, while a code with
    variant forms maps to a list of the variants in Icelandic
    collation order.

"""

from typing import Dict, Iterable, List, Mapping, NamedTuple, Set, Union

from .basics import Collator


ParadigmValue = Union[str, List[str]]
Paradigm = Mapping[str, ParadigmValue]


class InflectionRecord(NamedTuple):
    code: str
    form: str
    # True if the form is marked as dominant (RIK) among its variants
    dominant: bool = False


def forms_of(paradigm: Paradigm, code: str) -> List[str]:
    """Return the forms of a code in a paradigm as a list,
    which is empty if the code is not in the paradigm"""
    value = paradigm.get(code)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def form_set(paradigm: Paradigm, code: str) -> Set[str]:
    return set(forms_of(paradigm, code))


def normalize_code(code: str) -> str:
    """Codes of impersonal forms start with a subject prefix. The prefix
    is dropped and the person and number become 3rd person singular,
    so that e.g. ':Faip1w' and ',Faip2v' both become 'Faip3v'."""
    if code[:1].isupper():
        return code
    code = code[1:]
    for i, c in enumerate(code):
        if c in "123":
            code = code[:i] + "3" + code[i + 1 :]
            break
    for i, c in enumerate(code):
        if c in "vw":
            code = code[:i] + "v" + code[i + 1 :]
            break
    return code


def build_paradigm(
    records: Iterable[InflectionRecord], collator: Collator
) -> Dict[str, ParadigmValue]:
    """Build a paradigm from inflection records that have already been
    filtered to accepted forms. If a code has several forms and exactly
    one of them is dominant, the dominant form is chosen."""
    imap: Dict[str, List[InflectionRecord]] = {}
    for rec in records:
        code = normalize_code(rec.code)
        variants = imap.setdefault(code, [])
        if any(v.form == rec.form for v in variants):
            continue
        variants.append(rec)

    result: Dict[str, ParadigmValue] = {}
    for code, variants in imap.items():
        if len(variants) == 1:
            result[code] = variants[0].form
            continue
        dominant = [v for v in variants if v.dominant]
        if len(dominant) == 1:
            result[code] = dominant[0].form
        else:
            result[code] = collator.sort(v.form for v in variants)
    return result
