"""Classification of Pando literal values.

``classify_literal`` looks at the text of an initializer and returns the
primitive type it denotes, or ``None`` when the text is not a literal it
recognizes.  An unclassified value is never evidence of a type mismatch.
"""

from __future__ import annotations

import re
from typing import Optional

_INT_RE = re.compile(r"-?\d+")
_FLOAT_RE = re.compile(r"-?\d+\.\d*|-?\.\d+")

TRUE_LITERAL = "True"
FALSE_LITERAL = "False"
NONE_LITERAL = "None"
EMPTY_TUPLE_LITERAL = "()"

BOOL_LITERALS = (TRUE_LITERAL, FALSE_LITERAL)


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] in ("'", '"') and text[-1] == text[0]


def classify_literal(text: str) -> Optional[str]:
    """Return the Pando type name of literal *text*, or ``None``.

    Rules are tried in order: int, float, bool, None, char, str.
    """
    if _INT_RE.fullmatch(text):
        return "int"
    if _FLOAT_RE.fullmatch(text):
        return "float"
    if text in BOOL_LITERALS:
        return "bool"
    if text == NONE_LITERAL:
        return "None"
    if _is_quoted(text):
        # A single character between quotes is the stricter char form
        if len(text) == 3:
            return "char"
        return "str"
    return None
