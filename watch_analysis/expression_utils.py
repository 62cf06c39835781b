"""
Watch Expression Editability

Decides whether a debugger watch expression names a storage location that
can be written (an lvalue) or only computes a value.

Editable:
  • identifiers                      myVar, _x1
  • member access                    obj.inner.value, ptr->member
  • subscripts (any index)           arr[i+1], matrix[i][j], arr[idx[i]]
  • dereference / address-of         *ptr, **ptr, &var
  • any of the above + format hint   myVar,h  arr[0],x

Not editable:
  • literals                         42, -3.14, 0xABCD, "str", 'c'
  • calls, casts, groupings          func(a), sizeof(int), (int)p, (var)
  • binary / ternary / unary ops     a+b, a==b, a<<b, a?b:c, ~a, !a

There is no parser here.  The input runs through a sequence of rejection
filters on a progressively normalised string; the first filter that fires
decides.  Subscript contents are masked out before the operator filters so
``arr[i+1]`` is not mistaken for an addition.
"""

import re
import logging
from typing import Optional

from pydantic import BaseModel

from watch_analysis.watch_format import split_format_suffix, display_format_name

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════
#  Patterns & tables
# ═══════════════════════════════════════════════════════════════════════

BRACKET_PLACEHOLDER = "0"

# Multi-character tokens first
BINARY_OPERATORS = (
    "<<", ">>", "<=", ">=", "==", "!=", "&&", "||",
    "+", "/", "%", "^", "?", ":",
)

# '->' followed by '>' or '=' produces these; the arrow is not a shift/compare
_ARROW_AMBIGUOUS = frozenset((">>", ">="))

# ASCII classes only: watch expressions use C identifiers
_NUMERIC_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")
_HEX_RE = re.compile(r"0x[0-9a-f]+", re.IGNORECASE)
# Matches start only where a word run starts; the run is a callee
# unless it is all digits
_CALL_RE = re.compile(r"(?<![A-Za-z0-9_])([A-Za-z0-9_]+)\s*\(")
_LEADING_PAREN_RE = re.compile(r"\s*\(")
_SUBTRACTION_RE = re.compile(r"[A-Za-z0-9_\]]\s*-\s*(?!>)[A-Za-z0-9_]")
_MULTIPLICATION_RE = re.compile(r"[A-Za-z0-9_\]]\s*\*\s*[A-Za-z0-9_]")
_BITWISE_AND_RE = re.compile(r"[A-Za-z0-9_\]]\s*&\s*[A-Za-z0-9_]")

# Reason code -> human readable explanation
REASONS = {
    "lvalue":           "Names a storage location that can be assigned.",
    "not_a_string":     "Input is not a string.",
    "empty":            "Expression is empty.",
    "numeric_literal":  "Numeric literals are values, not locations.",
    "string_literal":   "String and character literals cannot be assigned.",
    "call":             "Function calls, method calls and sizeof produce values.",
    "parenthesized":    "Casts and parenthesized expressions are not treated as locations.",
    "binary_operator":  "Binary, comparison, logical or ternary operator outside a subscript.",
    "subtraction":      "Subtraction between two operands.",
    "multiplication":   "Multiplication between two operands.",
    "bitwise_and":      "Bitwise AND between two operands.",
    "bitwise_or":       "Bitwise OR always combines two values.",
    "bitwise_not":      "Bitwise NOT yields a computed value.",
    "logical_not":      "Logical NOT yields a computed value.",
}


class EditabilityVerdict(BaseModel):
    """Outcome of classifying one watch expression."""
    expression: str
    base_expression: str = ""
    format_specifier: Optional[str] = None
    display_format: Optional[str] = None
    masked_expression: Optional[str] = None
    editable: bool = False
    reason: str = "empty"
    detail: str = ""


# ═══════════════════════════════════════════════════════════════════════
#  Bracket masking
# ═══════════════════════════════════════════════════════════════════════

def mask_bracket_contents(expr: str) -> str:
    """
    Erase everything inside ``[...]`` while keeping the brackets.

    Each closing bracket is preceded by exactly one placeholder, so
    ``arr[i+1]`` becomes ``arr[0]`` and ``m[i][j-1]`` becomes ``m[0][0]``.
    Nested openers are kept: ``a[b[i]]`` becomes ``a[[0]0]``.

    A stray ``]`` is copied through without moving the depth below zero.
    An unmatched ``[`` swallows the rest of the string.
    """
    out = []
    depth = 0
    for ch in expr:
        if ch == "[":
            out.append(ch)
            depth += 1
        elif ch == "]":
            if depth > 0:
                out.append(BRACKET_PLACEHOLDER)
            out.append(ch)
            depth = max(0, depth - 1)
        elif depth == 0:
            out.append(ch)
    return "".join(out)


# ═══════════════════════════════════════════════════════════════════════
#  Rejection filters
# ═══════════════════════════════════════════════════════════════════════

def _find_binary_operator(masked: str) -> Optional[str]:
    """Return the first operator of BINARY_OPERATORS present in *masked*."""
    for op in BINARY_OPERATORS:
        idx = masked.find(op)
        while idx >= 0:
            if op in _ARROW_AMBIGUOUS and idx > 0 and masked[idx - 1] == "-":
                idx = masked.find(op, idx + 1)
                continue
            return op
    return None


def _literal_or_call_reason(base: str) -> Optional[str]:
    if _NUMERIC_RE.fullmatch(base) or _HEX_RE.fullmatch(base):
        return "numeric_literal"
    if base.startswith(('"', "'")):
        return "string_literal"
    if any(not m.group(1).isdigit() for m in _CALL_RE.finditer(base)):
        return "call"
    if _LEADING_PAREN_RE.match(base):
        return "parenthesized"
    return None


def _operator_reason(masked: str) -> Optional[str]:
    if _find_binary_operator(masked) is not None:
        return "binary_operator"

    # '-', '*' and '&' are unary when nothing operand-like precedes them
    if _SUBTRACTION_RE.search(masked):
        return "subtraction"
    if _MULTIPLICATION_RE.search(masked):
        return "multiplication"
    if _BITWISE_AND_RE.search(masked):
        return "bitwise_and"

    if "|" in masked:
        return "bitwise_or"
    if "~" in masked:
        return "bitwise_not"
    bang = masked.find("!")
    while bang >= 0:
        if masked[bang + 1:bang + 2] != "=":
            return "logical_not"
        bang = masked.find("!", bang + 1)
    return None


# ═══════════════════════════════════════════════════════════════════════
#  Public API
# ═══════════════════════════════════════════════════════════════════════

def classify_expression(expr: str) -> EditabilityVerdict:
    """
    Classify a watch expression and report which check decided.

    Never raises.  Anything that is not a string, is empty after removing
    the format suffix, or trips one of the filters is reported as not
    editable with a ``reason`` code from REASONS.
    """
    if not isinstance(expr, str):
        logger.debug("Not editable (not_a_string): %r", expr)
        return EditabilityVerdict(
            expression="", reason="not_a_string", detail=REASONS["not_a_string"]
        )

    base, letter = split_format_suffix(expr)
    base = base.strip()
    verdict = EditabilityVerdict(
        expression=expr,
        base_expression=base,
        format_specifier=letter,
        display_format=display_format_name(letter),
    )

    if not base:
        reason = "empty"
    else:
        reason = _literal_or_call_reason(base)
        if reason is None:
            verdict.masked_expression = mask_bracket_contents(base)
            reason = _operator_reason(verdict.masked_expression)

    if reason is None:
        verdict.editable = True
        verdict.reason = "lvalue"
    else:
        logger.debug("Not editable (%s): %r", reason, expr)
        verdict.reason = reason
    verdict.detail = REASONS[verdict.reason]
    return verdict


def is_editable_variable(expr: str) -> bool:
    """
    True if *expr* looks like an assignable location (identifier, member,
    subscript or dereference, optionally with a ``,h``-style format hint).
    """
    return classify_expression(expr).editable
