"""
Watch Format Suffixes

Debugger watch fields accept a trailing display hint after the expression:

  • ``var,h`` / ``var,x``   — hexadecimal
  • ``var,b``               — binary
  • ``var,o``               — octal
  • ``var,d``               — decimal

The letter is case-insensitive and must be the last character of the
input.  The hint only changes how a value is rendered, never what the
expression refers to, so editability checks strip it first.
"""

import re
import logging
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Suffix letter -> display format name
FORMAT_SPECIFIERS: Dict[str, str] = {
    "h": "hex",
    "x": "hex",
    "b": "binary",
    "o": "octal",
    "d": "decimal",
}

# \Z rather than $ so "var,h\n" is not treated as carrying a suffix
_SUFFIX_RE = re.compile(r",([hxbod])\Z", re.IGNORECASE)


def split_format_suffix(expr: str) -> Tuple[str, Optional[str]]:
    """
    Split a watch expression into (expression, format_letter).

    The expression part is returned untrimmed.  The letter is lower-cased,
    or None when no suffix is present.
    """
    m = _SUFFIX_RE.search(expr)
    if not m:
        return expr, None
    return expr[:m.start()], m.group(1).lower()


def strip_format_suffix(expr: str) -> str:
    """Remove a trailing format suffix and surrounding whitespace."""
    base, _ = split_format_suffix(expr)
    return base.strip()


def display_format_name(letter: Optional[str]) -> Optional[str]:
    """Map a suffix letter to its display format (``hex``, ``binary``, ...)."""
    if not letter:
        return None
    return FORMAT_SPECIFIERS.get(letter.lower())
