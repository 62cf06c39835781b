"""
Editable Watch Agent — MCP Server

Exposes watch-expression editability checks via the Model Context Protocol,
so a debugger front end (or an assistant driving one) can ask whether a
"set value" action makes sense for what the user typed:

  1. check_editable         — one-line EDITABLE / NOT EDITABLE answer
  2. explain_editable       — full verdict: format hint, masked view, reason
  3. check_editable_batch   — classify a newline-separated list of watches
  4. list_format_specifiers — supported ``,h``-style display suffixes

Writing values back to the target is left to the caller.
"""

from mcp.server.fastmcp import FastMCP
import os
import sys

# Ensure the watch_analysis package is importable when run as a script
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from watch_analysis.expression_utils import classify_expression, EditabilityVerdict
from watch_analysis.watch_format import FORMAT_SPECIFIERS

# ═══════════════════════════════════════════════════════════════════════
#  Server Setup
# ═══════════════════════════════════════════════════════════════════════

mcp = FastMCP("Editable Watch Agent")

MAX_BATCH_EXPRESSIONS = 500


def _md_cell(text: str) -> str:
    """Escape a value for use inside a markdown table cell."""
    return text.replace("|", "\\|").replace("\n", " ")


def _status_label(verdict: EditabilityVerdict) -> str:
    return "EDITABLE" if verdict.editable else "NOT EDITABLE"


# ═══════════════════════════════════════════════════════════════════════
#  Tool 1 — Check Editable
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def check_editable(expression: str) -> str:
    """
    Reports whether a watch expression names a location whose value can be
    set from the debugger.

    Args:
        expression: The expression as typed in the watch field, optionally
                    with a display suffix such as ",x" or ",b".
                    Example: "obj->arr[i+1],x"
    """
    verdict = classify_expression(expression)
    return f"**{_status_label(verdict)}** — `{expression}`: {verdict.detail}"


# ═══════════════════════════════════════════════════════════════════════
#  Tool 2 — Explain Editable
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def explain_editable(expression: str) -> str:
    """
    Returns the full classification of a watch expression: the stripped
    format hint, the bracket-masked view used for operator checks, and
    which check decided the result.

    Args:
        expression: The expression as typed in the watch field.
    """
    verdict = classify_expression(expression)
    masked = verdict.masked_expression
    return f"""## Editability — {_status_label(verdict)}

| Field | Value |
|-------|-------|
| **Expression** | `{_md_cell(verdict.expression)}` |
| **Base expression** | `{_md_cell(verdict.base_expression)}` |
| **Format suffix** | {verdict.format_specifier or '—'} |
| **Display format** | {verdict.display_format or '—'} |
| **Masked view** | {f'`{_md_cell(masked)}`' if masked is not None else '—'} |
| **Reason** | `{verdict.reason}` |

{verdict.detail}
"""


# ═══════════════════════════════════════════════════════════════════════
#  Tool 3 — Batch Check
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def check_editable_batch(expressions: str) -> str:
    """
    Classifies several watch expressions at once.

    Args:
        expressions: Newline-separated list of watch expressions.  Blank
                     lines are ignored.
                     Example: "counter\\nbuf[i+1],x\\nlen - 1"
    """
    items = [line for line in expressions.splitlines() if line.strip()]
    if not items:
        return "Error: No expressions given. Pass one watch expression per line."
    if len(items) > MAX_BATCH_EXPRESSIONS:
        return (
            f"Error: {len(items)} expressions given; "
            f"at most {MAX_BATCH_EXPRESSIONS} are accepted per call."
        )

    verdicts = [classify_expression(item) for item in items]
    editable = sum(1 for v in verdicts if v.editable)

    summary = "## Watch Editability\n\n"
    summary += "| Metric | Count |\n|--------|-------|\n"
    summary += f"| Total expressions | {len(verdicts)} |\n"
    summary += f"| Editable | {editable} |\n"
    summary += f"| Not editable | {len(verdicts) - editable} |\n"

    summary += "\n### Details\n\n"
    summary += "| Expression | Status | Reason |\n"
    summary += "|------------|--------|--------|\n"
    for v in verdicts:
        summary += (
            f"| `{_md_cell(v.expression.strip())}` | **{_status_label(v)}** "
            f"| {v.reason} |\n"
        )
    return summary


# ═══════════════════════════════════════════════════════════════════════
#  Tool 4 — Format Specifiers
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def list_format_specifiers() -> str:
    """
    Lists the display-format suffixes accepted at the end of a watch
    expression.  They never affect editability.
    """
    result = "| Suffix | Display format |\n|--------|----------------|\n"
    for letter, name in FORMAT_SPECIFIERS.items():
        result += f"| `,{letter}` | {name} |\n"
    return result


if __name__ == "__main__":
    # Debug: Print loaded tools to stderr (visible in MCP logs)
    try:
        if hasattr(mcp, "_tool_manager") and hasattr(mcp._tool_manager, "_tools"):
            tools = mcp._tool_manager._tools.keys()
            print(f"DEBUG: Editable Watch Agent starting with {len(tools)} tools: {list(tools)}", file=sys.stderr)
        else:
            print("DEBUG: Editable Watch Agent starting (cannot inspect tools)", file=sys.stderr)
    except Exception as e:
        print(f"DEBUG: Error inspecting tools: {e}", file=sys.stderr)

    mcp.run()
