"""
MCP server tool tests.

The tool functions are plain callables once registered, so they are
exercised directly without an MCP transport.
"""
import unittest
import os
import sys

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

import fastmcp_server as srv


class TestCheckEditable(unittest.TestCase):

    def test_editable(self):
        out = srv.check_editable("ptr->member")
        self.assertTrue(out.startswith("**EDITABLE**"), out)
        self.assertIn("`ptr->member`", out)

    def test_not_editable_includes_detail(self):
        out = srv.check_editable("a + b")
        self.assertTrue(out.startswith("**NOT EDITABLE**"), out)
        self.assertIn("operator", out)


class TestExplainEditable(unittest.TestCase):

    def test_full_verdict(self):
        out = srv.explain_editable("arr[i+1],x")
        self.assertIn("EDITABLE", out)
        self.assertIn("| **Display format** | hex |", out)
        self.assertIn("`arr[0]`", out)
        self.assertIn("`lvalue`", out)

    def test_rejected_before_masking(self):
        out = srv.explain_editable("func(a)")
        self.assertIn("NOT EDITABLE", out)
        self.assertIn("| **Masked view** | — |", out)
        self.assertIn("`call`", out)

    def test_pipe_escaped_in_table(self):
        out = srv.explain_editable("a|b")
        self.assertIn("a\\|b", out)


class TestCheckEditableBatch(unittest.TestCase):

    def test_summary_counts(self):
        out = srv.check_editable_batch("counter\n\nbuf[i+1],x\nlen - 1\n")
        self.assertIn("| Total expressions | 3 |", out)
        self.assertIn("| Editable | 2 |", out)
        self.assertIn("| Not editable | 1 |", out)
        self.assertIn("| `len - 1` | **NOT EDITABLE** | subtraction |", out)

    def test_empty_input(self):
        self.assertTrue(srv.check_editable_batch("  \n\n").startswith("Error:"))

    def test_too_many(self):
        many = "\n".join(["x"] * (srv.MAX_BATCH_EXPRESSIONS + 1))
        out = srv.check_editable_batch(many)
        self.assertTrue(out.startswith("Error:"), out)
        self.assertIn(str(srv.MAX_BATCH_EXPRESSIONS), out)


class TestListFormatSpecifiers(unittest.TestCase):

    def test_lists_all(self):
        out = srv.list_format_specifiers()
        for suffix in (",h", ",x", ",b", ",o", ",d"):
            self.assertIn(f"`{suffix}`", out)
        self.assertIn("binary", out)


class TestToolRegistration(unittest.TestCase):

    def test_all_tools_registered(self):
        tools = set(srv.mcp._tool_manager._tools.keys())
        self.assertEqual(
            tools,
            {"check_editable", "explain_editable", "check_editable_batch",
             "list_format_specifiers"},
        )


if __name__ == "__main__":
    unittest.main()
