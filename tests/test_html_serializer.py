import unittest

from textview.model import TreeItem, TreeSource
from textview.serializers import (
    HtmlInlineSetSerializer,
    HtmlListSerializer,
    HtmlTableSerializer,
)


def flat_source():
    return TreeSource(
        headers=["Name", "Count"],
        items=[TreeItem(["a", "1"]), TreeItem(["b", "2"])],
    )


def chain_source(length, width=1):
    """A source of *width* top-level rows each nesting *length* - 1 levels."""
    items = []
    for w in range(width):
        node = None
        for level in reversed(range(length)):
            children = [node] if node else []
            node = TreeItem([f"n{w}.{level}"], children=children)
        items.append(node)
    return TreeSource(headers=["Node"], items=items)


class RoleLessSource(TreeSource):
    """A source whose role lookups fail."""

    def cell_value(self, node, role=None):
        if role is not None:
            raise KeyError(role)
        return super().cell_value(node)


class TestHtmlInlineSetSerializer(unittest.TestCase):
    """Test inline sets of the top-level rows."""

    def test_joins_first_column(self):
        self.assertEqual(HtmlInlineSetSerializer().serialize(flat_source()), "a b")

    def test_displayed_column_and_separator(self):
        serializer = HtmlInlineSetSerializer(displayed_column=1, separator=", ")
        self.assertEqual(serializer.serialize(flat_source()), "1, 2")

    def test_children_are_ignored(self):
        source = chain_source(3)
        self.assertEqual(HtmlInlineSetSerializer().serialize(source), "n0.0")

    def test_empty_source_prints_placeholder(self):
        source = TreeSource(headers=["Name"])
        self.assertEqual(HtmlInlineSetSerializer().serialize(source), "(empty)")

    def test_absent_source_is_empty(self):
        self.assertEqual(HtmlInlineSetSerializer().serialize(None), "")

    def test_prefixes_and_links(self):
        """Constant prefix, then prefix role, then linked text."""
        source = TreeSource(headers=["Tag"], items=[
            TreeItem(["x"], roles={"icon": "<i/>", "link": "/x", "linkClass": "tag"}),
            TreeItem(["y"]),
        ])
        serializer = HtmlInlineSetSerializer(
            constant_prefix="#", html_prefix_role="icon",
            link_role="link", link_class_role="linkClass")
        self.assertEqual(serializer.serialize(source),
                         '#<i/><a href="/x" class="tag">x</a> #y')


class TestHtmlListSerializer(unittest.TestCase):
    """Test nested HTML lists."""

    def test_nested_lists(self):
        source = TreeSource(headers=["Name", "Count"], items=[
            TreeItem(["a", "1"], children=[TreeItem(["a1", "3"])]),
            TreeItem(["b", "2"]),
        ])
        self.assertEqual(HtmlListSerializer().serialize(source),
                         "<ul><li>a 1<ul><li>a1 3</li></ul></li>"
                         "<li>b 2</li></ul>\n")

    def test_empty_source(self):
        self.assertEqual(HtmlListSerializer().serialize(TreeSource()), "<ul></ul>\n")

    def test_text_is_not_escaped(self):
        source = TreeSource(headers=["v"], items=[TreeItem(["<b>bold</b>"])])
        self.assertIn("<li><b>bold</b></li>", HtmlListSerializer().serialize(source))


class TestHtmlTableSerializer(unittest.TestCase):
    """Test HTML tables."""

    def test_flat_table(self):
        self.assertEqual(HtmlTableSerializer().serialize(flat_source()),
                         "<table>\n"
                         "<tr><th>Name</th><th>Count</th></tr>\n"
                         "<tr><td>a</td><td>1</td></tr>\n"
                         "<tr><td>b</td><td>2</td></tr>\n"
                         "</table>\n")

    def test_absent_source_is_empty(self):
        self.assertEqual(HtmlTableSerializer().serialize(None), "")

    def test_nested_rows_are_indented(self):
        result = HtmlTableSerializer().serialize(chain_source(3))
        self.assertIn("<tr><td>n0.0</td></tr>\n", result)
        self.assertIn("<tr><td>&nbsp;&nbsp;n0.1</td></tr>\n", result)
        self.assertIn("<tr><td>&nbsp;&nbsp;&nbsp;&nbsp;n0.2</td></tr>\n", result)
        self.assertLess(result.index("n0.1"), result.index("n0.2"))

    def test_empty_source_prints_placeholder(self):
        source = TreeSource(headers=["Name", "Count"])
        result = HtmlTableSerializer().serialize(source)
        self.assertIn("<tr><td colspan=2>(empty)</td></tr>\n", result)

    def test_empty_placeholder_spans_row_header(self):
        source = TreeSource(headers=["Name", "Count"])
        result = HtmlTableSerializer(row_headers=True).serialize(source)
        self.assertIn("<td colspan=3>(empty)</td>", result)

    def test_blank_empty_placeholder_prints_nothing(self):
        source = TreeSource(headers=["Name"])
        result = HtmlTableSerializer(empty_placeholder="").serialize(source)
        self.assertEqual(result, "<table>\n<tr><th>Name</th></tr>\n</table>\n")

    def test_truncation_across_levels(self):
        """The row cap applies to the whole tree, not to each level."""
        source = chain_source(3, width=2)
        result = HtmlTableSerializer(max_rows=4).serialize(source)
        self.assertEqual(result.count("<tr><td>"), 4)
        self.assertIn("<tr><td colspan=1>...</td></tr>\n", result)
        self.assertNotIn("n1.1", result)

    def test_exact_cap_has_no_ellipsis(self):
        source = chain_source(3, width=2)
        result = HtmlTableSerializer(max_rows=6).serialize(source)
        self.assertEqual(result.count("<tr><td>"), 6)
        self.assertNotIn("...", result)

    def test_unlimited_rows(self):
        source = chain_source(2, width=60)
        result = HtmlTableSerializer(max_rows=0).serialize(source)
        self.assertEqual(result.count("<tr><td>"), 120)
        self.assertNotIn("...", result)

    def test_default_cap_is_one_hundred(self):
        source = chain_source(1, width=150)
        result = HtmlTableSerializer(ellipsis_placeholder="more").serialize(source)
        self.assertEqual(result.count("<tr><td>"), 100)
        self.assertTrue(result.endswith("<tr><td colspan=1>more</td></tr>\n</table>\n"))

    def test_headers_and_table_class(self):
        source = TreeSource(
            headers=["Name"], items=[TreeItem(["a"])], row_headers=["1"],
            header_roles={"icon": ["<i/>"]}, row_header_roles={"icon": ["*"]})
        serializer = HtmlTableSerializer(
            table_class="grid", row_headers=True, top_left_header="#",
            html_prefix_role="icon")
        self.assertEqual(serializer.serialize(source),
                         '<table class="grid">\n'
                         "<tr><th>#</th><th><i/>Name</th></tr>\n"
                         "<tr><th>*1</th><td>a</td></tr>\n"
                         "</table>\n")

    def test_cell_decorations(self):
        """Row class, cell class, prefix and link roles decorate cells."""
        source = TreeSource(headers=["Name", "Count"], items=[
            TreeItem(["a", "1"], roles={
                "rowClass": ["odd", "ignored"],
                "cellClass": ["name", "count"],
                "icon": ["<i/>", None],
                "link": ["/a", None],
                "linkClass": "lnk",
            }),
        ])
        serializer = HtmlTableSerializer(
            row_class_role="rowClass", cell_class_role="cellClass",
            html_prefix_role="icon", link_role="link",
            link_class_role="linkClass", column_headers=False)
        self.assertEqual(serializer.serialize(source),
                         "<table>\n"
                         '<tr class="odd"><td class="name"><i/>'
                         '<a href="/a" class="lnk">a</a></td>'
                         '<td class="count">1</td></tr>\n'
                         "</table>\n")

    def test_indent_precedes_decoration(self):
        source = TreeSource(headers=["Name"], items=[
            TreeItem(["a"], children=[TreeItem(["b"], roles={"icon": "<i/>"})]),
        ])
        result = HtmlTableSerializer(html_prefix_role="icon").serialize(source)
        self.assertIn("<td>&nbsp;&nbsp;<i/>b</td>", result)

    def test_failing_role_lookup_is_absent(self):
        """Decoration degrades silently when roles cannot be read."""
        source = RoleLessSource(headers=["Name"], items=[TreeItem(["a"])])
        serializer = HtmlTableSerializer(link_role="link", cell_class_role="c")
        self.assertIn("<tr><td>a</td></tr>", serializer.serialize(source))

    def test_render_is_idempotent(self):
        source = chain_source(3, width=3)
        serializer = HtmlTableSerializer(max_rows=5)
        self.assertEqual(serializer.serialize(source), serializer.serialize(source))


if __name__ == "__main__":
    unittest.main()
