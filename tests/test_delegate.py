import unittest

from textview.delegate import ALL, HEADER, Conversion, HtmlDelegate, TextDelegate
from textview.model import Axis, TreeItem, TreeSource
from textview.serializers import HtmlTableSerializer


def source():
    return TreeSource(
        headers=["Name", "State"],
        items=[TreeItem(["<job>", "ok"]), TreeItem(["see http://x.org/a", "ko"])],
        row_headers=["1", "2"],
    )


class TestTextDelegate(unittest.TestCase):
    def test_verbatim(self):
        delegate = TextDelegate()
        self.assertEqual(delegate.text(source(), None, 0, 0), "<job>")
        self.assertEqual(delegate.header_text(source(), Axis.COLUMN, 1), "State")

    def test_missing_values_are_blank(self):
        delegate = TextDelegate()
        self.assertEqual(delegate.header_text(source(), Axis.COLUMN, 9), "")


class TestHtmlDelegate(unittest.TestCase):
    """Test conversions and affixes."""

    def test_escaping_with_links(self):
        delegate = HtmlDelegate()
        self.assertEqual(delegate.text(source(), None, 0, 0), "&lt;job&gt;")
        self.assertEqual(delegate.text(source(), None, 1, 0),
                         'see <a href="http://x.org/a">http://x.org/a</a>')

    def test_quoted_url_keeps_quotes_outside_link(self):
        """Characters around a URL are escaped apart from the link."""
        delegate = HtmlDelegate()
        self.assertEqual(
            delegate.convert('see "http://x.org/a?b=1&c=2"'),
            'see &quot;<a href="http://x.org/a?b=1&amp;c=2">'
            'http://x.org/a?b=1&amp;c=2</a>&quot;')

    def test_url_between_angle_brackets(self):
        delegate = HtmlDelegate()
        self.assertEqual(delegate.convert("<https://x.org>"),
                         '&lt;<a href="https://x.org">https://x.org</a>&gt;')

    def test_apostrophe_is_escaped(self):
        delegate = HtmlDelegate(Conversion.ESCAPE)
        self.assertEqual(delegate.convert("it's"), "it&#39;s")

    def test_plain_escaping(self):
        delegate = HtmlDelegate(Conversion.ESCAPE)
        self.assertEqual(delegate.text(source(), None, 1, 0), "see http://x.org/a")

    def test_as_is(self):
        delegate = HtmlDelegate(Conversion.AS_IS)
        self.assertEqual(delegate.text(source(), None, 0, 0), "<job>")

    def test_clipping(self):
        delegate = HtmlDelegate(Conversion.AS_IS, max_length=10)
        self.assertEqual(delegate.convert("abcdefghijklmnop"), "abcd...nop")
        self.assertEqual(delegate.convert("short"), "short")

    def test_no_clipping(self):
        delegate = HtmlDelegate(Conversion.AS_IS, max_length=0)
        self.assertEqual(delegate.convert("x" * 500), "x" * 500)

    def test_column_prefix_with_transcoded_argument(self):
        delegate = HtmlDelegate(Conversion.AS_IS)
        delegate.set_prefix_for_column(0, '<img src="{}.png"/>', arg_column=1,
                                       transcode={"ok": "green", "ko": "red"})
        self.assertEqual(delegate.text(source(), None, 0, 0),
                         '<img src="green.png"/><job>')
        self.assertEqual(delegate.text(source(), None, 0, 1), "ok")

    def test_affix_order(self):
        delegate = HtmlDelegate(Conversion.AS_IS)
        (delegate
         .set_prefix_for_column(ALL, "[c")
         .set_prefix_for_row(0, "[r")
         .set_suffix_for_row(ALL, "r]")
         .set_suffix_for_column(1, "c]"))
        self.assertEqual(delegate.text(source(), None, 0, 1), "[c[rokr]c]")
        self.assertEqual(delegate.text(source(), None, 1, 0), "[csee http://x.org/ar]")

    def test_header_affixes(self):
        delegate = HtmlDelegate(Conversion.AS_IS)
        delegate.set_prefix_for_column(HEADER, "<b>").set_suffix_for_column(HEADER, "</b>")
        delegate.set_prefix_for_row(HEADER, "#{}:", arg_column=1)
        self.assertEqual(delegate.header_text(source(), Axis.COLUMN, 0), "<b>Name</b>")
        self.assertEqual(delegate.header_text(source(), Axis.ROW, 1), "#ko:2")

    def test_clear_affixes(self):
        delegate = HtmlDelegate(Conversion.AS_IS).set_prefix_for_row(ALL, "x")
        delegate.clear_affixes()
        self.assertEqual(delegate.text(source(), None, 0, 1), "ok")

    def test_used_by_table_serializer(self):
        serializer = HtmlTableSerializer(delegate=HtmlDelegate(Conversion.ESCAPE))
        result = serializer.serialize(source())
        self.assertIn("<td>&lt;job&gt;</td>", result)


if __name__ == "__main__":
    unittest.main()
