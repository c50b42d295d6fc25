"""
Tests for placeholder resolution.
"""

import unittest

from css_url_parser.processor import UrlParser
from css_url_parser.resolver import public_path_resolver, render_url, resolve_placeholders
from css_url_parser.result import ImportRequest, ReplaceDirective
from css_url_parser.sources import Stylesheet


class TestRenderUrl(unittest.TestCase):
    def test_plain(self):
        self.assertEqual(render_url("a.png"), "a.png")

    def test_hash_appended(self):
        self.assertEqual(render_url("font.eot", "?#iefix"), "font.eot?#iefix")

    def test_quoted_form_stays_string(self):
        self.assertEqual(render_url("a.png", quoted_form=True), '"a.png"')

    def test_quotes_added_when_needed(self):
        self.assertEqual(render_url("a b.png"), '"a b.png"')
        self.assertEqual(render_url("a(1).png"), '"a(1).png"')
        self.assertEqual(render_url('say"hi".png'), '"say\\"hi\\".png"')

    def test_backslash_escaped_before_quote(self):
        self.assertEqual(render_url('a\\"b.png'), '"a\\\\\\"b.png"')
        self.assertEqual(render_url("dir\\a.png", quoted_form=True), '"dir\\\\a.png"')

    def test_surrounding_quotes_stripped(self):
        self.assertEqual(render_url("'a.png'"), "a.png")
        self.assertEqual(render_url('"a.png"', "#x"), "a.png#x")


class TestResolvePlaceholders(unittest.TestCase):
    def test_identity_resolution(self):
        messages = [
            ImportRequest(0, "a.png", "", False, "P0"),
            ReplaceDirective("P0"),
            ImportRequest(1, "b.svg", "#x", True, "P1"),
            ReplaceDirective("P1"),
        ]
        text = "url(P0) image-set(P1 1x) url(P0)"
        self.assertEqual(
            resolve_placeholders(text, messages),
            'url(a.png) image-set("b.svg#x" 1x) url(a.png)',
        )

    def test_resolver_callable(self):
        messages = [ImportRequest(0, "a.png", "", False, "P0"), ReplaceDirective("P0")]
        out = resolve_placeholders("url(P0)", messages, lambda url: "a.1234.png")
        self.assertEqual(out, "url(a.1234.png)")

    def test_resolver_returning_none_keeps_url(self):
        messages = [ImportRequest(0, "a.png", "", False, "P0"), ReplaceDirective("P0")]
        self.assertEqual(resolve_placeholders("url(P0)", messages, lambda url: None), "url(a.png)")

    def test_prefix_placeholders_not_confused(self):
        messages = []
        for i in range(11):
            messages += [ImportRequest(i, f"img{i}.png", "", False, f"P{i}"), ReplaceDirective(f"P{i}")]
        out = resolve_placeholders("url(P1) url(P10)", messages)
        self.assertEqual(out, "url(img1.png) url(img10.png)")

    def test_resolved_url_not_rescanned(self):
        messages = [
            ImportRequest(0, "a.png", "", False, "P0"), ReplaceDirective("P0"),
            ImportRequest(1, "b.png", "", False, "P1"), ReplaceDirective("P1"),
        ]
        out = resolve_placeholders("url(P0) url(P1)", messages, {"a.png": "P1.png"}.get)
        self.assertEqual(out, "url(P1.png) url(b.png)")

    def test_replacer_without_import_ignored(self):
        self.assertEqual(resolve_placeholders("url(P9)", [ReplaceDirective("P9")]), "url(P9)")

    def test_full_cycle(self):
        css = "a { background: url( 'img/a.png' ) } b { background: image-set('img/a.png' 1x) }"
        sheet = Stylesheet.parse(css)
        result = UrlParser().process(sheet.declarations)
        out = resolve_placeholders(sheet.serialize(), result.messages, public_path_resolver("/static"))
        self.assertEqual(
            out,
            "a { background: url( /static/img/a.png ) } "
            "b { background: image-set(\"/static/img/a.png\" 1x) }",
        )


class TestPublicPathResolver(unittest.TestCase):
    def test_prefix_gets_trailing_slash(self):
        self.assertEqual(public_path_resolver("/static")("img/a.png"), "/static/img/a.png")

    def test_absolute_prefix(self):
        resolve = public_path_resolver("https://cdn.example.com/assets/")
        self.assertEqual(resolve("a.png"), "https://cdn.example.com/assets/a.png")
        self.assertEqual(resolve("../a.png"), "https://cdn.example.com/a.png")


if __name__ == "__main__":
    unittest.main()
