"""
Tests for the command-line entry point.
"""

import io
import json
import logging
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

import requests

from css_url_parser.cli import main, parse_args
from css_url_parser.config import PLACEHOLDER_TEMPLATE
from css_url_parser.logging_setup import setup_logging


CSS = "a { background: url(img/a.png) } b { background: url(http://cdn.example.com/b.png) }\n"


def _run(argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        code = main(argv + ["--quiet"])
    return code, buf.getvalue()


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        args = parse_args(["style.css"])
        self.assertEqual(args.inputs, ["style.css"])
        self.assertEqual(args.output, "-")
        self.assertEqual(args.placeholder, PLACEHOLDER_TEMPLATE)
        self.assertFalse(args.all_urls)
        self.assertEqual(args.exclude, [])
        self.assertTrue(args.verify_ssl)

    def test_repeatable_exclude(self):
        args = parse_args(["a.css", "--exclude", "x", "--exclude", "y", "--all"])
        self.assertEqual(args.exclude, ["x", "y"])
        self.assertTrue(args.all_urls)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.css = self.tmp / "style.css"
        self.css.write_text(CSS, encoding="utf-8")

    def tearDown(self):
        self._tmp.cleanup()

    def test_stdout_output(self):
        code, out = _run([str(self.css), "--placeholder", "U{index}"])
        self.assertEqual(code, 0)
        self.assertEqual(
            out, "a { background: url(U0) } b { background: url(http://cdn.example.com/b.png) }\n"
        )

    def test_all_urls(self):
        code, out = _run([str(self.css), "--placeholder", "U{index}", "--all"])
        self.assertEqual(code, 0)
        self.assertIn("url(U1)", out)

    def test_exclude(self):
        code, out = _run([str(self.css), "--placeholder", "U{index}", "--exclude", r"\.png$"])
        self.assertEqual(code, 0)
        self.assertEqual(out, CSS)

    def test_public_path(self):
        code, out = _run([str(self.css), "--public-path", "/static/"])
        self.assertEqual(code, 0)
        self.assertIn("url(/static/img/a.png)", out)
        self.assertNotIn("___", out)

    def test_output_dir_and_messages(self):
        out_dir = self.tmp / "out"
        messages = self.tmp / "messages.json"
        code, out = _run([
            str(self.css), "--output", str(out_dir),
            "--messages", str(messages), "--placeholder", "U{index}",
        ])
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertIn("url(U0)", (out_dir / "style.css").read_text(encoding="utf-8"))

        reports = json.loads(messages.read_text(encoding="utf-8"))
        self.assertEqual(len(reports), 1)
        self.assertEqual(reports[0]["input"], str(self.css))
        self.assertEqual(
            [m["type"] for m in reports[0]["messages"]], ["import", "replacer"]
        )
        self.assertEqual(reports[0]["messages"][0]["value"]["url"], "img/a.png")
        self.assertEqual(reports[0]["warnings"], [])

    def test_warnings_reported(self):
        self.css.write_text("a { background: url('') }", encoding="utf-8")
        messages = self.tmp / "messages.json"
        code, _ = _run([str(self.css), "--messages", str(messages)])
        self.assertEqual(code, 0)
        warnings = json.loads(messages.read_text(encoding="utf-8"))[0]["warnings"]
        self.assertEqual(warnings, ["1:5: Unable to find uri in 'background: url('')'"])

    def test_html_input(self):
        page = self.tmp / "index.html"
        page.write_text(
            '<html><body><div style="background: url(a.png)"></div></body></html>',
            encoding="utf-8",
        )
        code, out = _run([str(page), "--placeholder", "U{index}"])
        self.assertEqual(code, 0)
        self.assertIn('style="background: url(U0)"', out)

    def test_missing_file(self):
        code, _ = _run([str(self.tmp / "nope.css")])
        self.assertEqual(code, 1)

    def test_one_failure_does_not_stop_others(self):
        out_dir = self.tmp / "out"
        code, _ = _run([str(self.tmp / "nope.css"), str(self.css), "--output", str(out_dir)])
        self.assertEqual(code, 1)
        self.assertTrue((out_dir / "style.css").exists())

    def test_invalid_placeholder(self):
        for template in ("NO_INDEX", "{index}{x}", "{{index}}"):
            with self.subTest(template=template):
                code, out = _run([str(self.css), "--placeholder", template])
                self.assertEqual(code, 2)
                self.assertEqual(out, "")

    @patch("css_url_parser.cli.fetch_text")
    def test_remote_input(self, mock_fetch):
        mock_fetch.return_value = (CSS, "text/css")
        out_dir = self.tmp / "out"
        code, _ = _run([
            "https://example.com/assets/site.css", "--output", str(out_dir),
            "--placeholder", "U{index}",
        ])
        self.assertEqual(code, 0)
        self.assertEqual(mock_fetch.call_args[0][0], "https://example.com/assets/site.css")
        self.assertIn("url(U0)", (out_dir / "site.css").read_text(encoding="utf-8"))

    @patch("css_url_parser.cli.fetch_text")
    def test_remote_html_by_content_type(self, mock_fetch):
        mock_fetch.return_value = ('<p style="background: url(a.png)">x</p>', "text/html")
        out_dir = self.tmp / "out"
        code, _ = _run(["https://example.com/", "--output", str(out_dir)])
        self.assertEqual(code, 0)
        self.assertTrue((out_dir / "index.html").exists())

    @patch("css_url_parser.cli.fetch_text", side_effect=requests.ConnectionError("down"))
    def test_remote_failure(self, _mock_fetch):
        code, _ = _run(["https://example.com/site.css"])
        self.assertEqual(code, 1)


class TestSetupLogging(unittest.TestCase):
    def test_levels(self):
        log = logging.getLogger("css-url-parser")
        setup_logging(debug=True)
        self.assertEqual(log.level, logging.DEBUG)
        setup_logging(quiet=True)
        self.assertEqual(log.level, logging.WARNING)
        setup_logging()
        self.assertEqual(log.level, logging.INFO)
        self.assertEqual(len(log.handlers), 1)
        self.assertFalse(log.propagate)


if __name__ == "__main__":
    unittest.main()
