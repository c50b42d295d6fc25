"""
css_url_parser.result
=====================
Output records and the diagnostic sink shared by one processing run.

A run produces, per unique reference, one :class:`ImportRequest` followed by
one :class:`ReplaceDirective`.  Warnings never stop a run; they are collected
on the :class:`ProcessResult` and echoed to the package logger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .config import PLUGIN_NAME

log = logging.getLogger("css-url-parser")


@dataclass(frozen=True)
class ImportRequest:
    """Ask a resolver to turn *url* into final text for *placeholder*."""

    index: int
    url: str
    hash: str
    quoted_form: bool
    placeholder: str

    type = "import"

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugin": PLUGIN_NAME,
            "type": self.type,
            "value": {
                "type": "url",
                "index": self.index,
                "name": self.placeholder,
                "url": self.url,
                "hash": self.hash,
                "needQuotes": self.quoted_form,
            },
        }


@dataclass(frozen=True)
class ReplaceDirective:
    """Tells the resolver that *placeholder* occurs in rewritten CSS."""

    placeholder: str

    type = "replacer"

    def to_dict(self) -> dict[str, Any]:
        return {
            "plugin": PLUGIN_NAME,
            "type": self.type,
            "value": {"type": "url", "name": self.placeholder},
        }


@dataclass(frozen=True)
class UrlWarning:
    text: str
    source: Any = None
    level: str = "warning"

    def __str__(self) -> str:
        loc = _format_source(self.source)
        return f"{loc}: {self.text}" if loc else self.text


def _format_source(source: Any) -> str:
    if source is None:
        return ""
    if isinstance(source, tuple) and len(source) == 2:
        return "%s:%s" % source
    return str(source)


@dataclass
class ProcessResult:
    """Everything one run produced: records, diagnostics, touched declarations."""

    messages: list = field(default_factory=list)
    warnings: list[UrlWarning] = field(default_factory=list)
    declarations: list = field(default_factory=list)

    def _report(self, text: str, node: Any, level: str) -> UrlWarning:
        source = getattr(node, "source", None) if node is not None else None
        warning = UrlWarning(text, source, level)
        self.warnings.append(warning)
        if level == "error":
            log.error("%s", warning)
        else:
            log.warning("%s", warning)
        return warning

    def warn(self, text: str, node: Any = None) -> UrlWarning:
        return self._report(text, node, "warning")

    def error(self, text: str, node: Any = None) -> UrlWarning:
        return self._report(text, node, "error")

    def imports(self) -> list[ImportRequest]:
        return [m for m in self.messages if isinstance(m, ImportRequest)]

    def placeholders(self) -> list[str]:
        return [m.placeholder for m in self.messages if isinstance(m, ReplaceDirective)]

    def find_import(self, placeholder: str) -> Optional[ImportRequest]:
        for message in self.imports():
            if message.placeholder == placeholder:
                return message
        return None

    def to_dicts(self) -> list[dict[str, Any]]:
        return [m.to_dict() for m in self.messages]
