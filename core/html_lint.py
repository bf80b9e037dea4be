# core/html_lint.py
import bisect
import re
from typing import List, Tuple
from core.entities import LintIssue, LintReport
from util.constants import VOID_ELEMENTS

SNIPPET_MAX = 100

_TAG_RE = re.compile(r"</?([a-zA-Z][a-zA-Z0-9]*)")
_IMG_RE = re.compile(r"<img\s+([^>]*?)>", re.IGNORECASE)
_UNQUOTED_ATTR_RE = re.compile(r"<[^>]*[a-zA-Z]+=[^\"'][^>\s]*[^\"'\s>]")


class _Locator:
    """Maps absolute offsets in the text to (line, column) and line snippets."""

    def __init__(self, text: str) -> None:
        self._lines = text.split("\n")
        self._starts: List[int] = []
        pos = 0
        for line in self._lines:
            self._starts.append(pos)
            pos += len(line) + 1

    def _index(self, pos: int) -> Tuple[int, int]:
        idx = bisect.bisect_right(self._starts, pos) - 1
        idx = max(0, min(idx, len(self._lines) - 1))
        return idx, pos - self._starts[idx]

    def line_col(self, pos: int) -> Tuple[int, int]:
        idx, col = self._index(pos)
        return idx + 1, col

    def snippet(self, pos: int, max_length: int = SNIPPET_MAX) -> str:
        idx, col = self._index(pos)
        line = self._lines[idx]
        start = max(0, col - max_length // 2)
        end = min(len(line), start + max_length)
        return line[start:end].strip()


def validate_html(html: str) -> LintReport:
    """
    Cheap structural lint for user pages; not a conformance checker.

    Errors: closing tag that does not match the innermost open tag, closing tag
    with nothing open, tags left open at the end. Void elements never open.
    Warnings: <img> without alt, attribute values without quotes.
    """
    loc = _Locator(html)
    issues: List[LintIssue] = []

    def _issue(kind: str, message: str, pos: int) -> LintIssue:
        line, col = loc.line_col(pos)
        return LintIssue(
            type=kind, message=message, line=line, column=col, codeSnippet=loc.snippet(pos)
        )

    open_tags: List[Tuple[str, LintIssue]] = []
    for m in _TAG_RE.finditer(html):
        name = m.group(1).lower()
        if m.group(0).startswith("</"):
            if not open_tags:
                issues.append(_issue("error", f"Unmatched closing tag '{name}'", m.start()))
                continue
            last_name, _ = open_tags.pop()
            if last_name != name:
                issues.append(
                    _issue(
                        "error",
                        f"Possible mismatch: expected closing tag for '{last_name}', "
                        f"got closing tag for '{name}'",
                        m.start(),
                    )
                )
        elif name not in VOID_ELEMENTS:
            open_tags.append((name, _issue("error", f"Unclosed tag '{name}'", m.start())))

    issues.extend(pending for _, pending in open_tags)

    for m in _IMG_RE.finditer(html):
        if "alt=" not in m.group(0).lower():
            issues.append(_issue("warning", "Image tag missing alt attribute", m.start()))

    for m in _UNQUOTED_ATTR_RE.finditer(html):
        issues.append(_issue("warning", "Attribute without quotes", m.start()))

    return LintReport(valid=not issues, issues=issues)
