# Suppression extraction: find eslint-disable directives in raw source text.
# Works on text only; no JS/TS parsing, so directives inside strings are also seen.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Literal, Optional, Tuple

# /* eslint-disable rule-a, rule-b -- reason */ anywhere in the file, may span lines
BLOCK_DISABLE_RE = re.compile(r"/\*\s*eslint-disable\s+(?P<body>[^*]*)\*/")

# /* eslint-disable-line rules */ and /* eslint-disable-next-line rules */, may span lines
QUALIFIED_BLOCK_OPEN_RE = re.compile(r"/\*\s*eslint-disable(?:-next-line|-line)\s+")

# // eslint-disable[-line|-next-line] rules... to end of line
LINE_DISABLE_RE = re.compile(r"//\s*eslint-disable(?:-next-line|-line)?[ \t]+(?P<body>.*)")

JUSTIFICATION_SEPARATOR_RE = re.compile(r"\s*--\s*")

_RULE_ENTRY_RE = re.compile(r"[^,]+")

SuppressionKind = Literal["block", "line"]


@dataclass(frozen=True)
class SuppressionCandidate:
    """One (rule, position) pair taken from a suppression directive."""

    rule_name: str
    line: int
    column: int
    justification: Optional[str]
    kind: SuppressionKind

    @property
    def justification_missing(self) -> bool:
        return self.justification is None


def parse_rule_list(body: str) -> Tuple[List[Tuple[str, int]], Optional[str]]:
    """
    Split a directive body into rule names and an optional justification.

    Returns ``([(rule_name, offset_in_body), ...], justification_or_None)``.
    Rule names are trimmed and empty entries dropped; the justification is
    None when there is no ``--`` separator or nothing follows it.

    Examples:
        >>> parse_rule_list("no-console -- logging required")
        ([('no-console', 0)], 'logging required')
        >>> parse_rule_list(" foo, bar")
        ([('foo', 1), ('bar', 6)], None)
    """
    parts = JUSTIFICATION_SEPARATOR_RE.split(body, maxsplit=1)
    rules_part = parts[0]
    justification: Optional[str] = None
    if len(parts) == 2 and parts[1].strip():
        justification = parts[1].strip()

    rules: List[Tuple[str, int]] = []
    for m in _RULE_ENTRY_RE.finditer(rules_part):
        raw = m.group(0)
        name = raw.strip()
        if not name:
            continue
        leading = len(raw) - len(raw.lstrip())
        rules.append((name, m.start() + leading))
    return rules, justification


def _line_col(content: str, offset: int) -> Tuple[int, int]:
    """1-based (line, column) of a character offset in content."""
    line_start = content.rfind("\n", 0, offset) + 1
    return content.count("\n", 0, offset) + 1, offset - line_start + 1


def _iter_block_candidates(content: str) -> Iterator[SuppressionCandidate]:
    for match in BLOCK_DISABLE_RE.finditer(content):
        rules, justification = parse_rule_list(match.group("body"))
        for name, _ in rules:
            yield SuppressionCandidate(
                rule_name=name,
                line=1,
                column=1,
                justification=justification,
                kind="block",
            )


def _iter_qualified_block_candidates(content: str) -> Iterator[SuppressionCandidate]:
    for match in QUALIFIED_BLOCK_OPEN_RE.finditer(content):
        body_start = match.end()
        body_end = content.find("*/", body_start)
        if body_end < 0:
            # unterminated comment: the rule list runs to the end of the line
            body_end = content.find("\n", body_start)
            if body_end < 0:
                body_end = len(content)

        rules, justification = parse_rule_list(content[body_start:body_end])
        for name, offset in rules:
            line, column = _line_col(content, body_start + offset)
            yield SuppressionCandidate(
                rule_name=name,
                line=line,
                column=column,
                justification=justification,
                kind="line",
            )


def _iter_line_comment_candidates(content: str) -> Iterator[SuppressionCandidate]:
    for idx, raw_line in enumerate(content.split("\n")):
        line = raw_line.rstrip("\r")
        for match in LINE_DISABLE_RE.finditer(line):
            rules, justification = parse_rule_list(match.group("body"))
            body_start = match.start("body")
            for name, offset in rules:
                yield SuppressionCandidate(
                    rule_name=name,
                    line=idx + 1,
                    column=body_start + offset + 1,
                    justification=justification,
                    kind="line",
                )


def extract_suppressions(content: str) -> List[SuppressionCandidate]:
    """
    Return every suppression candidate in a file's text.

    Block-form candidates come first, all at line 1, column 1. Line-form
    candidates follow in (line, column) order, each at the exact position of
    its rule name; a qualified ``/* ... */`` directive spanning several lines
    reports each rule on the line where it is written. A directive naming
    several rules produces one candidate per rule.
    """
    candidates = list(_iter_block_candidates(content))
    line_form = list(_iter_qualified_block_candidates(content))
    line_form.extend(_iter_line_comment_candidates(content))
    line_form.sort(key=lambda c: (c.line, c.column))
    candidates.extend(line_form)
    return candidates
