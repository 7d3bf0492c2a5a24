"""Utilities for cleaning text pulled out of uploaded documents.

Kept small and predictable: nothing here changes wording, only whitespace and
obvious PDF artifacts.
"""
from __future__ import annotations

import re


MAX_BLANK_LINES = 2

_INLINE_SPACE = re.compile(r"[^\S\n]+")
_LINE_EDGES = re.compile(r" *\n *")
_BLANK_RUN = re.compile(r"\n{%d,}" % (MAX_BLANK_LINES + 2))


def compact_whitespace(s: str) -> str:
    """Single spaces within lines, no spaces at line edges, at most MAX_BLANK_LINES blank lines in a row."""
    if not s:
        return ""
    s = _INLINE_SPACE.sub(" ", s)
    s = _LINE_EDGES.sub("\n", s)
    s = _BLANK_RUN.sub("\n" * (MAX_BLANK_LINES + 1), s)
    return s.strip()


def strip_artifacts(s: str) -> str:
    """Remove common PDF artifacts: hyphenated line breaks and bare page footers."""
    if not s:
        return ""
    # "exam-\nple" -> "example"
    s = re.sub(r"(\w)-\n\s*(\w)", r"\1\2", s)
    s = re.sub(r"\n[ \t]*Page[ \t]+\d+[ \t]*(/[ \t]*\d+)?[ \t]*(?=\n)", "", s, flags=re.I)
    return s


def clean_extracted(s: str) -> str:
    return compact_whitespace(strip_artifacts(s))
