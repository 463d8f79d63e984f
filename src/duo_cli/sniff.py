"""Infer the type of source text piped on stdin."""

from __future__ import annotations

import re

_COMMENT_BLOCK = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)
_STRING = re.compile(r"""(["'`])(?:\\.|(?!\1)[^\\])*\1""", re.DOTALL)

_JS_MARKERS = (
    re.compile(r"\brequire\s*\("),
    re.compile(r"^\s*import\b[^;{]*?\bfrom\b", re.MULTILINE),
    re.compile(r"^\s*import\s*\(", re.MULTILINE),
    re.compile(r"^\s*export\s+(default\b|const\b|let\b|var\b|function\b|class\b|\{)", re.MULTILINE),
    re.compile(r"\bmodule\.exports\b"),
    re.compile(r"\bfunction\b\s*[\w$]*\s*\("),
    re.compile(r"\b(var|let|const)\s+[\w$\[{]"),
    re.compile(r"=>"),
    re.compile(r"^\s*(return|typeof)\b", re.MULTILINE),
    re.compile(r"\bnew\s+[A-Z_$][\w$]*\s*\("),
    re.compile(r"^\s*[\w$.]+\s*\([^)]*\)\s*;?\s*$", re.MULTILINE),
)

_CSS_AT_RULE = re.compile(r"@(import|media|font-face|keyframes|charset|supports|page|namespace)\b")
# Only the last declaration may omit its ";" so a value never spans two declarations.
_CSS_RULE = re.compile(r"[^{};]+\{\s*(?:[-\w]+\s*:\s*[^;{}]+;\s*)*(?:[-\w]+\s*:\s*[^;{}]+)?\s*\}")
_CSS_DECLARATION = re.compile(r"[-\w]+\s*:\s*[^;{}]+")


def _strip_noise(source: str) -> str:
    text = _COMMENT_BLOCK.sub(" ", source)
    text = _LINE_COMMENT.sub(" ", text)
    return text


def _looks_like_js(text: str) -> bool:
    code = _STRING.sub('""', text)
    return any(marker.search(code) for marker in _JS_MARKERS)


def _looks_like_css(text: str) -> bool:
    if _CSS_AT_RULE.search(text):
        return True
    rules = _CSS_RULE.findall(text)
    if not rules:
        return False
    leftover = _CSS_RULE.sub(" ", text).strip()
    return not leftover and any(_CSS_DECLARATION.search(rule) for rule in rules)


def sniff_type(source: str) -> str | None:
    """Return ``"js"`` or ``"css"`` for ``source``, or ``None`` when undecidable."""
    text = _strip_noise(source).strip()
    if not text:
        return None

    if _looks_like_js(text):
        return "js"
    if _looks_like_css(text):
        return "css"
    return None


__all__ = ["sniff_type"]
