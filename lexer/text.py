"""
lexer/text.py — normalizacja białych znaków i drobne operacje tekstowe.

Co robimy:
  - simplify_whitespace: każdy ciąg białych znaków → jedna spacja, strip()
  - collapse_blank_lines: max jedna pusta linia pod rząd (format Markdown)
  - unquote: zdejmuje parę cudzysłowów z nazw ("x" → x)
  - strip_enclosing: zdejmuje jedną warstwę (), {}, [] lub "" z treści
"""

from __future__ import annotations

import re

# Dwie lub więcej pustych linii (linie mogą zawierać spacje/taby).
_BLANK_RUN_RE = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")

# Znaki otwierające, które NEW_ALIAS / NEW_COMMAND zdejmują z treści.
_ENCLOSING_OPENERS = "({[\""


def simplify_whitespace(text: str) -> str:
    return " ".join(text.split())


def collapse_blank_lines(text: str) -> str:
    """Zastępuje każdy ciąg 2+ pustych linii dokładnie jedną pustą linią."""
    return _BLANK_RUN_RE.sub("\n\n", text)


def unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def strip_enclosing(text: str) -> str:
    """
    Usuwa jedną zewnętrzną warstwę nawiasów lub cudzysłowów.

    Decyduje wyłącznie pierwszy znak — ostatni znak jest odcinany bez
    sprawdzania, czy pasuje (np. "{a, b}" → "a, b").
    """
    text = text.strip()
    if text and text[0] in _ENCLOSING_OPENERS:
        return text[1:-1]
    return text
