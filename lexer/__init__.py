"""
lexer — prymitywy leksykalne: białe znaki, podział argumentów, komentarze.

Interfejs publiczny:
    simplify_whitespace, collapse_blank_lines, unquote, strip_enclosing
    split_args, ArgSplit
    extract_comments
"""

from .text import simplify_whitespace, collapse_blank_lines, unquote, strip_enclosing
from .args import ArgSplit, split_args
from .comments import extract_comments

__all__ = [
    "simplify_whitespace",
    "collapse_blank_lines",
    "unquote",
    "strip_enclosing",
    "ArgSplit",
    "split_args",
    "extract_comments",
]
