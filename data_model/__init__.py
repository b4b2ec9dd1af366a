"""
data_model — struktury danych generatora dokumentacji.

Użycie:
  from data_model import SourceUnit, CommentSpan, CommandCall

Moduły:
  sources — SourceUnit, CommentSpan, CommandCall, CallSite, CommentList
"""

from .sources import (
    SourceUnit,
    CommentSpan,
    CommandCall,
    CallSite,
    CommentList,
)

__all__ = [
    "SourceUnit",
    "CommentSpan",
    "CommandCall",
    "CallSite",
    "CommentList",
]
