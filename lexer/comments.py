"""
lexer/comments.py — ekstrakcja komentarzy z tekstu źródłowego.

Jeden przebieg od lewej do prawej:
  "//" → komentarz do najbliższego "\\n" (lub końca tekstu)
  "/*" → komentarz do najbliższego "*/" (lub końca tekstu, gdy brak)

Bez zagnieżdżania: "//" wewnątrz komentarza blokowego jest zwykłym tekstem
i na odwrót. To jedyne miejsce, które decyduje "czy jestem w komentarzu".
"""

from __future__ import annotations

from data_model.sources import CommentList, CommentSpan


def extract_comments(src: str) -> CommentList:
    comments: CommentList = []
    index = 0
    n = len(src)

    while index < n - 1:
        pair = src[index:index + 2]
        if pair == "//":
            end = src.find("\n", index)
            if end == -1:
                end = n
            comments.append(CommentSpan(index, end, src[index + 2:end].strip()))
            index = end
        elif pair == "/*":
            close = src.find("*/", index + 2)
            if close == -1:
                # niezamknięty komentarz blokowy: do końca tekstu
                comments.append(CommentSpan(index, n, src[index + 2:].strip()))
                index = n
            else:
                comments.append(CommentSpan(index, close + 2, src[index + 2:close].strip()))
                index = close + 2
        else:
            index += 1

    return comments
