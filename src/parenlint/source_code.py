"""Token lookups around nodes.

``SourceCode`` pairs the source text with its token stream and answers
"Nth token before/after this node" queries by binary search over token
start offsets.
"""
from __future__ import annotations

from bisect import bisect_left
from typing import List, Optional, Sequence, Union

from lark import Token

from .nodes import Node, Span

Located = Union[Node, Token]


def span_of(item: Located) -> Span:
    if isinstance(item, Token):
        return item.start_pos, item.end_pos
    return item.range


class SourceCode:
    def __init__(self, text: str, program: Node, tokens: Optional[Sequence[Token]] = None):
        self.text = text
        self.tokens: List[Token] = list(tokens if tokens is not None else program.tokens)
        self._starts = [tok.start_pos for tok in self.tokens]

    def _index_at_or_after(self, offset: int) -> int:
        return bisect_left(self._starts, offset)

    def token_before(self, item: Located, skip: int = 0) -> Optional[Token]:
        """Token ``skip`` places before the first token of ``item``."""
        index = self._index_at_or_after(span_of(item)[0]) - 1 - skip
        if index < 0:
            return None
        return self.tokens[index]

    def token_after(self, item: Located, skip: int = 0) -> Optional[Token]:
        """Token ``skip`` places after the last token of ``item``."""
        index = self._index_at_or_after(span_of(item)[1]) + skip
        if index >= len(self.tokens):
            return None
        return self.tokens[index]

    def first_tokens(self, item: Located, count: int) -> List[Token]:
        """Up to ``count`` tokens from the start of ``item``, never past its end."""
        start, end = span_of(item)
        result: List[Token] = []
        index = self._index_at_or_after(start)
        while index < len(self.tokens) and len(result) < count:
            tok = self.tokens[index]
            if tok.end_pos > end:
                break
            result.append(tok)
            index += 1
        return result

    def first_token(self, item: Located) -> Optional[Token]:
        tokens = self.first_tokens(item, 1)
        return tokens[0] if tokens else None
