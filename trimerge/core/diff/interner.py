"""
Line interning for token-level diffing.

Every distinct line seen during one merge is assigned a small positive
integer. Identical lines in base, mine and yours share a token, so the
block matcher compares integers instead of strings.
"""

from __future__ import annotations

from typing import Iterable, Sequence

# Token reserved for the end-of-text sentinel
SENTINEL = 0


def split_lines(text: str) -> list[str]:
    """
    Split text into lines without their terminators.

    Lines end at ``\\n`` or ``\\r\\n``. A final line with no terminator still
    counts, an empty text has no lines.
    """
    if not text:
        return []
    *terminated, last = text.split('\n')
    lines = [line[:-1] if line.endswith('\r') else line for line in terminated]
    if last:
        lines.append(last)
    return lines


class LineInterner:
    """
    Canonical table mapping lines to tokens for a single merge.

    Not shared between merges; build a new one for each invocation.
    """

    def __init__(self):
        self._lines: list[str] = ['']
        self._tokens: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._lines) - 1

    def intern(self, text: str) -> list[int]:
        """Tokenize ``text``, appending the trailing sentinel."""
        tokens = [self._token_for(line) for line in split_lines(text)]
        tokens.append(SENTINEL)
        return tokens

    def resolve(self, tokens: Iterable[int]) -> str:
        """Rebuild text from tokens, one ``\\n``-terminated line per token."""
        return ''.join(f"{self.line(token)}\n" for token in tokens)

    def line(self, token: int) -> str:
        if not 0 <= token < len(self._lines):
            raise KeyError(token)
        return self._lines[token]

    def _token_for(self, line: str) -> int:
        token = self._tokens.get(line)
        if token is None:
            token = len(self._lines)
            self._lines.append(line)
            self._tokens[line] = token
        return token


def intern_all(interner: LineInterner, *texts: str) -> Sequence[list[int]]:
    """Intern several texts in order against the same table."""
    return tuple(interner.intern(text) for text in texts)
