"""Read-only cursor over an argument vector."""

from typing import Optional, Sequence

from .types import ArgsList


class TokenSource:
    """Ordered, indexable view over argument tokens with a movable cursor."""

    def __init__(self, tokens: Sequence[str], index: int = 0):
        self._tokens = tuple(tokens)
        self._index = 0
        self.seek(index)

    @classmethod
    def from_argv(cls, argv: Sequence[str]) -> "TokenSource":
        """Build a source from a full argv, skipping the program name."""
        return cls(argv[1:])

    def __len__(self) -> int:
        return len(self._tokens)

    def __getitem__(self, index: int) -> str:
        return self._tokens[index]

    @property
    def index(self) -> int:
        return self._index

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._tokens)

    def peek(self) -> Optional[str]:
        """Return the token under the cursor without consuming it."""
        if self.exhausted:
            return None
        return self._tokens[self._index]

    def advance(self) -> str:
        """Consume and return the token under the cursor."""
        if self.exhausted:
            raise IndexError("token source is exhausted")
        token = self._tokens[self._index]
        self._index += 1
        return token

    def seek(self, index: int) -> None:
        if not 0 <= index <= len(self._tokens):
            raise IndexError(f"token index {index} out of range")
        self._index = index

    def remaining(self) -> ArgsList:
        """Tokens from the cursor to the end."""
        return list(self._tokens[self._index :])
