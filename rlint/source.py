from __future__ import annotations

from collections import defaultdict
from pathlib import Path

from rlint.lexer import Token, tokenize


class SourceFile:
    __slots__ = ("filename", "content", "lines", "tokens", "_by_id", "_by_type")

    def __init__(self, filename: str, content: str, tokens: list[Token]) -> None:
        self.filename = filename
        self.content = content
        self.lines: tuple[str, ...] = tuple(line.rstrip("\r") for line in content.split("\n"))
        if content.endswith("\n") or not content:
            self.lines = self.lines[:-1]
        self.tokens: tuple[Token, ...] = tuple(tokens)
        self._by_id = {token.id: token for token in self.tokens}
        by_type: defaultdict[str, list[int]] = defaultdict(list)
        for token in self.tokens:
            by_type[token.token].append(token.id)
        self._by_type = {kind: tuple(ids) for kind, ids in by_type.items()}

    def line(self, line_number: int) -> str:
        return self.lines[line_number - 1]

    def numbered_lines(self):
        return enumerate(self.lines, start=1)

    def ids_with_token(self, token_type: str) -> list[int]:
        return list(self._by_type.get(token_type, ()))

    def with_id(self, token_id: int) -> Token:
        return self._by_id[token_id]

    def previous_token(self, token_id: int) -> Token | None:
        """Nearest token before `token_id`, skipping comments."""
        for candidate in range(token_id - 1, 0, -1):
            token = self._by_id[candidate]
            if token.token != "COMMENT":
                return token
        return None

    def next_token(self, token_id: int) -> Token | None:
        """Nearest token after `token_id`, skipping comments."""
        for candidate in range(token_id + 1, len(self.tokens) + 1):
            token = self._by_id[candidate]
            if token.token != "COMMENT":
                return token
        return None

    def __repr__(self) -> str:
        return f"SourceFile({self.filename!r}, lines={len(self.lines)}, tokens={len(self.tokens)})"


def parse_source(text: str, filename: str = "<text>") -> SourceFile:
    return SourceFile(filename, text, tokenize(text))


def read_source_file(path: str | Path) -> SourceFile:
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8", errors="replace")
    return parse_source(text, str(file_path))
