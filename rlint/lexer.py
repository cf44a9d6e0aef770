from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, replace
import re


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit of R source. Line/column spans are 1-based and inclusive."""

    id: int
    token: str
    text: str
    line1: int
    col1: int
    line2: int
    col2: int


class RParseError(ValueError):
    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column


KEYWORDS: dict[str, str] = {
    "if": "IF",
    "else": "ELSE",
    "repeat": "REPEAT",
    "while": "WHILE",
    "for": "FOR",
    "in": "IN",
    "next": "NEXT",
    "break": "BREAK",
    "function": "FUNCTION",
    "TRUE": "NUM_CONST",
    "FALSE": "NUM_CONST",
    "NA": "NUM_CONST",
    "NA_integer_": "NUM_CONST",
    "NA_real_": "NUM_CONST",
    "NA_character_": "NUM_CONST",
    "NA_complex_": "NUM_CONST",
    "Inf": "NUM_CONST",
    "NaN": "NUM_CONST",
    "NULL": "NULL_CONST",
}

# Longest operators first so that "<<-" wins over "<-" and "<".
OPERATORS: tuple[tuple[str, str], ...] = (
    ("<<-", "LEFT_ASSIGN"),
    ("->>", "RIGHT_ASSIGN"),
    (":::", "NS_GET_INT"),
    ("<-", "LEFT_ASSIGN"),
    ("->", "RIGHT_ASSIGN"),
    (":=", "LEFT_ASSIGN"),
    ("::", "NS_GET"),
    ("|>", "PIPE"),
    ("<=", "LE"),
    (">=", "GE"),
    ("==", "EQ"),
    ("!=", "NE"),
    ("&&", "AND2"),
    ("||", "OR2"),
    ("**", "'^'"),
    ("[[", "LBB"),
    ("<", "LT"),
    (">", "GT"),
    ("&", "AND"),
    ("|", "OR"),
    ("!", "'!'"),
    ("=", "EQ_ASSIGN"),
    ("+", "'+'"),
    ("-", "'-'"),
    ("*", "'*'"),
    ("/", "'/'"),
    ("^", "'^'"),
    ("~", "'~'"),
    ("?", "'?'"),
    (":", "':'"),
    ("$", "'$'"),
    ("@", "'@'"),
    ("\\", "'\\\\'"),
    ("(", "'('"),
    (")", "')'"),
    ("{", "'{'"),
    ("}", "'}'"),
    ("[", "'['"),
    ("]", "']'"),
    (",", "','"),
    (";", "';'"),
)

NUMBER_START_PATTERN = re.compile(r"[0-9]|\.[0-9]")
NUMBER_PATTERN = re.compile(
    r"(?:0[xX][0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?(?:[pP][+-]?\d+)?|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)[Li]?"
)
IDENTIFIER_PATTERN = re.compile(r"(?:[^\W\d_]|\.(?!\d))[\w.]*")
RAW_STRING_PATTERN = re.compile(r"[rR](['\"])(-*)([(\[{])")
RAW_STRING_CLOSERS = {"(": ")", "[": "]", "{": "}"}
WHITESPACE = " \t\r\n\f\v"


class _Bracket:
    __slots__ = ("kind", "opener", "remaining")

    def __init__(self, kind: str, opener: Token, remaining: int = 1) -> None:
        self.kind = kind
        self.opener = opener
        self.remaining = remaining


class _Lexer:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.line_starts = [0] + [m.end() for m in re.finditer("\n", text)]
        self.tokens: list[Token] = []
        self.stack: list[_Bracket] = []
        self.prev_index: int | None = None
        self.prev_ends_expression = False

    def position(self, offset: int) -> tuple[int, int]:
        idx = bisect_right(self.line_starts, offset) - 1
        return idx + 1, offset - self.line_starts[idx] + 1

    def error(self, message: str, offset: int) -> RParseError:
        line, column = self.position(offset)
        return RParseError(message, line, column)

    def run(self) -> list[Token]:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char in WHITESPACE:
                # A newline ends the expression unless a paren or index bracket is open.
                if char == "\n" and (not self.stack or self.stack[-1].kind == "brace"):
                    self.prev_ends_expression = False
                self.pos += 1
            elif char == "#":
                end = text.find("\n", self.pos)
                self.emit("COMMENT", self.pos, len(text) if end == -1 else end)
            elif RAW_STRING_PATTERN.match(text, self.pos):
                self.lex_raw_string()
            elif char in "\"'":
                self.lex_string(char)
            elif char == "`":
                end = self._find_closing("`", self.pos + 1)
                if end is None:
                    raise self.error("unterminated backtick name", self.pos)
                self.emit_value("SYMBOL", self.pos, end + 1)
            elif char == "%":
                end = text.find("%", self.pos + 1)
                newline = text.find("\n", self.pos + 1)
                if end == -1 or (newline != -1 and newline < end):
                    raise self.error("unterminated special operator", self.pos)
                self.emit_operator("SPECIAL", self.pos, end + 1)
            elif NUMBER_START_PATTERN.match(text, self.pos):
                self.lex_number()
            else:
                name = IDENTIFIER_PATTERN.match(text, self.pos)
                if name is not None:
                    self.lex_identifier(name.group(0), name.end())
                else:
                    self.lex_operator()

        if self.stack:
            opener = self.stack[-1].opener
            raise RParseError(f"unexpected end of input; unclosed {opener.text!r}", opener.line1, opener.col1)
        return self.tokens

    def _find_closing(self, quote: str, start: int) -> int | None:
        idx = start
        while idx < len(self.text):
            char = self.text[idx]
            if char == "\\":
                idx += 2
                continue
            if char == quote:
                return idx
            idx += 1
        return None

    def lex_string(self, quote: str) -> None:
        end = self._find_closing(quote, self.pos + 1)
        if end is None:
            raise self.error("unterminated string constant", self.pos)
        self.emit_value("STR_CONST", self.pos, end + 1)

    def lex_number(self) -> None:
        number = NUMBER_PATTERN.match(self.text, self.pos)
        if number is None:
            raise self.error("malformed numeric constant", self.pos)
        self.emit_value("NUM_CONST", self.pos, number.end())

    def lex_raw_string(self) -> None:
        match = RAW_STRING_PATTERN.match(self.text, self.pos)
        if match is None:
            raise self.error("malformed raw string constant", self.pos)
        quote, dashes, opener = match.groups()
        terminator = RAW_STRING_CLOSERS[opener] + dashes + quote
        end = self.text.find(terminator, match.end())
        if end == -1:
            raise self.error("unterminated raw string constant", self.pos)
        self.emit_value("STR_CONST", self.pos, end + len(terminator))

    def lex_identifier(self, name: str, end: int) -> None:
        keyword = KEYWORDS.get(name)
        if keyword in ("NUM_CONST", "NULL_CONST"):
            self.emit_value(keyword, self.pos, end)
        elif keyword is not None:
            self.emit_operator(keyword, self.pos, end)
        elif self._at_formal_name():
            self.emit_operator("SYMBOL_FORMALS", self.pos, end)
        else:
            self.emit_value("SYMBOL", self.pos, end)

    def _at_formal_name(self) -> bool:
        if not self.stack or self.stack[-1].kind != "formals" or self.prev_index is None:
            return False
        return self.tokens[self.prev_index].token in ("'('", "','")

    def lex_operator(self) -> None:
        for text, kind in OPERATORS:
            if self.text.startswith(text, self.pos):
                break
        else:
            raise self.error(f"unexpected input {self.text[self.pos]!r}", self.pos)

        start, end = self.pos, self.pos + len(text)
        if kind == "'('":
            self.open_paren(start, end)
        elif kind in ("'['", "LBB"):
            token = self.emit(kind, start, end)
            self.stack.append(_Bracket("index", token, 2 if kind == "LBB" else 1))
            self.prev_ends_expression = False
        elif kind == "'{'":
            token = self.emit(kind, start, end)
            self.stack.append(_Bracket("brace", token))
            self.prev_ends_expression = False
        elif kind in ("')'", "']'", "'}'"):
            self.close_bracket(kind, start, end)
        elif kind == "EQ_ASSIGN":
            self.emit_operator(self._classify_equals(), start, end)
        else:
            self.emit_operator(kind, start, end)

    def open_paren(self, start: int, end: int) -> None:
        prev = self.tokens[self.prev_index] if self.prev_index is not None else None
        if prev is not None and prev.token in ("FUNCTION", "'\\\\'"):
            kind = "formals"
        elif prev is not None and prev.token in ("IF", "WHILE", "FOR"):
            kind = "condition"
        elif self.prev_ends_expression:
            kind = "call"
            if prev is not None and prev.token == "SYMBOL":
                self.retag(self.prev_index, "SYMBOL_FUNCTION_CALL")
        else:
            kind = "group"
        token = self.emit("'('", start, end)
        self.stack.append(_Bracket(kind, token))
        self.prev_ends_expression = False

    def close_bracket(self, kind: str, start: int, end: int) -> None:
        expected = {"')'": ("call", "group", "formals", "condition"), "']'": ("index",), "'}'": ("brace",)}[kind]
        if not self.stack or self.stack[-1].kind not in expected:
            raise self.error(f"unexpected {self.text[start:end]!r}", start)
        bracket = self.stack[-1]
        bracket.remaining -= 1
        if bracket.remaining == 0:
            self.stack.pop()
        self.emit(kind, start, end)
        self.prev_ends_expression = bracket.remaining == 0 and bracket.kind not in ("formals", "condition")

    def _classify_equals(self) -> str:
        context = self.stack[-1].kind if self.stack else None
        if context in ("call", "index"):
            if self.prev_index is not None and self.tokens[self.prev_index].token == "SYMBOL":
                self.retag(self.prev_index, "SYMBOL_SUB")
            return "EQ_SUB"
        if context == "formals":
            return "EQ_FORMALS"
        return "EQ_ASSIGN"

    def emit(self, kind: str, start: int, end: int) -> Token:
        line1, col1 = self.position(start)
        line2, col2 = self.position(end - 1)
        token = Token(
            id=len(self.tokens) + 1,
            token=kind,
            text=self.text[start:end],
            line1=line1,
            col1=col1,
            line2=line2,
            col2=col2,
        )
        self.tokens.append(token)
        if kind != "COMMENT":
            self.prev_index = len(self.tokens) - 1
        self.pos = end
        return token

    def emit_value(self, kind: str, start: int, end: int) -> None:
        self.emit(kind, start, end)
        self.prev_ends_expression = True

    def emit_operator(self, kind: str, start: int, end: int) -> None:
        self.emit(kind, start, end)
        self.prev_ends_expression = False

    def retag(self, index: int | None, kind: str) -> None:
        if index is None:
            return
        self.tokens[index] = replace(self.tokens[index], token=kind)


def tokenize(text: str) -> list[Token]:
    """Split R source into tokens tagged with R parse-data names."""
    return _Lexer(text).run()
