"""Monkey lexer — converts source text into a token stream, one token per pull."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from monkey.tokens import Position, Span, Token, TokenType, is_digit, is_letter, lookup_ident

# Sentinel for "no character": end of input
_EOF_CHAR = ""

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}

_WHITESPACE = frozenset(" \t\n\r")


class Lexer:
    """Pull-based tokenizer for Monkey source text.

    ``position`` indexes the current character, ``read_position`` the next one to
    read, and ``ch`` holds the character at ``position`` (empty at end of input).
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self.position = 0
        self.read_position = 0
        self.ch = _EOF_CHAR
        # line/column of ``ch``
        self._line = 1
        self._col = 0
        self._read_char()

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def _read_char(self) -> None:
        if self.ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1

        if self.read_position >= len(self._source):
            self.ch = _EOF_CHAR
        else:
            self.ch = self._source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> str:
        if self.read_position >= len(self._source):
            return _EOF_CHAR
        return self._source[self.read_position]

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, min(self.position, len(self._source)))

    def _skip_whitespace(self) -> None:
        while self.ch in _WHITESPACE:
            self._read_char()

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def next_token(self) -> Token:
        """Return the next token and advance past it.

        Once the input is exhausted every call returns an EOF token.
        """
        self._skip_whitespace()
        start = self._current_pos()
        ch = self.ch

        if ch == _EOF_CHAR:
            return Token(TokenType.EOF, "", Span(start, start))

        if is_letter(ch):
            literal = self._read_while(is_letter)
            return Token(lookup_ident(literal), literal, Span(start, self._current_pos()))

        if is_digit(ch):
            literal = self._read_while(is_digit)
            return Token(TokenType.INT, literal, Span(start, self._current_pos()))

        if ch == "=" and self._peek_char() == "=":
            self._read_char()
            tt, literal = TokenType.EQ, "=="
        elif ch == "!" and self._peek_char() == "=":
            self._read_char()
            tt, literal = TokenType.NOT_EQ, "!="
        elif ch == "=":
            tt, literal = TokenType.ASSIGN, ch
        elif ch == "!":
            tt, literal = TokenType.BANG, ch
        else:
            tt, literal = _SINGLE_CHAR_TOKENS.get(ch, TokenType.ILLEGAL), ch

        self._read_char()
        return Token(tt, literal, Span(start, self._current_pos()))

    def _read_while(self, pred: Callable[[str], bool]) -> str:
        """Consume a maximal run of characters satisfying *pred*."""
        begin = self.position
        while pred(self.ch):
            self._read_char()
        return self._source[begin : self.position]

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize the full source, EOF token included."""
    return list(Lexer(source))
