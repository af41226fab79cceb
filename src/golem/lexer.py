"""
Lexer for Golem

Turns source text into a stream of tokens, one `next_token()` call at a time.

Features:
- Single pass, forward-only cursor
- Position tracking (line, column)
- Never raises: unknown bytes become ILLEGAL tokens for the parser to reject
- Always terminates with an explicit EOF token
"""

from typing import Iterator, List

from .token_types import TT, Tok


class Lexer:
    """Golem lexer. A new instance is needed to lex the same text again."""

    KEYWORDS = {
        'fn': TT.FUNCTION,
        'function': TT.FUNCTION,
        'let': TT.LET,
        'true': TT.TRUE,
        'false': TT.FALSE,
        'if': TT.IF,
        'else': TT.ELSE,
        'return': TT.RETURN,
        'while': TT.WHILE,
    }

    # Two-character operators first so '==' is not read as '=' '='
    OPERATORS = [
        ('==', TT.EQ),
        ('!=', TT.NOT_EQ),

        ('=', TT.ASSIGN),
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('*', TT.ASTERISK),
        ('/', TT.SLASH),
        ('!', TT.BANG),
        ('<', TT.LT),
        ('>', TT.GT),
        (',', TT.COMMA),
        (';', TT.SEMICOLON),
        (':', TT.COLON),
        ('(', TT.LPAREN),
        (')', TT.RPAREN),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('[', TT.LBRACKET),
        (']', TT.RBRACKET),
    ]

    WHITESPACE = (' ', '\t', '\n', '\r')

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def next_token(self) -> Tok:
        """Scan and return the next token; EOF repeats once reached"""
        self.skip_whitespace()

        if self.pos >= len(self.source):
            return self.make(TT.EOF, '', self.line, self.column)

        ch = self.peek()

        if ch == '"':
            return self.scan_string()

        if is_digit(ch):
            return self.scan_number()

        if is_letter(ch):
            return self.scan_identifier()

        return self.scan_operator()

    def __iter__(self) -> Iterator[Tok]:
        """Yield tokens up to and including EOF"""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TT.EOF:
                return

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self) -> Tok:
        """Scan string literal: "..." (no escape sequences)"""
        line, column = self.line, self.column
        start = self.pos
        self.advance()  # opening quote
        value = ''

        while self.pos < len(self.source) and self.peek() != '"':
            value += self.advance()

        if self.pos >= len(self.source):
            return self.make(TT.ILLEGAL, self.source[start:], line, column)

        self.advance()  # closing quote
        return self.make(TT.STRING, value, line, column)

    def scan_number(self) -> Tok:
        """Scan an unsigned run of decimal digits"""
        line, column = self.line, self.column
        value = ''

        while is_digit(self.peek()):
            value += self.advance()

        return self.make(TT.INT, value, line, column)

    def scan_identifier(self) -> Tok:
        """Scan identifier or keyword; digits end an identifier"""
        line, column = self.line, self.column
        value = ''

        while is_letter(self.peek()):
            value += self.advance()

        token_type = self.KEYWORDS.get(value, TT.IDENT)
        return self.make(token_type, value, line, column)

    def scan_operator(self) -> Tok:
        """Scan operators and punctuation"""
        line, column = self.line, self.column

        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                return self.make(op_type, op_str, line, column)

        return self.make(TT.ILLEGAL, self.advance(), line, column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Character `offset` places ahead, or NUL past the end"""
        idx = self.pos + offset
        return self.source[idx] if idx < len(self.source) else '\0'

    def advance(self, n: int = 1) -> str:
        """Consume up to n characters, keeping line and column in step"""
        if n < 0:
            raise ValueError(f"advance() requires n >= 0, got {n}")

        taken = self.source[self.pos:self.pos + n]
        self.pos += len(taken)

        for ch in taken:
            if ch == '\n':
                self.line, self.column = self.line + 1, 1
            else:
                self.column += 1

        return taken

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and line breaks"""
        while self.peek() in self.WHITESPACE:
            self.advance()

    def make(self, token_type: TT, value: str, line: int, column: int) -> Tok:
        return Tok(type=token_type, value=value, line=line, column=column)


def is_letter(ch: str) -> bool:
    return 'a' <= ch <= 'z' or 'A' <= ch <= 'Z' or ch == '_'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source, EOF included"""
    return list(Lexer(source))
