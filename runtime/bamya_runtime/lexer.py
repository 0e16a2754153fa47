"""
Bamya Lexer

Turns source text into a flat token stream, one token per next_token() call.
The lexer never fails: characters it does not recognize come back as
ILLEGAL tokens and it is up to the parser to reject them.
"""

from typing import List

from .tokens import Token, TokenType, lookup_ident


_SINGLE_CHAR_TOKENS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.ASTERISK,
    '/': TokenType.SLASH,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ',': TokenType.COMMA,
    ';': TokenType.SEMICOLON,
    ':': TokenType.COLON,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
}

_WHITESPACE = ' \t\n\r'


def _is_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z') or ch == '_'


def _is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    """Tokenize Bamya source code"""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def next_token(self) -> Token:
        """Return the next token, or EOF once the input is exhausted"""
        self._skip_whitespace()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "")

        ch = self.source[self.pos]

        if ch == '=':
            if self._peek_char() == '=':
                self.pos += 2
                return Token(TokenType.EQ, '==')
            self.pos += 1
            return Token(TokenType.ASSIGN, ch)

        if ch == '!':
            if self._peek_char() == '=':
                self.pos += 2
                return Token(TokenType.NOT_EQ, '!=')
            self.pos += 1
            return Token(TokenType.BANG, ch)

        if ch == '"':
            return Token(TokenType.STRING, self._read_string())

        if ch in _SINGLE_CHAR_TOKENS:
            self.pos += 1
            return Token(_SINGLE_CHAR_TOKENS[ch], ch)

        if _is_letter(ch):
            literal = self._read_identifier()
            return Token(lookup_ident(literal), literal)

        if _is_digit(ch):
            return Token(TokenType.INT, self._read_number())

        self.pos += 1
        return Token(TokenType.ILLEGAL, ch)

    def tokenize(self) -> List[Token]:
        """Tokenize entire source, EOF included"""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def _skip_whitespace(self):
        while self.pos < len(self.source) and self.source[self.pos] in _WHITESPACE:
            self.pos += 1

    def _peek_char(self) -> str:
        if self.pos + 1 < len(self.source):
            return self.source[self.pos + 1]
        return ''

    def _read_identifier(self) -> str:
        start = self.pos
        while self.pos < len(self.source):
            ch = self.source[self.pos]
            if _is_letter(ch) or _is_digit(ch):
                self.pos += 1
            else:
                break
        return self.source[start:self.pos]

    def _read_number(self) -> str:
        start = self.pos
        while self.pos < len(self.source) and _is_digit(self.source[self.pos]):
            self.pos += 1
        return self.source[start:self.pos]

    def _read_string(self) -> str:
        """Read string literal; an unterminated string runs to end of input"""
        self.pos += 1  # Skip opening quote
        start = self.pos

        while self.pos < len(self.source) and self.source[self.pos] != '"':
            self.pos += 1

        text = self.source[start:self.pos]
        if self.pos < len(self.source):
            self.pos += 1  # Skip closing quote
        return text


__all__ = ['Lexer']
