# lexer.py
"""Single-line lexer for Pando source.

Pando statements never span lines, so the lexer works on one line at a
time.  Columns are 0-based offsets into the untrimmed line, which is what
editor positions use.  Malformed input never raises: unknown characters
become ``ILLEGAL`` tokens and an unterminated string runs to the end of the
line.
"""

from .pando_token import *

COMMENT_MARKER = "#"

_SINGLE_CHAR_TOKENS = {
    '=': ASSIGN,
    ':': COLON,
    ',': COMMA,
    '(': LPAREN,
    ')': RPAREN,
}

_OPERATOR_CHARS = set("+-*/%<>!&|")


def is_comment_line(line):
    """True when the line, ignoring leading whitespace, is a comment."""
    return line.strip().startswith(COMMENT_MARKER)


class Lexer:
    def __init__(self, source_line):
        self.input = source_line
        self.position = 0
        self.read_position = 0
        self.ch = ""
        self.read_char()

    def read_char(self):
        if self.read_position >= len(self.input):
            self.ch = ""
        else:
            self.ch = self.input[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        if self.read_position >= len(self.input):
            return ""
        return self.input[self.read_position]

    def next_token(self):
        self.skip_whitespace()
        column = self.position

        # An inline comment ends the line; EOF is reported at the marker
        if self.ch == "" or self.ch == COMMENT_MARKER:
            self.position = self.read_position = len(self.input)
            self.ch = ""
            return Token(EOF, "", column)

        if self.ch in _SINGLE_CHAR_TOKENS:
            tok = Token(_SINGLE_CHAR_TOKENS[self.ch], self.ch, column)
        elif self.ch == '"' or self.ch == "'":
            return Token(STRING, self.read_string(), column)
        elif self.ch == '.':
            if self.is_digit(self.peek_char()):
                return self._number_token(column)
            tok = Token(DOT, self.ch, column)
        elif self.ch == '-' and (self.is_digit(self.peek_char()) or self.peek_char() == '.'):
            return self._number_token(column)
        elif self.ch in _OPERATOR_CHARS:
            tok = Token(OPERATOR, self.ch, column)
        elif self.is_letter(self.ch):
            ident = self.read_identifier()
            return Token(self.lookup_ident(ident), ident, column)
        elif self.is_digit(self.ch):
            return self._number_token(column)
        else:
            tok = Token(ILLEGAL, self.ch, column)

        self.read_char()
        return tok

    def tokenize(self):
        """Return every token on the line, ending with the ``EOF`` token."""
        tokens = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == EOF:
                return tokens

    def _number_token(self, column):
        literal = self.read_number()
        if '.' in literal:
            return Token(FLOAT, literal, column)
        return Token(INT, literal, column)

    def read_string(self):
        """Read a quoted literal and return its raw text, quotes included."""
        start_position = self.position
        quote = self.ch
        while True:
            self.read_char()
            if self.ch == "":
                break
            if self.ch == '\\':
                self.read_char()
                if self.ch == "":
                    break
                continue
            if self.ch == quote:
                self.read_char()
                break
        return self.input[start_position:self.position]

    def read_identifier(self):
        start_position = self.position
        while self.is_letter(self.ch) or self.is_digit(self.ch):
            self.read_char()
        return self.input[start_position:self.position]

    def read_number(self):
        start_position = self.position
        if self.ch == '-':
            self.read_char()

        # Read integer part
        while self.is_digit(self.ch):
            self.read_char()

        # Check for decimal point
        if self.ch == '.':
            self.read_char()
            while self.is_digit(self.ch):
                self.read_char()

        return self.input[start_position:self.position]

    def lookup_ident(self, ident):
        return KEYWORDS.get(ident, IDENT)

    def is_letter(self, char):
        return 'a' <= char <= 'z' or 'A' <= char <= 'Z' or char == '_'

    def is_digit(self, char):
        return '0' <= char <= '9'

    def skip_whitespace(self):
        while self.ch in [' ', '\t', '\r', '\n', '\f', '\v']:
            self.read_char()


def tokenize_line(line):
    """Tokenize one line of Pando source."""
    return Lexer(line).tokenize()
