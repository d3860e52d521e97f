# pando_token.py
"""Token kinds produced by the Pando line lexer."""

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers + literals
IDENT = "IDENT"
INT = "INT"
FLOAT = "FLOAT"
STRING = "STRING"

# Punctuation
ASSIGN = "="
COLON = ":"
COMMA = ","
DOT = "."
LPAREN = "("
RPAREN = ")"
OPERATOR = "OPERATOR"

# Reserved words
PRINT = "PRINT"
TRUE = "TRUE"
FALSE = "FALSE"
NONE = "NONE"

KEYWORDS = {
    "print": PRINT,
    "True": TRUE,
    "False": FALSE,
    "None": NONE,
}

# Tokens that are spelled like identifiers
WORD_TOKENS = {IDENT, PRINT, TRUE, FALSE, NONE}


class Token:
    def __init__(self, type, literal, column=0):
        self.type = type
        self.literal = literal
        self.column = column

    @property
    def end(self):
        return self.column + len(self.literal)

    def __repr__(self):
        return f"Token({self.type}, {self.literal!r}, col={self.column})"

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.type, self.literal, self.column) == (other.type, other.literal, other.column)
