"""Tokens of the emolang language and the symbol table that defines its surface syntax.

Every symbol is a single grapheme cluster (a user-perceived character), most of them emoji that span more than one
code point. The full lexical grammar can be loosely defined as follows:

```
<token>      ::= <symbol> | <compound> | <number> | <string> | <identifier>
<compound>   ::= "▶️" "🟰" | "◀️" "🟰" | "❗" "🟰"   ; greater/less-or-equal and not-equal
<number>     ::= <digit> (<digit> | <dot>)*          ; at most one <dot>, which makes the number a float
<string>     ::= "🗨️" <cluster>* "💬"
<identifier> ::= <cluster>+                          ; any printable cluster that is not reserved
<comment>    ::= "#️⃣" <cluster>* <newline>
```
"""

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Closed set of token categories."""
    ILLEGAL = "ILLEGAL"
    START = "START"
    END = "END"

    ASSIGN = "ASSIGN"

    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"

    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"

    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"
    LPARENTHESIS = "LPARENTHESIS"
    RPARENTHESIS = "RPARENTHESIS"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    LBRACE = "LBRACE"
    RBRACE = "RBRACE"

    IDENTIFIER = "IDENTIFIER"

    TRUE = "TRUE"
    FALSE = "FALSE"

    IF = "IF"
    ELSE = "ELSE"
    WHILE = "WHILE"
    FUNCTION = "FUNCTION"
    RETURN = "RETURN"

    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    STRING = "STRING"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Token:
    """A typed slice of source text. literal is kept verbatim so that the AST can be printed back to source."""
    kind: TokenKind
    literal: str

    def __repr__(self):
        return f"Token({self.kind}, '{self.literal}')"


class Symbols:
    """Symbol table of the language. Symbols include their emoji presentation selector (U+FE0F) where they have one,
    since that is how they are typed and how grapheme segmentation delivers them.
    """
    ASSIGN = "⬅️"
    PLUS = "➕"
    MINUS = "➖"
    MULTIPLY = "✖️"
    DIVIDE = "➗"
    MODULO = "〰️"
    EQUAL = "🟰"
    GREATER_THAN = "▶️"
    LESS_THAN = "◀️"
    AND = "🔁"
    OR = "🔀"
    NOT = "⏸️"
    SEMICOLON = "↙️"
    COMMA = "🦶"
    LPARENTHESIS = "🌜"
    RPARENTHESIS = "🌛"
    LBRACKET = "👉"
    RBRACKET = "👈"
    LBRACE = "🫸"
    RBRACE = "🫷"
    STRING_OPEN = "🗨️"
    STRING_CLOSE = "💬"
    TRUE = "✔️"
    FALSE = "❌"
    IF = "❓"
    ELSE = "❗"
    WHILE = "⭕"
    FUNCTION = "📛"
    RETURN = "🔙"
    COMMENT = "#️⃣"
    UNASSIGNED = "⁉️"  # reserved, no meaning yet

    DIGITS = ["0️⃣", "1️⃣", "2️⃣", "3️⃣", "4️⃣", "5️⃣", "6️⃣", "7️⃣", "8️⃣", "9️⃣"]
    DOTS = ["⚪", "⚫", "🟤", "🟣", "🔵", "🟢", "🟡", "🟠", "🔴"]
    NEWLINES = ["\r", "\n", "\r\n"]
    SPACES = [" ", "\t"] + NEWLINES

    DECIMAL_DOT = "."  # stands in for any of DOTS inside numeric token literals


# single-cluster symbols and the kind they stand for when they appear alone
KINDS = {
    Symbols.ASSIGN: TokenKind.ASSIGN,
    Symbols.PLUS: TokenKind.PLUS,
    Symbols.MINUS: TokenKind.MINUS,
    Symbols.MULTIPLY: TokenKind.MULTIPLY,
    Symbols.DIVIDE: TokenKind.DIVIDE,
    Symbols.MODULO: TokenKind.MODULO,
    Symbols.EQUAL: TokenKind.EQUAL,
    Symbols.GREATER_THAN: TokenKind.GREATER_THAN,
    Symbols.LESS_THAN: TokenKind.LESS_THAN,
    Symbols.AND: TokenKind.AND,
    Symbols.OR: TokenKind.OR,
    Symbols.NOT: TokenKind.NOT,
    Symbols.SEMICOLON: TokenKind.SEMICOLON,
    Symbols.COMMA: TokenKind.COMMA,
    Symbols.LPARENTHESIS: TokenKind.LPARENTHESIS,
    Symbols.RPARENTHESIS: TokenKind.RPARENTHESIS,
    Symbols.LBRACKET: TokenKind.LBRACKET,
    Symbols.RBRACKET: TokenKind.RBRACKET,
    Symbols.LBRACE: TokenKind.LBRACE,
    Symbols.RBRACE: TokenKind.RBRACE,
    Symbols.TRUE: TokenKind.TRUE,
    Symbols.FALSE: TokenKind.FALSE,
    Symbols.IF: TokenKind.IF,
    Symbols.ELSE: TokenKind.ELSE,
    Symbols.WHILE: TokenKind.WHILE,
    Symbols.FUNCTION: TokenKind.FUNCTION,
    Symbols.RETURN: TokenKind.RETURN,
}

# leading cluster: (continuation cluster, merged kind)
COMPOUNDS = {
    Symbols.GREATER_THAN: (Symbols.EQUAL, TokenKind.GREATER_THAN_OR_EQUAL),
    Symbols.LESS_THAN: (Symbols.EQUAL, TokenKind.LESS_THAN_OR_EQUAL),
    Symbols.ELSE: (Symbols.EQUAL, TokenKind.NOT_EQUAL),
}

RESERVED = set(KINDS) | {Symbols.STRING_OPEN, Symbols.STRING_CLOSE, Symbols.UNASSIGNED, Symbols.COMMENT}

# canonical spelling of each kind, used in error messages and by the pretty printer
SPELLINGS = {kind: symbol for symbol, kind in KINDS.items()}
SPELLINGS.update({kind: lead + follow for lead, (follow, kind) in COMPOUNDS.items()})
