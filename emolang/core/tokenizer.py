"""Tokenizer for emolang. Source text is scanned as a sequence of grapheme clusters rather than code points, because
nearly every symbol of the language is an emoji made of several code points (base glyph, presentation selector,
combining keycap...). Segmentation is delegated to the `regex` library's extended grapheme cluster matcher.

Clusters are looked up with their emoji presentation selectors (U+FE0F) stripped, so that "⬅" and "⬅️" or "1⃣" and
"1️⃣" are the same symbol. Token literals always keep the text that was actually typed.
"""

import logging
import unicodedata

import regex

from emolang.core.token import COMPOUNDS, KINDS, RESERVED, Symbols, Token, TokenKind
from emolang.lang.error import ScanError

logger = logging.getLogger(__name__)

GRAPHEME = regex.compile(r"\X")
SELECTOR = "\ufe0f"


def canonical(cluster):
    """Returns cluster without emoji presentation selectors, the form used for symbol lookup."""
    return cluster.replace(SELECTOR, "")


def _canonical_table(symbols):
    return {canonical(symbol): value for symbol, value in symbols.items()}


class Tokenizer:
    """Single-pass scanner with one cluster of lookahead. Never fails on unknown input (it produces ILLEGAL tokens),
    except for strings that run off the end of the source.
    """
    KINDS = _canonical_table(KINDS)
    COMPOUNDS = {canonical(lead): (canonical(follow), kind) for lead, (follow, kind) in COMPOUNDS.items()}
    RESERVED = {canonical(symbol) for symbol in RESERVED}
    DIGITS = {canonical(digit): str(value) for value, digit in enumerate(Symbols.DIGITS)}
    DOTS = {canonical(dot) for dot in Symbols.DOTS}

    def __init__(self, source):
        self.source = source
        self.clusters = GRAPHEME.findall(source)
        self.pos = 0

        # code point offsets of each cluster, for error diagnosis
        self.offsets = []
        offset = 0
        for cluster in self.clusters:
            self.offsets.append(offset)
            offset += len(cluster)

    @property
    def current(self):
        """Cluster under the cursor, or None at the end of input."""
        return self.clusters[self.pos] if self.pos < len(self.clusters) else None

    def peek(self):
        """Cluster right after the cursor, or None if there is none."""
        return self.clusters[self.pos + 1] if self.pos + 1 < len(self.clusters) else None

    def tokenize(self):
        """Scans the whole source and returns its tokens, terminated by a single END token."""
        tokens = []
        while self.current is not None:
            cluster = self.current
            key = canonical(cluster)

            if cluster in Symbols.SPACES:
                self.pos += 1
            elif key == canonical(Symbols.COMMENT):
                self.skip_comment()
            elif key in Tokenizer.COMPOUNDS:
                tokens.append(self.read_compound())
            elif key in Tokenizer.KINDS:
                tokens.append(Token(Tokenizer.KINDS[key], cluster))
                self.pos += 1
            elif key == canonical(Symbols.STRING_OPEN):
                tokens.append(self.read_string())
            elif key in Tokenizer.DIGITS:
                tokens.append(self.read_number())
            elif Tokenizer.is_identifier_cluster(cluster):
                tokens.append(self.read_identifier())
            else:
                tokens.append(Token(TokenKind.ILLEGAL, cluster))
                self.pos += 1

        tokens.append(Token(TokenKind.END, ""))
        logger.debug("scanned %d clusters into %d tokens", len(self.clusters), len(tokens))
        return tokens

    def skip_comment(self):
        """Skips a comment up to (not including) the end of its line."""
        while self.current is not None and self.current not in Symbols.NEWLINES:
            self.pos += 1

    def read_compound(self):
        """Merges a leading cluster with its continuation into one token if the continuation follows, otherwise emits
        the leading cluster with its standalone kind.
        """
        lead = self.current
        follow, kind = Tokenizer.COMPOUNDS[canonical(lead)]

        following = self.peek()
        if following is not None and canonical(following) == follow:
            self.pos += 2
            return Token(kind, lead + following)

        self.pos += 1
        return Token(Tokenizer.KINDS[canonical(lead)], lead)

    def read_number(self):
        """Reads a run of digits containing at most one decimal dot. The dot is normalized to '.' in the literal."""
        literal = ""
        kind = TokenKind.INTEGER

        while self.current is not None:
            key = canonical(self.current)
            if key in Tokenizer.DIGITS:
                literal += self.current
            elif key in Tokenizer.DOTS and kind is TokenKind.INTEGER:
                literal += Symbols.DECIMAL_DOT
                kind = TokenKind.FLOAT
            else:
                break
            self.pos += 1

        return Token(kind, literal)

    def read_string(self):
        """Reads everything strictly between the string delimiters. Raises a ScanError if the closing delimiter never
        comes.
        """
        start = self.pos
        self.pos += 1  # opening delimiter

        content = []
        while self.current is not None and canonical(self.current) != canonical(Symbols.STRING_CLOSE):
            content.append(self.current)
            self.pos += 1

        if self.current is None:
            begin = self.offsets[start]
            line = self.source[begin:].splitlines()[0]
            raise ScanError("unterminated string '{}'", line, end=len(self.clusters[start]))

        self.pos += 1  # closing delimiter
        return Token(TokenKind.STRING, "".join(content))

    def read_identifier(self):
        """Reads a maximal run of identifier clusters."""
        literal = ""
        while self.current is not None and Tokenizer.is_identifier_cluster(self.current):
            literal += self.current
            self.pos += 1
        return Token(TokenKind.IDENTIFIER, literal)

    @staticmethod
    def is_identifier_cluster(cluster):
        """Whether or not cluster may be part of an identifier: printable, and neither reserved, a digit, a decimal dot
        nor whitespace.
        """
        key = canonical(cluster)
        if not key or key in Tokenizer.RESERVED or key in Tokenizer.DIGITS or key in Tokenizer.DOTS:
            return False
        if cluster in Symbols.SPACES:
            return False

        # control, format, unassigned and separator code points never start an identifier cluster
        return unicodedata.category(key[0])[0] not in ("C", "Z")


def tokenize(source):
    """Converts source to a list of tokens ending with an END token."""
    return Tokenizer(source).tokenize()


def numeric_text(literal):
    """Converts the literal of an INTEGER or FLOAT token to plain ASCII digits, e.g. '1️⃣.3️⃣' -> '1.3'. Clusters that
    are not digits are kept as they are, so that int() and float() reject them.
    """
    return "".join(Tokenizer.DIGITS.get(canonical(cluster), cluster) for cluster in GRAPHEME.findall(literal))
