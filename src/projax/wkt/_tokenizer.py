"""
Character-level tokenizer for Well-Known Text.

:class:`StreamTokenizer` splits text into words, numbers, symbols,
whitespace and end-of-line tokens while tracking line and column.  Words
may contain underscores and trailing digits (``TOWGS84``, ``elt_0_1``);
numbers may carry a leading minus sign, a decimal point and an
``E``/``E+``/``E-`` exponent.  :class:`WktStreamTokenizer` adds the
WKT-specific helpers used by the readers.
"""

from __future__ import annotations

import enum
import math

from projax.errors import ParseError


class TokenType(enum.Enum):
    """Classification of a token.

    Attributes:
        WORD: Identifier, e.g. ``GEOGCS``.
        NUMBER: Numeric literal, e.g. ``-1.5E-3``.
        EOL: Line break.
        EOF: End of input.
        WHITESPACE: Run of blanks.
        SYMBOL: Any other single character (brackets, quotes, commas).
    """

    WORD = "word"
    NUMBER = "number"
    EOL = "eol"
    EOF = "eof"
    WHITESPACE = "whitespace"
    SYMBOL = "symbol"


def char_type(c: str) -> TokenType:
    """Classify a single character."""
    if c.isdigit():
        return TokenType.NUMBER
    if c.isalpha():
        return TokenType.WORD
    if c in "\n\r":
        return TokenType.EOL
    if c.isspace():
        return TokenType.WHITESPACE
    return TokenType.SYMBOL


class StreamTokenizer:
    """Split a string into tokens one at a time.

    Args:
        text: Text to tokenize.
        ignore_whitespace: Default for :meth:`next_token`; when ``True``
            whitespace and end-of-line tokens are skipped.
    """

    def __init__(self, text: str, ignore_whitespace: bool = True) -> None:
        self._text = text
        self._pos = 0
        self.ignore_whitespace = ignore_whitespace
        self.token = ""
        self.token_type = TokenType.EOF
        self.line = 1
        self.column = 1

    def _read(self) -> str | None:
        if self._pos >= len(self._text):
            return None
        c = self._text[self._pos]
        self._pos += 1
        return c

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else " "

    @property
    def numeric_value(self) -> float:
        """Value of the current token if it is a number, else ``NaN``."""
        if self.token_type is not TokenType.NUMBER:
            return math.nan
        try:
            return float(self.token)
        except ValueError:
            return math.nan

    def next_token(self, ignore_whitespace: bool | None = None) -> TokenType:
        """Advance to the next token and return its type.

        Args:
            ignore_whitespace: Skip whitespace and end-of-line tokens.
                Defaults to the tokenizer's setting.

        Returns:
            TokenType: Type of the new current token.
        """
        if ignore_whitespace is None:
            ignore_whitespace = self.ignore_whitespace
        tt = self._next_any()
        if ignore_whitespace:
            while tt in (TokenType.WHITESPACE, TokenType.EOL):
                tt = self._next_any()
        return tt

    def _next_any(self) -> TokenType:
        self.token = ""
        self.token_type = TokenType.EOF
        chars: list[str] = []
        in_number = False
        in_word = False
        current = self._read()
        while current is not None:
            nxt = self._peek()
            cur_type = char_type(current)
            next_type = char_type(nxt)

            if in_word and (current == "_" or cur_type is TokenType.NUMBER):
                cur_type = TokenType.WORD
            if not in_number and cur_type is TokenType.WORD:
                if nxt == "_" or next_type is TokenType.NUMBER:
                    next_type = TokenType.WORD
                    in_word = True

            # negative numbers
            if current == "-" and next_type is TokenType.NUMBER and not in_number:
                cur_type = TokenType.NUMBER
            # decimal point
            if in_number and next_type is TokenType.NUMBER and current == ".":
                cur_type = TokenType.NUMBER
            if cur_type is TokenType.NUMBER and nxt == "." and not in_number:
                next_type = TokenType.NUMBER
                in_number = True
            # exponent
            if in_number:
                if cur_type is TokenType.NUMBER and nxt == "E":
                    next_type = TokenType.NUMBER
                if current == "E" and nxt in "+-":
                    cur_type = TokenType.NUMBER
                    next_type = TokenType.NUMBER
                if current in "E+-" and next_type is TokenType.NUMBER:
                    cur_type = TokenType.NUMBER

            self.column += 1
            if cur_type is TokenType.EOL:
                self.line += 1
                self.column = 1

            chars.append(current)
            self.token_type = cur_type
            if cur_type is not next_type or (cur_type is TokenType.SYMBOL and current != "-"):
                break
            current = self._read()

        self.token = "".join(chars)
        return self.token_type

    def error(self, message: str) -> ParseError:
        """Build a :class:`~projax.errors.ParseError` at the current position."""
        return ParseError(message, self.line, self.column)


class WktStreamTokenizer(StreamTokenizer):
    """Tokenizer with the helpers needed to read WKT clauses.

    Args:
        text: WKT text.

    Examples:
        ```python
        from projax.wkt._tokenizer import WktStreamTokenizer

        t = WktStreamTokenizer('AUTHORITY["EPSG", "4326"]')
        t.next_token()
        t.read_authority()  # ("EPSG", 4326)
        ```
    """

    def __init__(self, text: str) -> None:
        super().__init__(text, ignore_whitespace=True)

    def read_token(self, expected: str) -> None:
        """Advance one token and check it equals *expected*.

        Raises:
            ParseError: If the token differs.
        """
        self.next_token()
        if self.token != expected:
            raise self.error(f"Expecting ('{expected}') but got a '{self.token}'")

    def read_double_quoted_word(self) -> str:
        """Read a ``"..."`` string, preserving inner whitespace.

        The opening quote may already be the current token.

        Raises:
            ParseError: If the closing quote is missing.
        """
        if self.token != '"':
            self.read_token('"')
        parts: list[str] = []
        self.next_token(ignore_whitespace=False)
        while self.token != '"':
            if self.token_type is TokenType.EOF:
                raise self.error("Unterminated quoted string")
            parts.append(self.token)
            self.next_token(ignore_whitespace=False)
        return "".join(parts)

    def read_authority(self) -> tuple[str, int]:
        """Read ``AUTHORITY["name", "code"]``; the code may be quoted or bare.

        Returns:
            tuple[str, int]: Authority name and code.

        Raises:
            ParseError: If the clause is malformed.
        """
        if self.token != "AUTHORITY":
            self.read_token("AUTHORITY")
        self.read_token("[")
        authority = self.read_double_quoted_word()
        self.read_token(",")
        self.next_token()
        if self.token_type is TokenType.NUMBER:
            code = int(self.numeric_value)
        else:
            text = self.read_double_quoted_word()
            try:
                code = int(text)
            except ValueError:
                raise self.error(f"Invalid authority code '{text}'") from None
        self.read_token("]")
        return authority, code

    def read_number(self) -> float:
        """Advance one token and return it as a number.

        Raises:
            ParseError: If the token is not numeric.
        """
        self.next_token()
        if self.token_type is not TokenType.NUMBER:
            raise self.error(f"Expecting a number but got a '{self.token}'")
        return self.numeric_value

    def read_parameter(self) -> tuple[str, float]:
        """Read the body of ``PARAMETER["name", value]`` (keyword already current)."""
        self.read_token("[")
        name = self.read_double_quoted_word()
        self.read_token(",")
        value = self.read_number()
        self.read_token("]")
        return name, value

    def next_element(self) -> bool:
        """Step past the end of a clause element.

        Returns:
            bool: ``True`` if a ``,`` followed and the current token is now the
            next element, ``False`` if the enclosing clause closed with ``]``.

        Raises:
            ParseError: On any other token.
        """
        self.next_token()
        if self.token == "]":
            return False
        if self.token != ",":
            raise self.error(f"Expecting (',') or (']') but got a '{self.token}'")
        self.next_token()
        return True
