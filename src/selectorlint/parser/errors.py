"""Parser error types."""


class ParseError(Exception):
    """Raised when stylesheet or selector source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


class StylesheetParseError(ParseError):
    """Raised when a stylesheet has unbalanced blocks or unterminated tokens."""


class SelectorParseError(ParseError):
    """Raised when a single resolved selector cannot be parsed."""

    def __init__(self, message: str, selector: str, offset: int | None = None):
        self.selector = selector
        self.offset = offset
        column = offset + 1 if offset is not None else None
        super().__init__(message, line=1, column=column)
