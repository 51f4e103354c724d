from selectorlint.parser.errors import ParseError, SelectorParseError, StylesheetParseError
from selectorlint.parser.selector import parse_selector
from selectorlint.parser.stylesheet import parse_stylesheet

__all__ = [
    "ParseError",
    "SelectorParseError",
    "StylesheetParseError",
    "parse_selector",
    "parse_stylesheet",
]
