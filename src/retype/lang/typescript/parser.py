from pathlib import Path
from typing import Dict

import tree_sitter
from tree_sitter_typescript import language_tsx, language_typescript

TS_LANGUAGE = tree_sitter.Language(language_typescript())
TSX_LANGUAGE = tree_sitter.Language(language_tsx())

# Files parsed with the JSX-aware grammar.
JSX_SUFFIXES = (".tsx", ".jsx")

_parsers: Dict[str, tree_sitter.Parser] = {}


def get_parser(path: Path) -> tree_sitter.Parser:
    """Return a cached parser for the grammar matching the file suffix."""
    key = "tsx" if path.suffix.lower() in JSX_SUFFIXES else "typescript"
    parser = _parsers.get(key)
    if parser is None:
        language = TSX_LANGUAGE if key == "tsx" else TS_LANGUAGE
        parser = tree_sitter.Parser(language)
        _parsers[key] = parser
    return parser
