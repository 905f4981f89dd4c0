from .provider import TypeScriptProvider
from .source_file import SourceFile, TextEdit

__all__ = ["TypeScriptProvider", "SourceFile", "TextEdit"]
