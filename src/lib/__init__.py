"""
unlit - Extract and convert code in literate documents

Recognizes code blocks written as LaTeX code environments, Bird tags,
Org-mode source blocks, Jekyll highlight blocks, Markdown fences and
Asciidoc source blocks.
"""

__version__ = "1.0.0"

from .automaton import extract, convert, Extractor, Converter
from .styles import WhitespaceMode, style_parse, whitespace_parse, style_target, set_lang
from .errors import UnlitError, SpuriousBeginDelimiter, SpuriousEndDelimiter, UnexpectedEnd, UnknownStyleError
from .log import LOG, state_connectToLogger

__all__ = [
    "extract",
    "convert",
    "Extractor",
    "Converter",
    "WhitespaceMode",
    "style_parse",
    "whitespace_parse",
    "style_target",
    "set_lang",
    "UnlitError",
    "SpuriousBeginDelimiter",
    "SpuriousEndDelimiter",
    "UnexpectedEnd",
    "UnknownStyleError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
