"""
unlit - Extract and convert code in literate documents

Strips prose and markup from literate programs, or rewrites their code
blocks from one markup convention into another.
"""

__version__ = "1.0.0"

from .lib import extract, convert, WhitespaceMode, style_parse, whitespace_parse, UnlitError, LOG, state_connectToLogger

__all__ = [
    "extract",
    "convert",
    "WhitespaceMode",
    "style_parse",
    "whitespace_parse",
    "UnlitError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
