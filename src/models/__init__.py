"""
Models package for unlit

Contains data structures and type definitions for delimiters and the
processing pipeline.
"""

from .state import ProgramState, pipeline
from .delimiters import Phase, Fence, LaTeX, OrgMode, Bird, Jekyll, Markdown, Asciidoc, Delimiter, Style

__all__ = [
    "ProgramState",
    "pipeline",
    "Phase",
    "Fence",
    "LaTeX",
    "OrgMode",
    "Bird",
    "Jekyll",
    "Markdown",
    "Asciidoc",
    "Delimiter",
    "Style",
]
