"""
Error model for unlit

Structural grammar violations raised by the extraction and conversion
automatons. Every error aborts the whole document; callers get either the
complete transformed text or one of these exceptions, never a mixture.

Message rendering follows two shapes:
    at line 12: spurious begin ```haskell
    unexpected end of file: unmatched \\begin{code}
"""

from typing import Optional

from ..models.delimiters import Delimiter
from .delimiters import tag_text


class UnlitError(Exception):
    """Base class for all document processing errors"""

    def __init__(self, delimiter: Delimiter, line: Optional[int] = None) -> None:
        self.delimiter = delimiter
        self.line = line
        super().__init__(self.message_render())

    def message_render(self) -> str:
        return tag_text(self.delimiter)

    def __eq__(self, other: object) -> bool:
        return (
            type(self) is type(other)
            and self.delimiter == other.delimiter  # type: ignore[attr-defined]
            and self.line == other.line  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((type(self), self.delimiter, self.line))


class SpuriousBeginDelimiter(UnlitError):
    """An opening-shaped delimiter seen inside an incompatible open block"""

    def __init__(self, line: int, delimiter: Delimiter) -> None:
        super().__init__(delimiter, line)

    def message_render(self) -> str:
        return f"at line {self.line}: spurious begin {tag_text(self.delimiter)}"


class SpuriousEndDelimiter(UnlitError):
    """A closing delimiter that does not belong to the open block (or to any block in strict mode)"""

    def __init__(self, line: int, delimiter: Delimiter) -> None:
        super().__init__(delimiter, line)

    def message_render(self) -> str:
        return f"at line {self.line}: spurious end {tag_text(self.delimiter)}"


class UnexpectedEnd(UnlitError):
    """Input ended while a paired block was still open"""

    def __init__(self, delimiter: Delimiter) -> None:
        super().__init__(delimiter)

    def message_render(self) -> str:
        return f"unexpected end of file: unmatched {tag_text(self.delimiter)}"


class UnknownStyleError(ValueError):
    """Raised when a style or whitespace-mode token cannot be resolved"""
    pass
