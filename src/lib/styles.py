"""
Style presets and style algebra

A style is an immutable tuple of delimiter shapes accepted during
recognition. Presets are concatenations of the single-markup styles:

    markdown = bird + tildefence + backtickfence
    haskell  = latex + bird
    all      = latex + markdown + orgmode + jekyll + asciidoc
    infer    = ()   (no constraint: recognize with `all` until the first
                     block opens, then stick to that block's family)

Language pinning (set_lang) and latching never mutate a style; they
produce new values.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from ..models.delimiters import (
    Asciidoc,
    Bird,
    Delimiter,
    Fence,
    Jekyll,
    LaTeX,
    Markdown,
    OrgMode,
    Phase,
    Style,
)
from .delimiters import lang_set
from .errors import UnknownStyleError


class WhitespaceMode(Enum):
    """
    Policy for lines removed during extraction

    KEEP_INDENT drops delimiter and prose lines entirely.
    KEEP_ALL replaces each of them with a blank line, so the output has
    exactly as many lines as the input.
    """
    KEEP_INDENT = "indent"
    KEEP_ALL = "all"


LATEX: Style = (LaTeX(Phase.BEGIN), LaTeX(Phase.END))
BIRD: Style = (Bird(),)
ORGMODE: Style = (OrgMode(Phase.BEGIN), OrgMode(Phase.END))
JEKYLL: Style = (Jekyll(Phase.BEGIN), Jekyll(Phase.END))
ASCIIDOC: Style = (Asciidoc(Phase.BEGIN), Asciidoc(Phase.END))
TILDEFENCE: Style = (Markdown(Fence.TILDE),)
BACKTICKFENCE: Style = (Markdown(Fence.BACKTICK),)
MARKDOWN: Style = BIRD + TILDEFENCE + BACKTICKFENCE
HASKELL: Style = LATEX + BIRD
ALL: Style = LATEX + MARKDOWN + ORGMODE + JEKYLL + ASCIIDOC
INFER: Style = ()

STYLES: Dict[str, Style] = {
    "all": ALL,
    "asciidoc": ASCIIDOC,
    "backtickfence": BACKTICKFENCE,
    "bird": BIRD,
    "haskell": HASKELL,
    "infer": INFER,
    "jekyll": JEKYLL,
    "latex": LATEX,
    "markdown": MARKDOWN,
    "orgmode": ORGMODE,
    "tildefence": TILDEFENCE,
}


def style_parse(name: str) -> Style:
    """
    Resolve a style token (case-insensitive)

    Args:
        name: Style name, e.g. "markdown" or "LaTeX"

    Returns:
        The preset Style

    Raises:
        UnknownStyleError: If the name is not a known style
    """
    try:
        return STYLES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(STYLES))
        raise UnknownStyleError(f"Unknown style '{name}' (expected one of: {known})") from None


def whitespace_parse(name: str) -> WhitespaceMode:
    """Resolve a whitespace-mode token: 'all' or 'indent' (case-insensitive)"""
    try:
        return WhitespaceMode(name.lower())
    except ValueError:
        raise UnknownStyleError(
            f"Unknown whitespace mode '{name}' (expected one of: all, indent)"
        ) from None


def set_lang(lang: Optional[str], style: Style) -> Style:
    """Return a new style with every language-bearing shape pinned to `lang`"""
    return tuple(lang_set(lang, delimiter) for delimiter in style)


def or_else(primary: Style, fallback: Style) -> Style:
    """`primary` unless it is empty (unconstrained), else `fallback`"""
    return primary if primary else fallback


def inferred_family(delimiter: Delimiter) -> Style:
    """Style family a document commits to once `delimiter` opens a block"""
    if isinstance(delimiter, LaTeX):
        return LATEX
    if isinstance(delimiter, Jekyll):
        return JEKYLL
    if isinstance(delimiter, OrgMode):
        return ORGMODE
    if isinstance(delimiter, Asciidoc):
        return ASCIIDOC
    return MARKDOWN


def style_target(style: Style) -> Delimiter:
    """
    Delimiter that a style converts into: its first shape

    `markdown` therefore targets Bird and `haskell` targets LaTeX.

    Raises:
        UnknownStyleError: If the style is empty (`infer` has no target)
    """
    if not style:
        raise UnknownStyleError("Cannot convert to an empty style")
    return style[0]


@dataclass(frozen=True)
class Unconstrained:
    """No style pinned yet: recognize with `all`"""

    def effective(self) -> Style:
        return ALL

    def latch(self, delimiter: Delimiter) -> "Pinned":
        return Pinned(inferred_family(delimiter))


@dataclass(frozen=True)
class Pinned:
    """Style fixed for the rest of the document"""
    style: Style

    def effective(self) -> Style:
        return self.style

    def latch(self, delimiter: Delimiter) -> "Pinned":
        return self


StyleConstraint = Union[Unconstrained, Pinned]


def constraint_make(style: Style) -> StyleConstraint:
    """Pinned for a caller-supplied style, Unconstrained for an empty one"""
    return Pinned(style) if style else Unconstrained()
