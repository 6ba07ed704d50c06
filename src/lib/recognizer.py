"""
Line recognizer for literate markup

Classifies a single source line against the delimiter shapes of a style.
Each shape has its own recognizer; try_all() tries the shapes of a style in
order and returns the first match.

Language handling differs per shape:
    - OrgMode, Jekyll, Asciidoc: exact, case-insensitive language match
    - Markdown: case-insensitive substring match on the info string
    - LaTeX, Bird: language-less

Asciidoc needs one line of lookahead: `[source,lang]` only opens a block
when the following line is exactly `----`.

Example:
    >>> try_all(ALL, "```haskell")
    Markdown(fence=<Fence.BACKTICK: '```'>, lang='haskell')
    >>> try_all(ALL, "plain prose") is None
    True
"""

import re
from typing import Optional

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

ASCIIDOC_FENCE = "----"

# [source] / [source,haskell] / [source, haskell]
_asciidoc_header = re.compile(r"^\[source\s*(?:,\s*([^,\]]*?)\s*)?(?:,[^\]]*)?\]$")


def lang_has(observed: str, requested: Optional[str], substring: bool = False) -> Optional[str]:
    """
    Match an observed language against a requested one

    Args:
        observed: Language text found on the delimiter line (may be empty)
        requested: Requested language, or None for "any language"
        substring: Accept the request when it occurs anywhere in `observed`
                   (Markdown info strings) instead of requiring equality

    Returns:
        The language to record on the delimiter ("" when the request is None
        and nothing was observed), or None when the match fails
    """
    if requested is None:
        return observed
    if substring:
        if requested.lower() in observed.lower():
            return requested
        return None
    if observed.lower() == requested.lower():
        return requested
    return None


def _first_word(text: str) -> str:
    words = text.split()
    return words[0] if words else ""


def _lang_or_none(lang: str) -> Optional[str]:
    return lang if lang else None


def latex_recognize(line: str) -> Optional[Delimiter]:
    stripped = line.lstrip()
    if stripped.startswith("\\begin{code}"):
        return LaTeX(Phase.BEGIN)
    if stripped.startswith("\\end{code}"):
        return LaTeX(Phase.END)
    return None


def orgmode_recognize(line: str, requested: Optional[str]) -> Optional[Delimiter]:
    stripped = line.lstrip()
    keyword = stripped[:11].upper()
    if keyword == "#+BEGIN_SRC":
        lang = lang_has(_first_word(stripped[11:]), requested)
        if lang is None:
            return None
        return OrgMode(Phase.BEGIN, _lang_or_none(lang))
    if stripped[:9].upper() == "#+END_SRC":
        return OrgMode(Phase.END)
    return None


def bird_recognize(line: str) -> Optional[Delimiter]:
    if line == ">" or line.startswith("> "):
        return Bird()
    return None


def jekyll_recognize(line: str, requested: Optional[str]) -> Optional[Delimiter]:
    stripped = line.strip()
    if stripped.startswith("{% highlight") and stripped.endswith("%}"):
        lang = lang_has(_first_word(stripped[len("{% highlight"):-2]), requested)
        if lang is None:
            return None
        return Jekyll(Phase.BEGIN, _lang_or_none(lang))
    if stripped.startswith("{% endhighlight %}"):
        return Jekyll(Phase.END)
    return None


def markdown_recognize(line: str, fence: Fence, requested: Optional[str]) -> Optional[Delimiter]:
    """
    Recognize a Markdown fence of the given kind

    A bare fence always matches (as a language-less fence) so that it can
    close a block; a fence with an info string matches when the requested
    language occurs in it.
    """
    stripped = line.lstrip()
    if not stripped.startswith(fence.value):
        return None
    info = stripped[len(fence.value):].strip()
    if not info:
        return Markdown(fence)
    lang = lang_has(info, requested, substring=True)
    if lang is None:
        return None
    return Markdown(fence, lang)


def asciidoc_recognize(
    line: str, next_line: Optional[str], requested: Optional[str]
) -> Optional[Delimiter]:
    """
    Recognize an Asciidoc source block header or its closing fence

    The header only fires when the next line is the `----` fence; the
    automaton then consumes both lines.
    """
    if line == ASCIIDOC_FENCE:
        return Asciidoc(Phase.END)
    header = _asciidoc_header.match(line.strip())
    if header is None or next_line != ASCIIDOC_FENCE:
        return None
    lang = lang_has(header.group(1) or "", requested)
    if lang is None:
        return None
    return Asciidoc(Phase.BEGIN, _lang_or_none(lang))


def recognize(shape: Delimiter, line: str, next_line: Optional[str] = None) -> Optional[Delimiter]:
    """
    Classify `line` against a single delimiter shape

    The shape's language field is the requested language.

    Args:
        shape: Delimiter shape from a style
        line: Line to classify
        next_line: Following line, used by Asciidoc headers

    Returns:
        Recognized delimiter or None
    """
    if isinstance(shape, LaTeX):
        return latex_recognize(line)
    if isinstance(shape, Bird):
        return bird_recognize(line)
    if isinstance(shape, OrgMode):
        return orgmode_recognize(line, shape.lang)
    if isinstance(shape, Jekyll):
        return jekyll_recognize(line, shape.lang)
    if isinstance(shape, Markdown):
        return markdown_recognize(line, shape.fence, shape.lang)
    if isinstance(shape, Asciidoc):
        return asciidoc_recognize(line, next_line, shape.lang)
    raise TypeError(f"Not a delimiter: {shape!r}")


def try_all(style: Style, line: str, next_line: Optional[str] = None) -> Optional[Delimiter]:
    """Classify `line` against every shape of `style`; first match wins"""
    for shape in style:
        delimiter = recognize(shape, line, next_line)
        if delimiter is not None:
            return delimiter
    return None


def fence_foreign(style: Style, line: str) -> Optional[Fence]:
    """
    Detect a Markdown fence whose language the style rejects

    Such a fence opens a block of some other language; the block (closing
    fence included) is plain text.

    Returns:
        The fence kind, or None when the line is not a rejected fence
    """
    stripped = line.lstrip()
    for shape in style:
        if not isinstance(shape, Markdown) or not stripped.startswith(shape.fence.value):
            continue
        if stripped[len(shape.fence.value):].strip() and recognize(shape, line) is None:
            return shape.fence
    return None
