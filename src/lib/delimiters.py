"""
Delimiter rules and rendering

Pairing rules (which delimiter opens a block, which closes it) and the
canonical text rendering used both for conversion output and for error
messages.

Example:
    >>> match(LaTeX(Phase.BEGIN), LaTeX(Phase.END))
    True
    >>> emit(Markdown(Fence.BACKTICK, "haskell"))
    '```haskell'
"""

import dataclasses
from typing import List, Optional

from ..models.delimiters import (
    Asciidoc,
    Bird,
    Delimiter,
    Fence,
    Jekyll,
    LANG_BEARING,
    LaTeX,
    Markdown,
    OrgMode,
    Phase,
)


def is_begin(delimiter: Delimiter) -> bool:
    """
    Check whether a delimiter may open a block

    Markdown fences are symmetric, so every fence is begin-shaped. Bird
    lines carry their own marker and never open a paired block.
    """
    if isinstance(delimiter, Markdown):
        return True
    if isinstance(delimiter, (LaTeX, OrgMode, Jekyll, Asciidoc)):
        return delimiter.phase is Phase.BEGIN
    return False


def match(opened: Delimiter, closing: Delimiter) -> bool:
    """
    Check whether `closing` closes a block opened by `opened`

    Languages are ignored on the closing side. Markdown fences only close
    fences of the same kind. Bird is never part of a pair.
    """
    if isinstance(opened, Markdown):
        return isinstance(closing, Markdown) and opened.fence is closing.fence
    for kind in (LaTeX, OrgMode, Jekyll, Asciidoc):
        if isinstance(opened, kind):
            return (
                isinstance(closing, kind)
                and opened.phase is Phase.BEGIN
                and closing.phase is Phase.END
            )
    return False


def lang_of(delimiter: Delimiter) -> Optional[str]:
    """Language carried by a delimiter, None for language-less shapes"""
    if isinstance(delimiter, LANG_BEARING):
        return delimiter.lang
    return None


def lang_set(lang: Optional[str], delimiter: Delimiter) -> Delimiter:
    """Return a copy of `delimiter` with its language replaced"""
    if isinstance(delimiter, LANG_BEARING):
        return dataclasses.replace(delimiter, lang=lang)
    return delimiter


def opening_of(delimiter: Delimiter) -> Delimiter:
    """Opening counterpart of a paired delimiter (identity otherwise)"""
    if isinstance(delimiter, (LaTeX, OrgMode, Jekyll, Asciidoc)):
        return dataclasses.replace(delimiter, phase=Phase.BEGIN)
    return delimiter


def closing_of(delimiter: Delimiter) -> Delimiter:
    """Closing counterpart of a delimiter, with the language cleared"""
    if isinstance(delimiter, (LaTeX, OrgMode, Jekyll, Asciidoc)):
        delimiter = dataclasses.replace(delimiter, phase=Phase.END)
    return lang_set(None, delimiter)


def emit_lines(delimiter: Delimiter) -> List[str]:
    """
    Render a delimiter as the source lines it occupies

    Most delimiters are one line; the Asciidoc header is two
    (`[source,lang]` followed by `----`).

    Args:
        delimiter: Delimiter to render

    Returns:
        List of rendered lines
    """
    lang = lang_of(delimiter) or ""

    if isinstance(delimiter, LaTeX):
        if delimiter.phase is Phase.BEGIN:
            return ["\\begin{code}"]
        return ["\\end{code}"]

    if isinstance(delimiter, OrgMode):
        if delimiter.phase is Phase.BEGIN:
            return [f"#+BEGIN_SRC {lang}".rstrip()]
        return ["#+END_SRC"]

    if isinstance(delimiter, Bird):
        return [">"]

    if isinstance(delimiter, Jekyll):
        if delimiter.phase is Phase.BEGIN:
            return [f"{{% highlight {lang} %}}" if lang else "{% highlight %}"]
        return ["{% endhighlight %}"]

    if isinstance(delimiter, Markdown):
        return [f"{delimiter.fence.value}{lang}"]

    if isinstance(delimiter, Asciidoc):
        if delimiter.phase is Phase.BEGIN:
            header = f"[source,{lang}]" if lang else "[source]"
            return [header, "----"]
        return ["----"]

    raise TypeError(f"Not a delimiter: {delimiter!r}")


def emit(delimiter: Delimiter) -> str:
    """Render a delimiter as text (multi-line delimiters joined by newlines)"""
    return "\n".join(emit_lines(delimiter))


def tag_text(delimiter: Delimiter) -> str:
    """Single-line tag used in messages: the first rendered line"""
    return emit_lines(delimiter)[0]
