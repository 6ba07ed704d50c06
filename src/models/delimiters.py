"""
Delimiter data models

Closed set of markup-tag shapes recognized in literate documents. Each
shape is a frozen dataclass so that delimiters compare by value and can be
stored in styles (tuples) without risk of mutation.

Shapes:
    LaTeX(phase)            \\begin{code} / \\end{code}
    OrgMode(phase, lang)    #+BEGIN_SRC lang / #+END_SRC
    Bird()                  > code
    Jekyll(phase, lang)     {% highlight lang %} / {% endhighlight %}
    Markdown(fence, lang)   ```lang / ~~~lang
    Asciidoc(phase, lang)   [source,lang] + ---- / ----
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union


class Phase(Enum):
    """Opening or closing half of a paired delimiter"""
    BEGIN = "begin"
    END = "end"


class Fence(Enum):
    """Markdown fence character kind"""
    TILDE = "~~~"
    BACKTICK = "```"


@dataclass(frozen=True)
class LaTeX:
    phase: Phase


@dataclass(frozen=True)
class OrgMode:
    phase: Phase
    lang: Optional[str] = None


@dataclass(frozen=True)
class Bird:
    pass


@dataclass(frozen=True)
class Jekyll:
    phase: Phase
    lang: Optional[str] = None


@dataclass(frozen=True)
class Markdown:
    fence: Fence
    lang: Optional[str] = None


@dataclass(frozen=True)
class Asciidoc:
    phase: Phase
    lang: Optional[str] = None


Delimiter = Union[LaTeX, OrgMode, Bird, Jekyll, Markdown, Asciidoc]

# Delimiter shapes that carry a language field
LANG_BEARING = (OrgMode, Jekyll, Markdown, Asciidoc)

# A style is an ordered, immutable collection of delimiter shapes
Style = Tuple[Delimiter, ...]
