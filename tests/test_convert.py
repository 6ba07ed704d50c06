"""
Conversion tests - rewrite code block markup

Tests re-rendering into each target, Bird re-tagging, language
propagation and round trips between the paired styles.
"""

import itertools

import pytest

from unlit.lib.automaton import convert
from unlit.lib.delimiters import lang_set
from unlit.lib.styles import (
    ASCIIDOC,
    BACKTICKFENCE,
    BIRD,
    INFER,
    LATEX,
    MARKDOWN,
    set_lang,
    style_parse,
    style_target,
)
from unlit.models.delimiters import Asciidoc, Bird, Fence, Jekyll, LaTeX, Markdown, OrgMode, Phase

PAIRED_STYLES = ["latex", "orgmode", "jekyll", "asciidoc", "tildefence", "backtickfence"]

CANONICAL = "\n".join([
    "Some prose.",
    "",
    "\\begin{code}",
    "main :: IO ()",
    "main = do",
    "  print 1",
    "\\end{code}",
    "",
    "More prose.",
    "",
    "\\begin{code}",
    "fib :: Int -> Int",
    "\\end{code}",
    "",
    "The end.",
])

BIRD_DOC = "\n".join([
    "Intro",
    "",
    "> main = do",
    ">   print 1",
    "",
    "Outro",
])


def target_make(name: str, lang: str = "haskell"):
    return lang_set(lang, style_target(style_parse(name)))


def rendering(name: str) -> str:
    """CANONICAL rendered in the named style"""
    return convert(LATEX, target_make(name), CANONICAL)


class TestBirdSource:
    """Test converting Bird-tagged documents"""

    def test_to_backtick_fence(self):
        assert convert(BIRD, Markdown(Fence.BACKTICK), "> x = 1\n> y = 2\n") == "```\nx = 1\ny = 2\n```"

    def test_to_latex_with_prose(self):
        """The blank line after the block becomes the closing tag"""
        assert convert(BIRD, LaTeX(Phase.BEGIN), BIRD_DOC).split("\n") == [
            "Intro",
            "",
            "\\begin{code}",
            "main = do",
            "  print 1",
            "\\end{code}",
            "Outro",
        ]

    def test_closed_by_prose(self):
        """A prose line directly after the block is kept"""
        assert convert(BIRD, LaTeX(Phase.BEGIN), "> a\ntext").split("\n") == [
            "\\begin{code}", "a", "\\end{code}", "text",
        ]

    def test_closed_by_other_language_fence(self):
        """The rejected fence and its block pass through as prose"""
        text = "> a\n```python\nprint(1)\n```"
        style = set_lang("haskell", MARKDOWN)
        assert convert(style, Markdown(Fence.TILDE, "haskell"), text).split("\n") == [
            "~~~haskell", "a", "~~~", "```python", "print(1)", "```",
        ]

    def test_bird_round_trip(self):
        fenced = convert(BIRD, Markdown(Fence.BACKTICK), BIRD_DOC)
        assert convert(BACKTICKFENCE, Bird(), fenced) == BIRD_DOC


class TestBirdTarget:
    """Test re-tagging code as Bird lines"""

    def test_latex_to_bird(self):
        text = "Intro\n\n\\begin{code}\nmain = do\n\n  print 1\n\\end{code}\n\nOutro"
        assert convert(LATEX, Bird(), text).split("\n") == [
            "Intro",
            "",
            "> main = do",
            ">",
            ">   print 1",
            "",
            "",
            "Outro",
        ]

    def test_no_trailing_blank_at_end(self):
        assert convert(LATEX, Bird(), "\\begin{code}\nx\n\\end{code}") == "> x"

    def test_markdown_style_targets_bird(self):
        assert convert(LATEX, style_target(MARKDOWN), "\\begin{code}\nx\n\\end{code}") == "> x"


class TestPairedTargets:
    """Test rendering into begin/end targets"""

    def test_asciidoc_target(self):
        text = "\\begin{code}\nmain\n\\end{code}"
        assert convert(LATEX, Asciidoc(Phase.BEGIN, "haskell"), text) == "[source,haskell]\n----\nmain\n----"

    def test_asciidoc_source(self):
        text = "[source,haskell]\n----\nmain\n----"
        assert convert(ASCIIDOC, Jekyll(Phase.BEGIN), text) == "{% highlight haskell %}\nmain\n{% endhighlight %}"

    def test_prose_and_stray_tags_pass_through(self):
        assert convert(LATEX, Markdown(Fence.BACKTICK), "\\end{code}\ntext") == "\\end{code}\ntext"

    def test_infer_source(self):
        text = "\\begin{code}\nx\n\\end{code}"
        assert convert(INFER, Markdown(Fence.BACKTICK, "haskell"), text) == "```haskell\nx\n```"


class TestLanguagePropagation:
    """Test which language ends up on the opening tag"""

    TEXT = "```haskell\nmain\n```\n```\nx\n```"

    def test_source_language_wins(self):
        assert convert(BACKTICKFENCE, OrgMode(Phase.BEGIN), self.TEXT).split("\n") == [
            "#+BEGIN_SRC haskell", "main", "#+END_SRC",
            "#+BEGIN_SRC", "x", "#+END_SRC",
        ]

    def test_configured_language_as_fallback(self):
        assert convert(BACKTICKFENCE, OrgMode(Phase.BEGIN, "idris"), self.TEXT).split("\n") == [
            "#+BEGIN_SRC haskell", "main", "#+END_SRC",
            "#+BEGIN_SRC idris", "x", "#+END_SRC",
        ]

    def test_foreign_blocks_pass_through(self):
        text = "```python\nprint(1)\n```\n\n```haskell\nmain = pure ()\n```"
        assert convert(set_lang("haskell", MARKDOWN), Markdown(Fence.TILDE, "haskell"), text).split("\n") == [
            "```python", "print(1)", "```", "", "~~~haskell", "main = pure ()", "~~~",
        ]


class TestRoundTrip:
    """Converting A -> B -> A reproduces the A rendering"""

    @pytest.mark.parametrize("source, target", list(itertools.product(PAIRED_STYLES, repeat=2)))
    def test_round_trip(self, source, target):
        original = rendering(source)
        there = convert(set_lang("haskell", style_parse(source)), target_make(target), original)
        back = convert(set_lang("haskell", style_parse(target)), target_make(source), there)
        assert back == original

    def test_line_separator_survives(self):
        """U+2028 inside a code line is not a line break"""
        text = "\\begin{code}\na\u2028b\n\\end{code}"
        fenced = convert(LATEX, Markdown(Fence.BACKTICK), text)
        assert fenced == "```\na\u2028b\n```"
        assert convert(BACKTICKFENCE, LaTeX(Phase.BEGIN), fenced) == text

    def test_latex_rendering_is_identity(self):
        assert rendering("latex") == CANONICAL

    def test_orgmode_rendering(self):
        assert rendering("orgmode").split("\n")[2:8] == [
            "#+BEGIN_SRC haskell",
            "main :: IO ()",
            "main = do",
            "  print 1",
            "#+END_SRC",
            "",
        ]
