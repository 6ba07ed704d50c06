"""
Extraction tests - strip markup and keep code

Tests both whitespace modes, every markup, language filtering, style
inference and the tolerance for stray closing tags.
"""

import pytest

from unlit.lib.automaton import extract, lines_split
from unlit.lib.errors import SpuriousEndDelimiter
from unlit.lib.styles import (
    ALL,
    ASCIIDOC,
    BIRD,
    HASKELL,
    INFER,
    JEKYLL,
    LATEX,
    MARKDOWN,
    ORGMODE,
    WhitespaceMode,
    set_lang,
)
from unlit.models.delimiters import OrgMode, Phase

INDENT = WhitespaceMode.KEEP_INDENT
KEEP_ALL = WhitespaceMode.KEEP_ALL

LATEX_DOC = "\n".join([
    "Prose",
    "\\begin{code}",
    "main = print 1",
    "\\end{code}",
    "More prose",
    "\\begin{code}",
    "x = 2",
    "\\end{code}",
])

MIXED_MARKDOWN_DOC = "\n".join([
    "```python",
    "print(1)",
    "```",
    "",
    "```haskell",
    "main = pure ()",
    "```",
])


class TestBird:
    """Test Bird-tagged documents"""

    def test_default_style_keep_indent(self):
        """Bird lines lose their marker"""
        assert extract(INDENT, INFER, "> foo\n> bar\n") == "foo\nbar"

    def test_keep_all_keeps_columns(self):
        """KEEP_ALL replaces markers with a space and prose with blank lines"""
        text = "text\n\n> foo\n>\n> bar\n\nmore"
        assert extract(KEEP_ALL, BIRD, text).split("\n") == [
            "", "", "  foo", " ", "  bar", "", "",
        ]

    def test_blocks_separated_by_blank_line(self):
        text = "> a\n\nprose\n\n> b"
        assert extract(INDENT, BIRD, text) == "a\n\nb"

    def test_unterminated_bird_block_is_fine(self):
        assert extract(INDENT, BIRD, "prose\n\n> main = pure ()") == "main = pure ()"


class TestPairedBlocks:
    """Test begin/end style documents"""

    def test_latex_keep_indent(self):
        assert extract(INDENT, LATEX, LATEX_DOC) == "main = print 1\n\nx = 2"

    def test_latex_keep_all(self):
        assert extract(KEEP_ALL, LATEX, LATEX_DOC).split("\n") == [
            "", "", "main = print 1", "", "", "", "x = 2", "",
        ]

    def test_orgmode(self):
        text = "* Heading\n#+BEGIN_SRC haskell\nmain = pure ()\n#+END_SRC\n"
        assert extract(INDENT, ORGMODE, text) == "main = pure ()"

    def test_jekyll(self):
        text = "{% highlight haskell %}\nmain = pure ()\n{% endhighlight %}"
        assert extract(INDENT, JEKYLL, text) == "main = pure ()"

    def test_code_keeps_indentation(self):
        text = "\\begin{code}\nmain = do\n    print 1\n\\end{code}"
        assert extract(INDENT, LATEX, text) == "main = do\n    print 1"

    def test_bird_inside_paired_block(self):
        """Bird markers inside another block are plain code"""
        text = "\\begin{code}\n> not bird\n\\end{code}"
        assert extract(INDENT, HASKELL, text) == "> not bird"

    def test_empty_document(self):
        assert extract(INDENT, ALL, "") == ""
        assert extract(KEEP_ALL, ALL, "") == ""


class TestAsciidoc:
    """Test two-line Asciidoc headers"""

    DOC = "Intro\n[source,haskell]\n----\nmain = pure ()\n----\nOutro"

    def test_keep_indent(self):
        assert extract(INDENT, ASCIIDOC, self.DOC) == "main = pure ()"

    def test_keep_all_blanks_both_header_lines(self):
        assert extract(KEEP_ALL, ASCIIDOC, self.DOC).split("\n") == [
            "", "", "", "main = pure ()", "", "",
        ]

    def test_header_without_fence_is_prose(self):
        assert extract(INDENT, INFER, "[source,haskell]\nmain = pure ()") == ""


class TestLanguageFilter:
    """Test code blocks restricted to one language"""

    def test_other_language_fence_is_prose(self):
        """A ```python block is skipped entirely under a haskell filter"""
        style = set_lang("haskell", MARKDOWN)
        assert extract(INDENT, style, MIXED_MARKDOWN_DOC) == "main = pure ()"

    def test_other_language_fence_keep_all(self):
        style = set_lang("haskell", MARKDOWN)
        assert extract(KEEP_ALL, style, MIXED_MARKDOWN_DOC).split("\n") == [
            "", "", "", "", "", "main = pure ()", "",
        ]

    def test_without_filter_every_block_is_code(self):
        assert extract(INDENT, MARKDOWN, MIXED_MARKDOWN_DOC) == "print(1)\n\nmain = pure ()"

    def test_other_language_fence_ends_bird_block(self):
        """A rejected fence right after Bird code is skipped with its whole block"""
        text = "\n".join([
            "> a",
            "```python",
            "print(1)",
            "```",
            "prose",
            "```haskell",
            "main",
            "```",
            "more prose",
            "```haskell",
            "b",
            "```",
        ])
        style = set_lang("haskell", MARKDOWN)
        assert extract(INDENT, style, text) == "a\n\nmain\n\nb"
        assert len(extract(KEEP_ALL, style, text).split("\n")) == 12

    def test_orgmode_filter(self):
        """The orphaned #+END_SRC of a skipped block is tolerated"""
        text = "\n".join([
            "#+BEGIN_SRC python",
            "print(1)",
            "#+END_SRC",
            "#+BEGIN_SRC haskell",
            "main = pure ()",
            "#+END_SRC",
        ])
        assert extract(INDENT, set_lang("haskell", ORGMODE), text) == "main = pure ()"

    def test_orgmode_filter_strict(self):
        text = "#+BEGIN_SRC python\nprint(1)\n#+END_SRC"
        with pytest.raises(SpuriousEndDelimiter) as excinfo:
            extract(INDENT, set_lang("haskell", ORGMODE), text, strict=True)
        assert excinfo.value == SpuriousEndDelimiter(3, OrgMode(Phase.END))


class TestInference:
    """Test the style latch"""

    def test_latch_on_latex(self):
        """After a LaTeX block opens, fences are prose"""
        text = "\\begin{code}\na\n\\end{code}\n```\nnot code\n```"
        assert extract(INDENT, INFER, text) == "a"

    def test_explicit_all_does_not_latch(self):
        text = "\\begin{code}\na\n\\end{code}\n```\nnot code\n```"
        assert extract(INDENT, ALL, text) == "a\n\nnot code"

    def test_latch_on_bird(self):
        """A Bird block commits the document to Markdown"""
        text = "> a\n\n\\begin{code}\nb\n\\end{code}"
        assert extract(INDENT, INFER, text) == "a"


class TestStrayClosingTags:
    """Test closing tags seen outside any block"""

    def test_tolerated(self):
        assert extract(KEEP_ALL, LATEX, "\\end{code}\ntext") == "\n"

    def test_strict(self):
        with pytest.raises(SpuriousEndDelimiter, match="at line 1: spurious end"):
            extract(INDENT, LATEX, "\\end{code}\ntext", strict=True)


class TestLineSplitting:
    """Test that only newlines end a line"""

    def test_lines_split(self):
        assert lines_split("") == []
        assert lines_split("\n") == [""]
        assert lines_split("a\n\nb\n") == ["a", "", "b"]
        assert lines_split("a\r\nb") == ["a", "b"]

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
    def test_separator_inside_code_line(self, separator):
        """Form feeds and Unicode separators are part of the code line"""
        text = f"prose\n\\begin{{code}}\nx = 1 -- {separator} page\n\\end{{code}}"
        output = extract(KEEP_ALL, LATEX, text)
        assert output.split("\n") == ["", "", f"x = 1 -- {separator} page", ""]

    def test_crlf_document(self):
        text = "Prose\r\n\\begin{code}\r\nx = 1\r\n\\end{code}\r\n"
        assert extract(INDENT, LATEX, text) == "x = 1"


class TestLineParity:
    """KEEP_ALL output has one line per input line"""

    @pytest.mark.parametrize("style, text", [
        (LATEX, LATEX_DOC),
        (BIRD, "a\n\n> b\n> c\n\nd"),
        (ASCIIDOC, TestAsciidoc.DOC),
        (set_lang("haskell", MARKDOWN), MIXED_MARKDOWN_DOC),
        (INFER, "> x\n\n#+BEGIN_SRC\ny\n#+END_SRC\n[source,c]\n----"),
    ])
    def test_parity(self, style, text):
        output = extract(KEEP_ALL, style, text)
        assert len(output.split("\n")) == len(text.splitlines())
