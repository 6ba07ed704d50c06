"""
Line automaton for literate documents

One left-to-right pass over the lines of a document, tracking whether a
code block is open and which delimiter opened it. The transition logic
lives in Automaton.process(); what gets written for each transition is left to
two subclasses:

    Extractor  (unlit)  keeps only the code, dropping all markup
    Converter  (relit)  re-renders the markup in a single target shape

Transitions per line (candidate = delimiter recognized on the line):

    no block     + nothing     -> prose
    no block     + Bird        -> open Bird block
    no block     + begin tag   -> open block (Asciidoc headers take two lines)
    no block     + other tag   -> prose (strict: SpuriousEndDelimiter)
    Bird block   + nothing     -> close Bird block
    Bird block   + Bird        -> code
    other block  + nothing     -> code
    other block  + Bird        -> code
    open block   + closing tag -> close block
    open block   + other tag   -> SpuriousBeginDelimiter / SpuriousEndDelimiter

A Markdown fence naming a language the style rejects starts a foreign
block: every line up to and including the next fence of the same kind is
prose. Such a fence also ends an open Bird block.

When no style is given, lines are recognized with `all` until the first
block opens; from then on only that block's family is recognized.

Example:
    >>> extract(WhitespaceMode.KEEP_INDENT, INFER, "> foo\\n> bar\\n")
    'foo\\nbar'
"""

from typing import List, Optional

from ..models.delimiters import Asciidoc, Bird, Delimiter, Fence, Phase, Style
from .delimiters import closing_of, emit_lines, is_begin, lang_of, lang_set, match, opening_of, tag_text
from .errors import SpuriousBeginDelimiter, SpuriousEndDelimiter, UnexpectedEnd
from .log import LOG
from .recognizer import fence_foreign, try_all
from .styles import Unconstrained, WhitespaceMode, constraint_make


def lines_split(text: str) -> List[str]:
    """
    Split a document into lines on "\n" only

    A final newline ends the last line rather than starting an empty one,
    and a trailing "\r" is dropped from each line. Form feeds and Unicode
    line separators stay inside their line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def bird_strip(line: str) -> str:
    """Drop the `> ` (or bare `>`) marker from a Bird line"""
    return line[2:]


def bird_tag(line: str) -> str:
    """Mark a code line as Bird code; blank lines get a bare `>`"""
    if not line.strip():
        return ">"
    return f"> {line}"


class Automaton:
    """
    Shared state machine for extraction and conversion

    Subclasses implement the *_emit / *_open / *_close hooks, which append
    to self.output. process() returns the output lines and run() joins them;
    both raise an UnlitError and return nothing for a document that fails.
    """

    def __init__(self, style: Style, strict: bool = False) -> None:
        """
        Args:
            style: Delimiter shapes to recognize; an empty style means
                   "infer from the first block"
            strict: Raise SpuriousEndDelimiter for closing tags found
                    outside any block instead of treating them as prose
        """
        self.style = style
        self.strict = strict
        self.output: List[str] = []

    def run(self, text: str) -> str:
        """Process a whole document, returning its lines joined with newlines"""
        return "\n".join(self.process(text))

    def process(self, text: str) -> List[str]:
        """
        Process a whole document

        Args:
            text: Document text

        Returns:
            Transformed lines, without line terminators

        Raises:
            SpuriousBeginDelimiter: Opening tag inside an incompatible block
            SpuriousEndDelimiter: Closing tag that closes nothing open
            UnexpectedEnd: Document ended inside a paired block
        """
        lines = lines_split(text)
        self.output = []
        constraint = constraint_make(self.style)
        state: Optional[Delimiter] = None
        foreign: Optional[Fence] = None
        cursor = 0

        while cursor < len(lines):
            line = lines[cursor]
            number = cursor + 1
            next_line = lines[cursor + 1] if number < len(lines) else None
            style = constraint.effective()
            consumed = 1

            if foreign is not None:
                # Inside a fenced block of another language
                if line.lstrip().startswith(foreign.value):
                    foreign = None
                self.prose_emit(line)
                cursor += 1
                continue

            candidate = try_all(style, line, next_line)

            if candidate is None:
                if state is None:
                    foreign = fence_foreign(style, line)
                    self.prose_emit(line)
                elif isinstance(state, Bird):
                    self.bird_close(line, final=next_line is None)
                    state = None
                    # A rejected fence may also be what ends the Bird block
                    foreign = fence_foreign(style, line)
                else:
                    self.code_emit(line)

            elif isinstance(candidate, Bird):
                if state is None:
                    self.bird_open(line)
                    state = candidate
                elif isinstance(state, Bird):
                    self.bird_continue(line)
                else:
                    self.code_emit(line)

            elif state is None:
                if is_begin(candidate):
                    if isinstance(candidate, Asciidoc) and candidate.phase is Phase.BEGIN:
                        consumed = 2
                    LOG(f"line {number}: open {tag_text(candidate)}", level=3)
                    self.block_open(candidate, consumed)
                    state = candidate
                elif self.strict:
                    raise SpuriousEndDelimiter(number, candidate)
                else:
                    LOG(f"line {number}: stray {tag_text(candidate)} kept as prose", level=2)
                    self.prose_emit(line)

            elif match(state, candidate):
                LOG(f"line {number}: close {tag_text(state)}", level=3)
                self.block_close(candidate, final=next_line is None)
                state = None

            elif is_begin(candidate):
                raise SpuriousBeginDelimiter(number, candidate)
            else:
                raise SpuriousEndDelimiter(number, candidate)

            if state is not None and isinstance(constraint, Unconstrained):
                constraint = constraint.latch(state)
                LOG(f"line {number}: style latched to {tag_text(state)} family", level=3)

            cursor += consumed

        if isinstance(state, Bird):
            self.bird_end()
        elif state is not None:
            raise UnexpectedEnd(state)

        return self.output

    # Emission hooks
    def prose_emit(self, line: str) -> None:
        raise NotImplementedError

    def code_emit(self, line: str) -> None:
        raise NotImplementedError

    def bird_open(self, line: str) -> None:
        raise NotImplementedError

    def bird_continue(self, line: str) -> None:
        raise NotImplementedError

    def bird_close(self, line: str, final: bool) -> None:
        raise NotImplementedError

    def bird_end(self) -> None:
        raise NotImplementedError

    def block_open(self, delimiter: Delimiter, consumed: int) -> None:
        raise NotImplementedError

    def block_close(self, delimiter: Delimiter, final: bool) -> None:
        raise NotImplementedError


class Extractor(Automaton):
    """
    Strip markup and keep only code (unlit)

    KEEP_ALL writes one line per input line: removed lines become blank and
    Bird markers become a space, so code keeps both its line and column.
    KEEP_INDENT drops removed lines and writes a single blank line between
    consecutive code blocks.
    """

    def __init__(self, whitespace: WhitespaceMode, style: Style, strict: bool = False) -> None:
        super().__init__(style, strict)
        self.whitespace = whitespace

    @property
    def keep_all(self) -> bool:
        return self.whitespace is WhitespaceMode.KEEP_ALL

    def placeholder_emit(self, count: int = 1) -> None:
        if self.keep_all:
            self.output.extend([""] * count)

    def separator_emit(self) -> None:
        if not self.keep_all and self.output:
            self.output.append("")

    def bird_code(self, line: str) -> str:
        if self.keep_all:
            return " " + line[1:]
        return bird_strip(line)

    def prose_emit(self, line: str) -> None:
        self.placeholder_emit()

    def code_emit(self, line: str) -> None:
        self.output.append(line)

    def bird_open(self, line: str) -> None:
        self.separator_emit()
        self.output.append(self.bird_code(line))

    def bird_continue(self, line: str) -> None:
        self.output.append(self.bird_code(line))

    def bird_close(self, line: str, final: bool) -> None:
        self.placeholder_emit()

    def bird_end(self) -> None:
        pass

    def block_open(self, delimiter: Delimiter, consumed: int) -> None:
        self.placeholder_emit(consumed)
        self.separator_emit()

    def block_close(self, delimiter: Delimiter, final: bool) -> None:
        self.placeholder_emit()


class Converter(Automaton):
    """
    Rewrite markup into a single target delimiter (relit)

    Prose passes through untouched. Code passes through untouched unless
    the target is Bird, in which case every code line is re-tagged.
    Opening tags take the language of the source tag when it has one, and
    the target's configured language otherwise.
    """

    def __init__(self, style: Style, target: Delimiter, strict: bool = False) -> None:
        super().__init__(style, strict)
        self.target = opening_of(target)

    @property
    def bird_target(self) -> bool:
        return isinstance(self.target, Bird)

    def target_for(self, source: Delimiter) -> Delimiter:
        lang = lang_of(source)
        if lang:
            return lang_set(lang, self.target)
        return self.target

    def open_emit(self, source: Delimiter, inline: Optional[str]) -> None:
        if self.bird_target:
            if inline is not None:
                self.output.append(bird_tag(inline))
            return
        self.output.extend(emit_lines(self.target_for(source)))
        if inline is not None:
            self.output.append(inline)

    def close_emit(self, final: bool) -> None:
        if self.bird_target:
            # Bird blocks are closed by a blank line, except at the very end
            if not final:
                self.output.append("")
            return
        self.output.extend(emit_lines(closing_of(self.target)))

    def prose_emit(self, line: str) -> None:
        self.output.append(line)

    def code_emit(self, line: str) -> None:
        self.output.append(bird_tag(line) if self.bird_target else line)

    def bird_open(self, line: str) -> None:
        self.open_emit(Bird(), bird_strip(line))

    def bird_continue(self, line: str) -> None:
        self.code_emit(bird_strip(line))

    def bird_close(self, line: str, final: bool) -> None:
        blank = not line.strip()
        self.close_emit(final and blank)
        if not blank:
            self.output.append(line)

    def bird_end(self) -> None:
        if not self.bird_target:
            self.close_emit(final=True)

    def block_open(self, delimiter: Delimiter, consumed: int) -> None:
        self.open_emit(delimiter, None)

    def block_close(self, delimiter: Delimiter, final: bool) -> None:
        self.close_emit(final)


def extract(whitespace: WhitespaceMode, style: Style, text: str, strict: bool = False) -> str:
    """
    Extract the code from a literate document

    Args:
        whitespace: What to put in place of removed lines
        style: Delimiter shapes to recognize (empty: infer)
        text: Document text
        strict: Reject closing tags outside any block

    Returns:
        Code only, lines joined with newlines

    Raises:
        UnlitError: On mismatched or unterminated blocks

    Example:
        >>> extract(WhitespaceMode.KEEP_INDENT, LATEX, "x\\n\\\\begin{code}\\nmain\\n\\\\end{code}")
        'main'
    """
    return Extractor(whitespace, style, strict).run(text)


def convert(style: Style, target: Delimiter, text: str, strict: bool = False) -> str:
    """
    Rewrite the code blocks of a literate document in another markup

    Args:
        style: Delimiter shapes to recognize in the source (empty: infer)
        target: Delimiter to render blocks with; its language is used for
                opening tags whose source tag carries none
        text: Document text
        strict: Reject closing tags outside any block

    Returns:
        Converted document, lines joined with newlines

    Raises:
        UnlitError: On mismatched or unterminated blocks
    """
    return Converter(style, target, strict).run(text)
