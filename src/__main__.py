#!/usr/bin/env python3
"""
unlit - Extract and convert code in literate documents

Reads literate programs (prose with embedded code) from an input directory
and writes either the bare code or the same document with its code blocks
re-marked in another convention to an output directory.

As with other ChRIS-style tools, the command line follows the "plugin"
pattern: positional input and output directories, with options selecting
what to do with each document found in the input directory.

Supported markup:
    - LaTeX:     \\begin{code} ... \\end{code}
    - Bird:      > code
    - Org-mode:  #+BEGIN_SRC lang ... #+END_SRC
    - Jekyll:    {% highlight lang %} ... {% endhighlight %}
    - Markdown:  ```lang ... ``` and ~~~lang ... ~~~
    - Asciidoc:  [source,lang] / ---- ... ----

Usage:
    unlit inputdir/ outputdir/ --inputFile Main.lhs

Examples:
    # Extract Haskell code from every .lhs file, keeping line numbers
    unlit src/ build/ --whitespace all --outputSuffix .hs

    # Only Haskell blocks from Markdown documents
    unlit docs/ out/ --pattern '*.md' --source markdown --language haskell

    # Rewrite Bird-style literate Haskell as Markdown backtick fences
    unlit src/ docs/ --source bird --target backtickfence --language haskell --outputSuffix .md
"""

import sys
from pathlib import Path
from typing import List
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    __version__,
    LOG,
    state_connectToLogger,
    set_lang,
    style_parse,
    style_target,
    whitespace_parse,
    UnlitError,
    UnknownStyleError,
)
from .lib.automaton import Converter, Extractor, lines_split
from .lib.delimiters import lang_set
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
               _ _ _
   _   _ _ __ | (_) |_
  | | | | '_ \| | | __|
  | |_| | | | | | | |_
   \__,_|_| |_|_|_|\__|

  Literate program extraction and conversion
"""

# Define CLI arguments
parser = ArgumentParser(
    description="unlit - extract code from literate documents or convert their markup",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default=None,
    type=str,
    help="Single input document (relative to inputdir); overrides --pattern",
)

parser.add_argument(
    "--pattern",
    default=appsettings.input_pattern,
    type=str,
    help="Glob (relative to inputdir) selecting the documents to process",
)

parser.add_argument(
    "-f",
    "--source",
    default=appsettings.source_style,
    type=str,
    help="Source style: all, asciidoc, backtickfence, bird, haskell, infer, jekyll, latex, markdown, orgmode, tildefence",
)

parser.add_argument(
    "-t",
    "--target",
    default=None,
    type=str,
    help="Target style; when given, documents are converted instead of extracted",
)

parser.add_argument(
    "-l",
    "--language",
    default=None,
    type=str,
    help="Only recognize code blocks in this language (also used for target tags); "
    "needs an explicit --source, since inferred styles accept every language",
)

parser.add_argument(
    "-w",
    "--whitespace",
    default=appsettings.whitespace_mode,
    type=str,
    help="Whitespace mode for extraction: 'indent' drops markup lines, 'all' keeps them blank",
)

parser.add_argument(
    "--outputSuffix",
    default=appsettings.output_suffix,
    type=str,
    help="Suffix for output files (e.g. .hs); empty keeps the input filename",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=appsettings.strict_mode,
    help="Treat closing delimiters outside any code block as errors",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment, resolve input documents and parse style options.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputFiles: Documents to process
            - sourceStyle: Source Style with the language filter applied
            - targetDelimiter: Conversion target, or None to extract
            - whitespaceMode: Parsed WhitespaceMode
            - envOK: True if environment is valid

    Exits:
        1 if no input document is found or a style option is invalid
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputFile:
        input_file = state.inputdir / state.inputFile
        if not input_file.is_file():
            print(f"Error: Input file not found: {input_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.inputFiles = [input_file]
    else:
        state.inputFiles = sorted(p for p in state.inputdir.glob(state.pattern) if p.is_file())
        if not state.inputFiles:
            print(
                f"Error: No documents matching '{state.pattern}' in {state.inputdir}",
                file=sys.stderr,
            )
            state.envOK = False
            sys.exit(1)

    LOG(f"Input documents: {len(state.inputFiles)}", level=2)

    try:
        state.sourceStyle = set_lang(state.language, style_parse(state.source))
        if state.language and not state.sourceStyle:
            LOG(
                f"Note: --language {state.language} is not applied when the source style is inferred; "
                "pass --source to filter recognized blocks",
                level=1,
            )
        state.whitespaceMode = whitespace_parse(state.whitespace)
        if state.target:
            state.targetDelimiter = lang_set(state.language, style_target(style_parse(state.target)))
        else:
            state.targetDelimiter = None
    except UnknownStyleError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def document_transform(state: ProgramState, text: str) -> List[str]:
    """
    Run the extraction or conversion automaton on one document.

    Args:
        state: Program state with parsed style options
        text: Document text

    Returns:
        Transformed lines; a document whose output is a single blank line
        still yields one line

    Raises:
        UnlitError: If the document has mismatched or unterminated blocks
    """
    if state.targetDelimiter is None:
        return Extractor(state.whitespaceMode, state.sourceStyle, state.strict).process(text)
    return Converter(state.sourceStyle, state.targetDelimiter, state.strict).process(text)


def documents_transform(inputstate: ProgramState) -> ProgramState:
    """
    Read, transform and write every input document.

    A document that fails to process produces no output file.

    Args:
        inputstate: Program state after env_check

    Returns:
        ProgramState with added field:
            - transformResult: Dict containing:
                - documents: int (documents written)
                - lines_in: int (total input lines)
                - lines_out: int (total output lines)
                - outputs: List[str] (paths written)

    Exits:
        1 if a document cannot be read or fails to process
    """

    state = inputstate.copy()
    mode = "Converting" if state.targetDelimiter is not None else "Extracting"
    result = {"documents": 0, "lines_in": 0, "lines_out": 0, "outputs": []}

    for input_file in state.inputFiles:
        relative = input_file.relative_to(state.inputdir)
        output_file = state.outputdir / appsettings.outputName_make(relative, state.outputSuffix)
        LOG(f"{mode} {relative}...", level=1)

        try:
            text = input_file.read_text(encoding=appsettings.encoding)
        except OSError as e:
            print(f"Error reading input file: {e}", file=sys.stderr)
            sys.exit(1)

        try:
            transformed = document_transform(state, text)
        except UnlitError as e:
            print(f"{relative}: {e}", file=sys.stderr)
            sys.exit(1)

        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text("".join(f"{line}\n" for line in transformed), encoding=appsettings.encoding)
        LOG(f"Wrote {output_file}", level=2)

        result["documents"] += 1
        result["lines_in"] += len(lines_split(text))
        result["lines_out"] += len(transformed)
        result["outputs"].append(str(output_file))

    state.transformResult = result
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the processed documents.

    Args:
        inputstate: Program state with transformResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if transformResult is None
    """
    state: ProgramState = inputstate.copy()
    if state.transformResult is None:
        print("Error: No documents were processed", file=sys.stderr)
        sys.exit(1)

    LOG(f"✓ Processed {state.transformResult['documents']} document(s)", level=1)
    LOG(f"  Lines in:  {state.transformResult['lines_in']}", level=2)
    LOG(f"  Lines out: {state.transformResult['lines_out']}", level=2)
    LOG(f"  Output:    {state.outputdir}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="unlit - literate program extraction and conversion",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - extract or convert every selected document.

    Orchestrates the pipeline:
        1. env_check: Resolve documents and parse style options
        2. documents_transform: Run the automaton on each document
        3. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing literate documents
        outputdir: Directory where results are written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, documents_transform, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
