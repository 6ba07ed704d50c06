"""
Program state model and pipeline helper

ProgramState is the single value threaded through the CLI stages; each
stage copies it, fills in what it computed, and hands it on. pipeline()
composes those stages left to right.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable, TYPE_CHECKING
from dataclasses import dataclass, field, fields, replace
from functools import reduce

if TYPE_CHECKING:
    from .delimiters import Delimiter, Style
    from ..lib.styles import WhitespaceMode


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the unlit pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, pattern, source,
          target, language, whitespace, outputSuffix, strict
        - env_check: inputFiles, sourceStyle, targetDelimiter, whitespaceMode, envOK
        - documents_transform: transformResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing literate source documents
        outputdir: Base output directory for transformed documents
        verbosity: Logging verbosity level (1-3)
        inputFile: Single input filename (relative to inputdir), optional
        pattern: Glob selecting input documents when inputFile is not given
        source: Source style token (e.g. "infer", "markdown")
        target: Target style token; None means extract code instead of converting
        language: Optional language filter applied to source and target
        whitespace: Whitespace mode token ("indent" or "all")
        outputSuffix: Replacement suffix for output files ("" keeps the name)
        strict: Treat stray closing delimiters as errors
        envOK: Environment validation passed
        inputFiles: Resolved input documents
        sourceStyle: Parsed source Style (language applied)
        targetDelimiter: Parsed conversion target (language applied), if any
        whitespaceMode: Parsed WhitespaceMode
        transformResult: Summary (documents, lines_in, lines_out, outputs)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: Optional[str] = field(default=None)
    pattern: str = field(default="**/*.lhs")
    source: str = field(default="infer")
    target: Optional[str] = field(default=None)
    language: Optional[str] = field(default=None)
    whitespace: str = field(default="indent")
    outputSuffix: str = field(default="")
    strict: bool = field(default=False)
    # Pipeline state
    envOK: bool = field(default=False)
    inputFiles: List[Path] = field(default_factory=list)
    sourceStyle: "Style" = field(default=())
    targetDelimiter: Optional["Delimiter"] = field(default=None)
    whitespaceMode: Optional["WhitespaceMode"] = field(default=None)
    transformResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Build the initial state from parsed CLI options.

        Options without a matching field (the plugin wrapper adds a few of
        its own) are ignored.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source documents
            outputdir: Directory for transformed output

        Returns:
            ProgramState carrying the CLI options
        """
        known = {f.name for f in fields(cls)}
        given = {k: v for k, v in vars(options).items() if k in known}
        given.update(inputdir=inputdir, outputdir=outputdir)
        return cls(**given)

    def copy(self: PS) -> PS:
        """Shallow copy, so stages never mutate the state they were given"""
        return replace(self)


Stage = Callable[[ProgramState], ProgramState]


def pipeline(initial_state: ProgramState, *stages: Stage) -> ProgramState:
    """
    Run stages in order, feeding each one the state the previous returned.

    Example:
        final_state = pipeline(state, env_check, documents_transform, results_report)
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
