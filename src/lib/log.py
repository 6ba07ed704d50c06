"""
Verbosity-gated logging on top of Loguru.

The CLI connects its ProgramState once, and every LOG() call made while
processing reads the verbosity from that state through a context variable.
Library callers that never connect a state get no output at all: extract()
and convert() stay silent unless they run inside the CLI pipeline.

Verbosity and the Loguru level each message is written at:

    1  INFO   per-run summary (default)
    2  DEBUG  per-document progress (-v)
    3  TRACE  per-line block transitions (-vv)

Usage:
    from unlit.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Extracting Main.lhs...", level=1)
    LOG("line 12: open \\\\begin{code}", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

_levels = {1: "INFO", 2: "DEBUG", 3: "TRACE"}

logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan>:<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()
logger.add(sys.stderr, format=logger_format, level="TRACE")


def state_connectToLogger(state: Any) -> None:
    """
    Make a ProgramState's verbosity the gate for LOG() in this context.

    Args:
        state: Object with a verbosity attribute (normally ProgramState)
    """
    _program_state.set(state)


def verbosity_current() -> int:
    """Verbosity of the connected state, 0 when nothing is connected"""
    state = _program_state.get()
    return getattr(state, 'verbosity', 0) if state is not None else 0


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity is at least level.

    Args:
        message: Log message to display
        level: Minimum verbosity required (1=normal, 2=verbose, 3=trace)
        **kwargs: Additional loguru metadata
    """
    if verbosity_current() >= level:
        logger.opt(depth=1).log(_levels.get(level, "TRACE"), message, **kwargs)
