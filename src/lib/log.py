"""
Centralized logging using Loguru with context-aware verbosity.

LOG() respects the verbosity of the ProgramState connected to the current
context, so library modules (scanner, resolver, compiler) can log without
having the state passed to them. With no state connected, as when turf is
used as a library, LOG() is silent.

Usage:
    from turf.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Compiling index.kit", level=1)
    LOG("Resolved include 'header' -> /site/_header.kit", level=2)
    LOG("Scanned 42 blocks", level=3)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

# Context variable to hold current ProgramState
_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

# Configure loguru with turf-specific format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{module: <10}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)

logger.remove()  # Remove default handler
logger.add(sys.stderr, format=logger_format, level="DEBUG")


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Args:
        state: Object with a `verbosity` attribute (1=normal, 2=verbose, 3=debug)
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if the connected state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru arguments
    """
    state = _program_state.get()

    if state and getattr(state, 'verbosity', 0) >= level:
        logger.opt(depth=1).debug(message, **kwargs)
