"""
turf - comment-directive markup compiler

Compiles .kit-style documents whose HTML comments carry variable and include
directives.
"""

__version__ = "1.0.0"

from .compiler import Compiler, compile, compile_file
from .errors import (
    TurfError,
    UnterminatedComment,
    UndefinedVariable,
    UnsupportedDirective,
    IncludeNotFound,
    RecursiveInclude,
)
from .filestore import FileStore, LocalFileStore, MemoryFileStore
from .log import LOG, state_connectToLogger

__all__ = [
    "Compiler",
    "compile",
    "compile_file",
    "TurfError",
    "UnterminatedComment",
    "UndefinedVariable",
    "UnsupportedDirective",
    "IncludeNotFound",
    "RecursiveInclude",
    "FileStore",
    "LocalFileStore",
    "MemoryFileStore",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
