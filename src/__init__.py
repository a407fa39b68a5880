"""
turf - comment-directive markup compiler

Treats HTML comments as an embedded directive language over literal text:
<!--@name value--> defines a variable, <!--@name--> references it and
<!--@include file--> splices another (recursively compiled) file.
"""

__version__ = "1.0.0"

from .lib import (
    Compiler,
    compile,
    compile_file,
    TurfError,
    UnterminatedComment,
    UndefinedVariable,
    UnsupportedDirective,
    IncludeNotFound,
    RecursiveInclude,
    LOG,
    state_connectToLogger,
)

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
    "LOG",
    "state_connectToLogger",
    "__version__",
]
