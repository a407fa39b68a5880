"""
Models package for turf

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .document import Block, Document
from .directives import Compile, Definition, Directive, DirectiveKind, Include, Reference
from .options import CompileOptions

__all__ = [
    "ProgramState",
    "pipeline",
    "Block",
    "Document",
    "Compile",
    "Definition",
    "Directive",
    "DirectiveKind",
    "Include",
    "Reference",
    "CompileOptions",
]
