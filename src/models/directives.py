"""
Directive models

A special comment (trimmed content starting with '@' or '$') classifies into
exactly one of the variants below. The set is closed: the compiler matches on
it explicitly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Set, Tuple, Union


class DirectiveKind(Enum):
    """
    Kinds of comment directives

    Used in log output and to describe a directive without its payload.
    """
    DEFINITION = "definition"   # <!--@name value-->
    REFERENCE = "reference"     # <!--@name--> / <!--@name?-->
    INCLUDE = "include"         # <!--@include file--> / <!--@import-base64 file-->
    COMPILE = "compile"         # <!--@compile ...--> (always rejected)


@dataclass(frozen=True)
class Definition:
    """
    Variable definition: '@name value', '$name = value', '@name: value'

    Attributes:
        name: Variable name without its sigil
        value: Non-empty value to store
    """
    name: str
    value: str
    kind: DirectiveKind = DirectiveKind.DEFINITION


@dataclass(frozen=True)
class Reference:
    """
    Variable reference: '@name', '$name' or '@name?'

    Attributes:
        name: Variable name without sigil or trailing '?'
        optional: True if the reference carried a trailing '?'
    """
    name: str
    optional: bool = False
    kind: DirectiveKind = DirectiveKind.REFERENCE


@dataclass(frozen=True)
class Include:
    """
    Include/import of one or more files

    Attributes:
        specs: Quote-stripped, trimmed include specs in document order
        base64: Splice base64 of the raw bytes instead of the file's text
    """
    specs: Tuple[str, ...]
    base64: bool = False
    kind: DirectiveKind = DirectiveKind.INCLUDE


@dataclass(frozen=True)
class Compile:
    """Legacy '@compile' directive; classification succeeds, execution fails"""
    kind: DirectiveKind = DirectiveKind.COMPILE


Directive = Union[Definition, Reference, Include, Compile]


# Leading tokens that introduce an include directive
INCLUDE_KEYWORDS: Tuple[str, ...] = ("@include", "@import")

COMPILE_KEYWORD = "@compile"

# Sigils that mark a comment as special
DIRECTIVE_SIGILS: Set[str] = {"@", "$"}
