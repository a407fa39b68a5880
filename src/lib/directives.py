"""
Directive classifier for turf

Decides whether a comment block is a directive and parses it into one of the
closed set of directive variants (see models.directives).

Grammar (comment content, trimmed):
    @include a, b  /  @import a  /  @import-base64 a   -> Include
    @compile ...                                      -> Compile
    @name value  /  $name = value  /  @name: value    -> Definition
    @name  /  $name  /  @name?                        -> Reference
"""

import re
from typing import Tuple

from ..models.document import Block, COMMENT_START, COMMENT_END
from ..models.directives import (
    Compile,
    Definition,
    Directive,
    Include,
    Reference,
    COMPILE_KEYWORD,
    DIRECTIVE_SIGILS,
    INCLUDE_KEYWORDS,
)


# Variable name token: everything up to the first whitespace, '=' or ':'
VARIABLE_TOKEN = re.compile(r"[^\s=:]*")

ASSIGNMENT_OPERATORS: Tuple[str, ...] = ("=", ":")

QUOTES = re.compile(r"['\"]")


def comment_content(comment: str) -> str:
    """Strip comment delimiters and surrounding whitespace"""
    return comment[len(COMMENT_START):len(comment) - len(COMMENT_END)].strip()


def special_is(block: Block) -> bool:
    """
    Check if a block is a directive comment.

    A block is special iff it is a full comment span whose trimmed content
    starts with '@' or '$'.
    """
    if not block.is_comment:
        return False
    content = comment_content(block.data)
    return content[:1] in DIRECTIVE_SIGILS


def variable_parse(content: str) -> Tuple[str, str]:
    """
    Split variable directive content into name and value.

    Variables can be declared in multiple ways:
        $variable = value
        $variable : value
        $variable value
    and '@' can be used instead of '$'.

    Returns:
        (name without sigil, value); value is '' for a reference
    """
    token = VARIABLE_TOKEN.match(content).group(0)
    value = content[len(token):].strip()
    if value.startswith(ASSIGNMENT_OPERATORS):
        value = value[1:].strip()
    return token[1:], value


def include_specs(content: str) -> Tuple[str, ...]:
    """
    Extract the include specs following the leading keyword.

    Example:
        >>> include_specs("@import 'header', footer.kit")
        ('header', 'footer.kit')
    """
    parts = content.split(None, 1)
    if len(parts) < 2:
        return ()
    return tuple(QUOTES.sub("", spec).strip() for spec in parts[1].split(","))


def directive_classify(content: str) -> Directive:
    """
    Classify trimmed comment content into a directive.

    Args:
        content: Trimmed content of a special comment

    Returns:
        Include, Compile, Definition or Reference
    """
    if content.startswith(INCLUDE_KEYWORDS):
        statement = content.split(None, 1)[0]
        return Include(specs=include_specs(content), base64="base64" in statement)

    if content.startswith(COMPILE_KEYWORD):
        return Compile()

    name, value = variable_parse(content)
    if value:
        return Definition(name=name, value=value)

    if name.endswith("?"):
        return Reference(name=name[:-1], optional=True)
    return Reference(name=name)


def definition_is(block: Block) -> bool:
    """True if the block is a special comment defining a variable"""
    if not special_is(block):
        return False
    return isinstance(directive_classify(comment_content(block.data)), Definition)
