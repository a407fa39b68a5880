"""
Document and block models

A Document is the unit of one compile pass (the top-level source or one
recursively compiled include). The scanner partitions its text into Blocks.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple


COMMENT_START = "<!--"
COMMENT_END = "-->"
NEW_LINE = "\n"


@dataclass(frozen=True)
class Block:
    """
    A half-open [start, end) span of a document's text

    Blocks are either literal text or a full comment span including its
    delimiters. Concatenating the blocks of a scan in order reproduces the
    scanned text exactly.

    Attributes:
        start: Offset of the first character of the span
        end: Offset one past the last character of the span
        data: The substring text[start:end]

    Example:
        For text "a <!--@x--> b" the comment block is
        Block(start=2, end=11, data="<!--@x-->")
    """
    start: int
    end: int
    data: str

    @property
    def is_comment(self) -> bool:
        """True if the block is a full comment span"""
        return self.data.startswith(COMMENT_START)


@dataclass(frozen=True)
class Document:
    """
    Source text plus the identity information needed to compile it

    Attributes:
        text: Raw document text
        file: Originating file identity ('' for anonymous source)
        root_dir: Boundary that root-relative ('/...') includes resolve against
        parents: Identities of the documents above this one, top-level first

    The current document's own directory (base_dir) and the full ancestor
    chain (ancestors) are derived from these.
    """
    text: str
    file: str = ""
    root_dir: str = ""
    parents: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def base_dir(self) -> str:
        """Directory relative includes resolve against"""
        return os.path.dirname(self.file)

    @property
    def ancestors(self) -> Tuple[str, ...]:
        """Ancestor chain including this document, as absolute paths"""
        chain = self.parents + (self.file,) if self.file else self.parents
        return tuple(os.path.abspath(path) for path in chain)

    def relative(self, path: str) -> str:
        """Render a file identity relative to root_dir for diagnostics"""
        if not path:
            return path
        return os.path.relpath(path, self.root_dir or os.curdir)
