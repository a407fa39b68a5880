"""
Block scanner for comment-embedded directives

Partitions raw document text into an ordered, lossless sequence of literal
and comment blocks. Literal text is split at newlines so that a line holding
only a directive can be recognized and collapsed by the compiler.

Example:
    >>> [b.data for b in scan("a <!--@x 1-->\\nb\\n")]
    ['a ', '<!--@x 1-->', '\\n', 'b\\n']
"""

from typing import List, Optional, Tuple

from ..models.document import Block, COMMENT_START, COMMENT_END, NEW_LINE
from .errors import UnterminatedComment
from .log import LOG


def line_column(text: str, position: int) -> Tuple[int, int]:
    """
    Convert a character offset into a 1-based (line, column) pair.

    Args:
        text: Text the offset points into
        position: Character offset

    Returns:
        (line, column), counting newlines before the offset
    """
    prefix = text[:position]
    line = prefix.count(NEW_LINE) + 1
    column = position - (prefix.rfind(NEW_LINE) + 1) + 1
    return line, column


class Scanner:
    """
    Single left-to-right pass over document text

    Handles:
    - Literal runs, one block per line (newline kept with its line)
    - Comments, emitted whole with their '<!--' / '-->' delimiters
    - Unterminated comments, reported at the opening marker
    """

    def __init__(self, text: str, file: str = "") -> None:
        """
        Initialize scanner with document text

        Args:
            text: Raw document text
            file: File identity used in error locations

        Attributes:
            position: Scan cursor, never moves backwards
            blocks: Blocks emitted so far
        """
        self.text = text
        self.file = file
        self.position = 0
        self.blocks: List[Block] = []

    def block_emit(self, end: int) -> None:
        """Emit text[position:end] as a block and advance the cursor"""
        self.blocks.append(Block(self.position, end, self.text[self.position:end]))
        self.position = end

    def newline_find(self, end: Optional[int] = None) -> int:
        """Offset just past the next newline before `end`, or -1"""
        index = self.text.find(NEW_LINE, self.position, end if end is not None else len(self.text))
        return -1 if index == -1 else index + len(NEW_LINE)

    def scan(self) -> List[Block]:
        """
        Scan the whole text into blocks

        Returns:
            Blocks in document order; their data concatenates to the text

        Raises:
            UnterminatedComment: if a comment has no closing marker
        """
        length = len(self.text)

        while self.position < length:
            comment_start = self.text.find(COMMENT_START, self.position)

            # No more comments: keep the rest of the line
            if comment_start == -1:
                line_end = self.newline_find()
                self.block_emit(line_end if line_end != -1 else length)
                continue

            # Lines before the comment are emitted first
            line_end = self.newline_find(comment_start)
            if line_end != -1:
                self.block_emit(line_end)
                continue

            comment_end = self.text.find(COMMENT_END, comment_start + len(COMMENT_START))
            if comment_end == -1:
                line, column = line_column(self.text, comment_start)
                raise UnterminatedComment(
                    "Invalid comment. Comment not closed.",
                    file=self.file,
                    line=line,
                    column=column,
                )

            if comment_start > self.position:
                self.block_emit(comment_start)
            self.block_emit(comment_end + len(COMMENT_END))

        LOG(f"Scanned {len(self.blocks)} blocks from {self.file or '<string>'}", level=3)
        return self.blocks


def scan(text: str, file: str = "") -> List[Block]:
    """Partition text into literal and comment blocks"""
    return Scanner(text, file).scan()
