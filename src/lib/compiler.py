"""
Compiler for turf documents

Runs one compile pass over a Document:

1. Scan the text into literal and comment blocks
2. Walk the blocks in order, executing directive comments
3. Drop whitespace-only blocks next to variable definitions, so a line that
   only defines a variable leaves no blank line behind
4. Concatenate the emitted chunks

Included templates are compiled by a fresh Compiler over the included text,
handed a snapshot of the variables and the extended ancestor chain.
"""

import base64
from typing import Any, Iterable, List, Mapping, Optional

from ..config import appsettings
from ..models.directives import Compile, Definition, Directive, Include, Reference
from ..models.document import Block, Document
from ..models.options import CompileOptions
from .directives import comment_content, definition_is, directive_classify, special_is
from .errors import IncludeNotFound, TurfError, UnsupportedDirective
from .filestore import FileStore, LocalFileStore
from .log import LOG
from .resolver import IncludeResolver
from .scanner import line_column, scan
from .variables import VariableStore


COMPILE_UNSUPPORTED = (
    "@compile is not supported. You can however compile the file first "
    "then use @include/@import to import the output file."
)


class Compiler:
    """
    Compiles one document to text

    Responsibilities:
    - Execute variable definitions and references
    - Resolve and splice includes, recursing into templates
    - Attach file/line/column to every failure
    """

    def __init__(
        self,
        document: Document,
        variables: Optional[Mapping[str, str]] = None,
        filestore: Optional[FileStore] = None,
    ) -> None:
        """
        Initialize compiler

        Args:
            document: Document to compile
            variables: Initial variable values (copied)
            filestore: Storage includes are looked up and read from
                       (default: local filesystem)
        """
        self.document = document
        self.variables = VariableStore(variables)
        self.filestore: FileStore = filestore if filestore is not None else LocalFileStore()
        self.resolver = IncludeResolver(self.filestore)

    def compile(self) -> str:
        """
        Compile the document

        Returns:
            Compiled text

        Raises:
            TurfError: located at the offending block
        """
        blocks = scan(self.document.text, self.document.file)
        chunks: List[str] = []

        for index, block in enumerate(blocks):
            if self.whitespace_isCollapsible(blocks, index):
                continue

            if not special_is(block):
                chunks.append(block.data)
                continue

            try:
                chunks.append(self.block_execute(block))
            except TurfError as err:
                if err.located:
                    raise self.error_wrap(err, block) from err
                raise self.error_locate(err, block)
            except (OSError, UnicodeDecodeError) as err:
                raise self.error_locate(TurfError(str(err), cause=err), block) from err

        LOG(f"Compiled {self.document.file or '<string>'}: {len(blocks)} blocks", level=2)
        return "".join(chunks)

    def whitespace_isCollapsible(self, blocks: List[Block], index: int) -> bool:
        """True if a whitespace-only block touches a variable definition"""
        if blocks[index].data.strip():
            return False
        if index > 0 and definition_is(blocks[index - 1]):
            return True
        return index + 1 < len(blocks) and definition_is(blocks[index + 1])

    def error_locate(self, err: TurfError, block: Block) -> TurfError:
        """Attach this document's location of the block to an unlocated error"""
        line, column = line_column(self.document.text, block.start)
        return err.location_attach(self.document.file, line, column)

    def error_wrap(self, err: TurfError, block: Block) -> TurfError:
        """
        Wrap an error located by a nested include.

        The nested location is kept; this include site is appended to the
        wrapper's trace and the nested error becomes its cause.
        """
        line, column = line_column(self.document.text, block.start)
        return err.wrap(self.document.file, line, column)

    def block_execute(self, block: Block) -> str:
        """Execute a special block and return the text it emits"""
        directive: Directive = directive_classify(comment_content(block.data))
        LOG(f"{directive.kind.value} directive at offset {block.start}", level=3)

        if isinstance(directive, Include):
            return self.include_process(directive)
        if isinstance(directive, Compile):
            raise UnsupportedDirective(COMPILE_UNSUPPORTED)
        if isinstance(directive, Definition):
            self.variables.define(directive.name, directive.value)
            return ""
        if isinstance(directive, Reference):
            return self.variables.lookup(directive.name, directive.optional)
        raise TypeError(f"Unknown directive {directive!r}")

    def include_process(self, directive: Include) -> str:
        """
        Resolve every spec of an include directive, then load each in order.

        Returns:
            Loaded contents joined with a single newline
        """
        if not directive.specs or "" in directive.specs:
            raise IncludeNotFound("")

        paths = [self.resolver.resolve(spec, self.document) for spec in directive.specs]
        return "\n".join(self.file_include(path, directive.base64) for path in paths)

    def file_include(self, path: str, as_base64: bool = False) -> str:
        """
        Load one resolved include.

        Args:
            path: Resolved file identity
            as_base64: Return base64 of the raw bytes without compiling

        Returns:
            base64 text, raw text for non-template files, or the compiled
            output of a template
        """
        data = self.filestore.read_bytes(path)

        if as_base64:
            return base64.b64encode(data).decode("ascii")

        text = data.decode(appsettings.encoding)
        if not appsettings.template_is(path):
            return text

        child = Document(
            text=text,
            file=path,
            root_dir=self.document.root_dir,
            parents=self.document.ancestors,
        )
        LOG(f"Compiling include {self.document.relative(path)}", level=2)
        return Compiler(child, self.variables.snapshot(), self.filestore).compile()


def compile(
    source: str,
    variables: Optional[Mapping[str, str]] = None,
    file: str = "",
    root_dir: Optional[str] = None,
    parents: Iterable[str] = (),
    filestore: Optional[FileStore] = None,
) -> str:
    """
    Compile source text.

    Args:
        source: Document text
        variables: Initial variable values
        file: Identity of the source; drives base_dir, the default root_dir
              and error locations
        root_dir: Root for '/'-prefixed includes (default: dirname(file))
        parents: Ancestor chain above this document; top-level callers omit it
        filestore: Storage for includes (default: local filesystem)

    Returns:
        Compiled text

    Example:
        >>> compile("Hello <!--@name World--><!--@name-->!")
        'Hello World!'
    """
    options = CompileOptions.options_create(
        variables=variables, file=file, root_dir=root_dir, parents=parents
    )
    document = Document(
        text=source,
        file=options.file,
        root_dir=options.root_dir,
        parents=options.parents,
    )
    return Compiler(document, options.variables, filestore).compile()


def compile_file(path: str, filestore: Optional[FileStore] = None, **options: Any) -> str:
    """Read and compile a file; extra options are passed to compile()"""
    store: FileStore = filestore if filestore is not None else LocalFileStore()
    try:
        source = store.read_bytes(path).decode(appsettings.encoding)
    except UnicodeDecodeError as err:
        raise TurfError(f"Cannot decode {path}: {err}", file=path, cause=err) from err
    return compile(source, file=path, filestore=store, **options)
