"""
Compile errors for turf

Every failure raised while compiling a document is a TurfError. Errors start
out unlocated; the compiler frame that first observes one attaches the file
identity and the 1-based line/column of the offending block. A location, once
attached, is never overwritten by an outer frame: the outer frame wraps the
error instead and keeps the nested one as its cause.

Taxonomy:
    UnterminatedComment   - '<!--' without a matching '-->'
    UndefinedVariable     - non-optional reference to an unset variable
    UnsupportedDirective  - legacy '@compile' directive
    IncludeNotFound       - no include candidate exists
    RecursiveInclude      - include target is already an ancestor
"""

from typing import Optional, Tuple


class TurfError(Exception):
    """
    Base class for all compile failures

    Attributes:
        message: Human-readable description of the failure
        file: Identity of the file the failure is located in ('' if unknown)
        line: 1-based line of the offending block, None until located
        column: 1-based column of the offending block, None until located
        cause: Wrapped error from a nested frame, if any
    """

    def __init__(
        self,
        message: str,
        file: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line
        self.column = column
        self.cause = cause
        # (file, line, column) of each include directive the error passed through
        self.trace: Tuple[Tuple[str, int, int], ...] = ()

    @property
    def located(self) -> bool:
        """True once line and column have been attached"""
        return self.line is not None and self.column is not None

    def location_attach(self, file: str, line: int, column: int) -> "TurfError":
        """
        Attach a location unless one is already present.

        Returns:
            self, so callers can write ``raise err.location_attach(...)``
        """
        if not self.located:
            self.file = file
            self.line = line
            self.column = column
        return self

    def wrap(self, file: str, line: int, column: int) -> "TurfError":
        """
        Wrap a located error as it propagates out of an including frame.

        The wrapper is an instance of the same class carrying the original
        message and location; the including frame's position is appended to
        ``trace`` and the original error becomes ``cause``.

        Args:
            file: Identity of the including file
            line: Line of the include directive in that file
            column: Column of the include directive in that file

        Returns:
            New error of the same type, suitable for ``raise ... from self``
        """
        wrapped = self.__class__.__new__(self.__class__)
        wrapped.__dict__.update(self.__dict__)
        Exception.__init__(wrapped, self.message)
        wrapped.cause = self
        wrapped.trace = self.trace + ((file, line, column),)
        return wrapped

    def __str__(self) -> str:
        if not self.located:
            return self.message
        return f"{self.file or '<string>'}:{self.line}:{self.column}: {self.message}"


class UnterminatedComment(TurfError):
    """Raised by the scanner when a comment is opened but never closed"""
    pass


class UndefinedVariable(TurfError):
    """Raised when a non-optional variable reference has no value"""

    def __init__(self, name: str, **kwargs) -> None:
        super().__init__(
            f"Undefined variable '{name}'. Use {name}? for an optional variable",
            **kwargs,
        )
        self.name = name


class UnsupportedDirective(TurfError):
    """Raised when executing the legacy @compile directive"""
    pass


class IncludeNotFound(TurfError):
    """Raised when no include candidate exists on the file store"""

    def __init__(self, spec: str, **kwargs) -> None:
        super().__init__(f"Failed to find the included file `{spec}`", **kwargs)
        self.spec = spec


class RecursiveInclude(TurfError):
    """Raised when an include target already appears in the ancestor chain"""

    def __init__(self, including: str, ancestor: str, **kwargs) -> None:
        super().__init__(
            f"Recursive include detected. `{including}` is including parent file `{ancestor}`",
            **kwargs,
        )
        self.including = including
        self.ancestor = ancestor
