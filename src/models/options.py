"""
Per-call compile configuration
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CompileOptions:
    """
    Immutable configuration for one compile() call

    Attributes:
        variables: Initial variable values (copied, never mutated)
        file: Identity of the source being compiled ('' for anonymous source)
        root_dir: Root for '/'-prefixed includes; defaults to dirname(file)
        parents: Ancestor chain above this document; top-level callers omit it
    """
    variables: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    file: str = ""
    root_dir: str = ""
    parents: Tuple[str, ...] = ()

    @classmethod
    def options_create(
        cls,
        variables: Optional[Mapping[str, str]] = None,
        file: str = "",
        root_dir: Optional[str] = None,
        parents: Iterable[str] = (),
    ) -> "CompileOptions":
        """
        Build options from loose keyword arguments, applying defaults.

        Example:
            >>> CompileOptions.options_create(file="/site/index.kit").root_dir
            '/site'
        """
        return cls(
            variables=MappingProxyType(dict(variables or {})),
            file=file or "",
            root_dir=root_dir if root_dir is not None else os.path.dirname(file or ""),
            parents=tuple(parents),
        )
