"""
Include resolver

Turns an include spec into a concrete file identity:

1. Path base: '/spec' resolves against the document's root_dir, anything
   else against the including document's own directory.
2. Candidates: for `dir/name`, try name, name + each template extension,
   then the partial _name and _name + each extension. First existing wins.
3. Cycle check: the winner must not already be in the ancestor chain.

Example:
    '@include header' from /site/index.kit tries, in order,
    /site/header, /site/header.kit, /site/header.turf, /site/header.html,
    /site/header.htm, /site/_header, /site/_header.kit, ...
"""

import os
from typing import List

from ..config import appsettings
from ..models.document import Document
from .errors import IncludeNotFound, RecursiveInclude
from .filestore import FileStore
from .log import LOG


ROOT_MARKER = "/"


class IncludeResolver:
    """Resolves include specs against a FileStore"""

    def __init__(self, filestore: FileStore) -> None:
        self.filestore = filestore

    def target_locate(self, spec: str, document: Document) -> str:
        """Absolute path the spec names, before candidate expansion"""
        if spec.startswith(ROOT_MARKER):
            return os.path.abspath(os.path.join(document.root_dir, spec[len(ROOT_MARKER):]))
        return os.path.abspath(os.path.join(document.base_dir, spec))

    def candidates_list(self, spec: str, document: Document) -> List[str]:
        """All paths tried for a spec, in priority order"""
        target = self.target_locate(spec, document)
        directory = os.path.dirname(target)
        name = os.path.basename(target)
        return [os.path.join(directory, candidate) for candidate in appsettings.candidates_make(name)]

    def resolve(self, spec: str, document: Document) -> str:
        """
        Resolve an include spec to a file identity.

        Args:
            spec: Quote-stripped include spec, e.g. 'header' or '/partials/nav'
            document: The including document

        Returns:
            Absolute path of the first existing candidate

        Raises:
            IncludeNotFound: if no candidate exists
            RecursiveInclude: if the candidate is an ancestor of the document
        """
        found = None
        for candidate in self.candidates_list(spec, document):
            if self.filestore.exists(candidate):
                found = candidate
                break

        if found is None:
            raise IncludeNotFound(spec)

        if found in document.ancestors:
            raise RecursiveInclude(
                including=document.relative(document.file),
                ancestor=document.relative(found),
            )

        LOG(f"Resolved include '{spec}' -> {found}", level=2)
        return found
