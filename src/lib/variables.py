"""
Variable store for one compile pass
"""

from typing import Dict, Mapping, Optional

from ..config import appsettings
from .errors import UndefinedVariable


class VariableStore:
    """
    Name -> value mapping owned by a single document

    Assigning the nil sentinel ('nil' by default) sets the variable to the
    empty string. The name stays defined, so both optional and non-optional
    references to it yield ''.
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def define(self, name: str, value: str) -> None:
        """Store a value, clearing it to '' for the nil sentinel"""
        if value == appsettings.nil_sentinel:
            value = ""
        self.values[name] = value

    def lookup(self, name: str, optional: bool = False) -> str:
        """
        Resolve a reference.

        Args:
            name: Variable name without sigil or '?'
            optional: Undefined optional references resolve to ''

        Raises:
            UndefinedVariable: for a non-optional reference to an unset name
        """
        if name in self.values:
            return self.values[name]
        if optional:
            return ""
        raise UndefinedVariable(name)

    def snapshot(self) -> Dict[str, str]:
        """Value copy handed to a recursively compiled include"""
        return dict(self.values)

    def __contains__(self, name: object) -> bool:
        return name in self.values
