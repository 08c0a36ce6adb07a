"""Role hierarchy table - which roles each role may provision."""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Union

from ....config.constants import Role
from .grant_table import coerce_role


class RoleHierarchyTable:
    """
    Immutable mapping from a creator role to the roles it may create.

    Roles without an entry may create nothing. A role may create its own kind
    only when it lists itself.
    """

    def __init__(self, hierarchy: Mapping[Union[Role, str], Iterable[Union[Role, str]]]):
        self._table = MappingProxyType({
            coerce_role(creator): frozenset(coerce_role(target) for target in targets)
            for creator, targets in hierarchy.items()
        })

    def creatable_by(self, creator: Union[Role, str]) -> FrozenSet[Role]:
        """Roles ``creator`` may provision; empty for unknown creators."""
        try:
            creator = Role(creator)
        except ValueError:
            return frozenset()
        return self._table.get(creator, frozenset())

    def as_dict(self) -> dict:
        return {
            creator.value: sorted(target.value for target in targets)
            for creator, targets in self._table.items()
        }

    def __contains__(self, creator: object) -> bool:
        return creator in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"RoleHierarchyTable(creators={len(self._table)})"
