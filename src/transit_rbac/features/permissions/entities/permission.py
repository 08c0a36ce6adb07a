"""
Permission value objects - the closed ``<section>.<action>`` vocabulary.

Permissions are pure values: equality and hashing are structural, nothing
about a permission can change after construction.
"""
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, Optional, Union

from ....config.constants import Action, ResourceSection, WILDCARD, PERMISSION_SEPARATOR
from ....core.exceptions import InvalidActionError, InvalidSectionError, MalformedPermissionError


_PERMISSION_PATTERN = re.compile(r"([a-z][a-z_]*)\.([a-z]+)")


def coerce_section(section: Union[ResourceSection, str]) -> ResourceSection:
    """Resolve a section value, raising InvalidSectionError outside the enumeration."""
    if isinstance(section, ResourceSection):
        return section
    try:
        return ResourceSection(section)
    except ValueError:
        raise InvalidSectionError(section) from None


def coerce_action(action: Union[Action, str]) -> Action:
    """Resolve an action value, raising InvalidActionError outside the enumeration."""
    if isinstance(action, Action):
        return action
    try:
        return Action(action)
    except ValueError:
        raise InvalidActionError(action) from None


@dataclass(frozen=True)
class Permission:
    """
    A single grantable permission.

    Either a concrete section/action pair or the universal wildcard, which is
    represented by both fields being None.

    Examples:
        - vehicles.read
        - finance.manage
        - *
    """
    section: Optional[ResourceSection] = None
    action: Optional[Action] = None

    def __post_init__(self):
        if (self.section is None) != (self.action is None):
            raise MalformedPermissionError(
                f"{self.section}{PERMISSION_SEPARATOR}{self.action}",
                "Permission needs both a section and an action, or neither for the wildcard",
            )
        if self.section is not None:
            object.__setattr__(self, "section", coerce_section(self.section))
            object.__setattr__(self, "action", coerce_action(self.action))

    @classmethod
    def wildcard(cls) -> "Permission":
        """The sentinel granting every permission in every section."""
        return WILDCARD_PERMISSION

    @classmethod
    def of(cls, section: Union[ResourceSection, str], action: Union[Action, str]) -> "Permission":
        """Create a concrete permission."""
        return cls(coerce_section(section), coerce_action(action))

    @classmethod
    def parse(cls, code: Union["Permission", str]) -> "Permission":
        """
        Parse a permission code.

        Raises:
            MalformedPermissionError: code is neither '*' nor '<section>.<action>'
            InvalidSectionError: the section is not a ResourceSection value
            InvalidActionError: the action is not an Action value
        """
        if isinstance(code, Permission):
            return code
        if not isinstance(code, str):
            raise MalformedPermissionError(code)
        if code == WILDCARD:
            return WILDCARD_PERMISSION

        match = _PERMISSION_PATTERN.fullmatch(code)
        if not match:
            raise MalformedPermissionError(code)

        section, action = match.groups()
        return cls(coerce_section(section), coerce_action(action))

    @property
    def is_wildcard(self) -> bool:
        return self.section is None

    @property
    def code(self) -> str:
        """Canonical string form."""
        if self.is_wildcard:
            return WILDCARD
        return f"{self.section.value}{PERMISSION_SEPARATOR}{self.action.value}"

    def manage_equivalent(self) -> Optional["Permission"]:
        """The ``<section>.manage`` permission covering this one, if any."""
        if self.is_wildcard or self.action == Action.MANAGE:
            return None
        return Permission(self.section, Action.MANAGE)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Permission('{self.code}')"


WILDCARD_PERMISSION = Permission()


PermissionLike = Union[Permission, str]


class GrantSet:
    """
    Immutable set of permissions held by one role (or a union of roles).

    The wildcard absorbs every other entry: a grant set containing '*' is
    exactly ``{*}``. Order of construction never matters.
    """

    __slots__ = ("_permissions",)

    def __init__(self, permissions: Iterable[PermissionLike] = ()):
        parsed = frozenset(Permission.parse(permission) for permission in permissions)
        if WILDCARD_PERMISSION in parsed:
            parsed = frozenset({WILDCARD_PERMISSION})
        object.__setattr__(self, "_permissions", parsed)

    def __setattr__(self, name, value):
        raise AttributeError("GrantSet is immutable")

    @classmethod
    def empty(cls) -> "GrantSet":
        return cls()

    @classmethod
    def all_access(cls) -> "GrantSet":
        return cls((WILDCARD_PERMISSION,))

    @property
    def permissions(self) -> FrozenSet[Permission]:
        return self._permissions

    @property
    def is_wildcard(self) -> bool:
        return WILDCARD_PERMISSION in self._permissions

    def codes(self) -> FrozenSet[str]:
        """Permission codes in this set."""
        return frozenset(permission.code for permission in self._permissions)

    def union(self, *others: "GrantSet") -> "GrantSet":
        """Combine grant sets (used for principals holding several roles)."""
        merged = set(self._permissions)
        for other in others:
            merged.update(other.permissions)
        return GrantSet(merged)

    def __or__(self, other: "GrantSet") -> "GrantSet":
        if not isinstance(other, GrantSet):
            return NotImplemented
        return self.union(other)

    def __contains__(self, permission: object) -> bool:
        if isinstance(permission, str):
            try:
                permission = Permission.parse(permission)
            except MalformedPermissionError:
                return False
        return permission in self._permissions

    def __iter__(self) -> Iterator[Permission]:
        return iter(sorted(self._permissions, key=lambda permission: permission.code))

    def __len__(self) -> int:
        return len(self._permissions)

    def __bool__(self) -> bool:
        return bool(self._permissions)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GrantSet):
            return self._permissions == other._permissions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._permissions)

    def __repr__(self) -> str:
        return f"GrantSet({sorted(self.codes())})"
