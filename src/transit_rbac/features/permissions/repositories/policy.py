"""
Policy snapshots and loaders.

A Policy bundles the grant table and hierarchy table that are in force at one
moment. Policies are built from the built-in defaults or from a JSON document
validated with pydantic, and are never modified after construction.
"""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ....config.constants import Role
from ....core.exceptions import MalformedPermissionError, PolicyLoadError
from ..entities import Permission
from .defaults import DEFAULT_ROLE_GRANTS, DEFAULT_ROLE_HIERARCHY
from .grant_table import RoleGrantTable
from .hierarchy_table import RoleHierarchyTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Policy:
    """Immutable snapshot of the access control tables."""
    grants: RoleGrantTable
    hierarchy: RoleHierarchyTable
    source: str = "defaults"
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_document(self) -> Dict[str, Any]:
        """Render as a document accepted by ``policy_from_document``."""
        return {"grants": self.grants.as_dict(), "hierarchy": self.hierarchy.as_dict()}


class PolicyDocument(BaseModel):
    """Shape of a policy document: role -> permission codes, role -> roles."""

    model_config = ConfigDict(extra="forbid")

    grants: Dict[Role, List[str]]
    hierarchy: Dict[Role, List[Role]] = {}

    @field_validator("grants")
    @classmethod
    def _validate_codes(cls, grants: Dict[Role, List[str]]) -> Dict[Role, List[str]]:
        for role, codes in grants.items():
            for code in codes:
                try:
                    Permission.parse(code)
                except MalformedPermissionError as e:
                    raise ValueError(f"{role.value}: {e.message}") from None
        return grants


def build_policy(
    grants: Mapping[Union[Role, str], List[str]],
    hierarchy: Mapping[Union[Role, str], List[Union[Role, str]]],
    source: str,
) -> Policy:
    """Build a policy from plain mappings. Raises MissingRoleGrantError on gaps."""
    return Policy(
        grants=RoleGrantTable(grants),
        hierarchy=RoleHierarchyTable(hierarchy),
        source=source,
    )


def load_default_policy() -> Policy:
    """Policy built from the built-in tables."""
    return build_policy(DEFAULT_ROLE_GRANTS, DEFAULT_ROLE_HIERARCHY, source="defaults")


def policy_from_document(document: Mapping[str, Any], source: str = "document") -> Policy:
    """
    Build a policy from a parsed policy document.

    Raises:
        PolicyLoadError: the document does not match PolicyDocument
        MissingRoleGrantError: a role has no grant entry
    """
    try:
        parsed = PolicyDocument.model_validate(document)
    except ValidationError as e:
        raise PolicyLoadError(
            f"Invalid policy document from {source}",
            details={"errors": [error["msg"] for error in e.errors()], "source": source},
        ) from e

    return build_policy(parsed.grants, parsed.hierarchy, source=source)


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    """json object hook; a repeated role key would otherwise silently replace the first."""
    document = {}
    for key, value in pairs:
        if key in document:
            raise ValueError(f"Duplicate key in policy document: {key!r}")
        document[key] = value
    return document


def load_policy_file(path: Union[str, Path]) -> Policy:
    """Load a JSON policy document from disk."""
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"), object_pairs_hook=_reject_duplicate_keys)
    except OSError as e:
        raise PolicyLoadError(f"Cannot read policy file {path}: {e}", details={"source": str(path)}) from e
    except json.JSONDecodeError as e:
        raise PolicyLoadError(f"Policy file {path} is not valid JSON: {e}", details={"source": str(path)}) from e
    except ValueError as e:
        raise PolicyLoadError(f"Policy file {path} is ambiguous: {e}", details={"source": str(path)}) from e

    policy = policy_from_document(document, source=str(path))
    logger.info(f"Loaded access control policy from {path}")
    return policy
