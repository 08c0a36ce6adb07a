"""Tests for policy loaders and the policy store."""

import json
import logging
import threading

import pytest

from transit_rbac.config.constants import Role
from transit_rbac.core.exceptions import MissingRoleGrantError, PolicyLoadError
from transit_rbac.features.permissions import (
    AuthorizationEngine,
    Policy,
    PolicyStore,
    load_default_policy,
    load_policy_file,
    policy_from_document,
)
from transit_rbac.features.permissions.repositories import DEFAULT_ROLE_GRANTS


def _document(**overrides):
    document = {
        "grants": {role.value: list(codes) for role, codes in DEFAULT_ROLE_GRANTS.items()},
        "hierarchy": {"SUPER_ADMIN": [role.value for role in Role]},
    }
    document.update(overrides)
    return document


class TestPolicyFromDocument:
    """Test cases for building policies from documents."""

    def test_valid_document(self):
        policy = policy_from_document(_document(), source="inline")

        assert policy.source == "inline"
        assert policy.grants.grants_for(Role.SUPER_ADMIN).is_wildcard
        assert policy.hierarchy.creatable_by(Role.SUPER_ADMIN) == frozenset(Role)
        assert policy.hierarchy.creatable_by(Role.OPERATOR_ADMIN) == frozenset()

    def test_hierarchy_is_optional(self):
        document = _document()
        del document["hierarchy"]

        policy = policy_from_document(document)

        assert policy.hierarchy.creatable_by(Role.SUPER_ADMIN) == frozenset()

    def test_unknown_role_rejected(self):
        grants = _document()["grants"]
        grants["PILOT"] = ["trips.read"]

        with pytest.raises(PolicyLoadError) as exc_info:
            policy_from_document(_document(grants=grants), source="inline")

        assert exc_info.value.details["source"] == "inline"
        assert exc_info.value.details["errors"]

    def test_malformed_code_rejected(self):
        grants = _document()["grants"]
        grants["DRIVER"] = ["trips:read"]

        with pytest.raises(PolicyLoadError):
            policy_from_document(_document(grants=grants))

    def test_trailing_newline_code_rejected(self):
        grants = _document()["grants"]
        grants["DRIVER"] = ["trips.read\n"]

        with pytest.raises(PolicyLoadError):
            policy_from_document(_document(grants=grants))

    def test_unknown_section_rejected(self):
        grants = _document()["grants"]
        grants["DRIVER"] = ["boats.read"]

        with pytest.raises(PolicyLoadError):
            policy_from_document(_document(grants=grants))

    def test_unexpected_key_rejected(self):
        with pytest.raises(PolicyLoadError):
            policy_from_document(_document(extras={}))

    def test_missing_role_rejected(self):
        grants = _document()["grants"]
        del grants["GOVERNMENT"]

        with pytest.raises(MissingRoleGrantError) as exc_info:
            policy_from_document(_document(grants=grants))

        assert exc_info.value.missing_roles == ["GOVERNMENT"]

    def test_round_trip_preserves_decisions(self, default_policy, catalog):
        """Test an exported policy decides exactly like the original."""
        engine = AuthorizationEngine(catalog)
        rebuilt = policy_from_document(default_policy.to_document())

        for role in Role:
            original = default_policy.grants.grants_for(role)
            copy = rebuilt.grants.grants_for(role)
            assert original == copy
            for permission in catalog.all_permissions():
                assert engine.is_authorized(original, permission) == engine.is_authorized(copy, permission)
            assert rebuilt.hierarchy.creatable_by(role) == default_policy.hierarchy.creatable_by(role)


class TestLoadPolicyFile:
    """Test cases for loading JSON policy files."""

    def test_load_valid_file(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text(json.dumps(_document()), encoding="utf-8")

        policy = load_policy_file(path)

        assert policy.source == str(path)
        assert "trips.read" in policy.grants.grants_for(Role.DRIVER)

    def test_missing_file(self, tmp_path):
        with pytest.raises(PolicyLoadError, match="Cannot read policy file"):
            load_policy_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "policy.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(PolicyLoadError, match="not valid JSON"):
            load_policy_file(str(path))

    def test_repeated_role_key_rejected(self, tmp_path):
        """Test a role listed twice fails instead of the later entry winning."""
        grants = ", ".join(f'"{role.value}": []' for role in Role)
        path = tmp_path / "policy.json"
        path.write_text(f'{{"grants": {{{grants}, "DRIVER": ["finance.manage"]}}}}', encoding="utf-8")

        with pytest.raises(PolicyLoadError, match="Duplicate key in policy document: 'DRIVER'"):
            load_policy_file(path)


class TestPolicyStore:
    """Test cases for PolicyStore."""

    def test_defaults_when_empty(self):
        store = PolicyStore()

        assert store.current.source == "defaults"

    def test_swap_replaces_and_notifies(self, policy_store, default_policy):
        seen = []
        policy_store.add_listener(lambda old, new: seen.append((old, new)))
        replacement = policy_from_document(_document(), source="replacement")

        previous = policy_store.swap(replacement)

        assert previous is default_policy
        assert policy_store.current is replacement
        assert seen == [(default_policy, replacement)]

    def test_listener_failure_does_not_abort_swap(self, policy_store, caplog):
        """Test a failing listener is logged and later listeners still run."""
        seen = []

        def failing(old, new):
            raise RuntimeError("listener broke")

        policy_store.add_listener(failing)
        policy_store.add_listener(lambda old, new: seen.append(new.source))
        replacement = policy_from_document(_document(), source="replacement")

        with caplog.at_level(logging.ERROR):
            policy = policy_store.reload(lambda: replacement)

        assert policy is replacement
        assert policy_store.current is replacement
        assert seen == ["replacement"]
        assert "listener broke" in caplog.text

    def test_duplicate_listener_registered_once(self, policy_store):
        calls = []

        def listener(old, new):
            calls.append(new.source)

        policy_store.add_listener(listener)
        policy_store.add_listener(listener)
        policy_store.swap(load_default_policy())

        assert calls == ["defaults"]
        assert policy_store.listener_count == 1

    def test_remove_listener(self, policy_store):
        calls = []

        def listener(old, new):
            calls.append(new.source)

        policy_store.add_listener(listener)
        policy_store.remove_listener(listener)
        policy_store.remove_listener(listener)
        policy_store.swap(load_default_policy())

        assert calls == []
        assert policy_store.listener_count == 0

    def test_swap_rejects_non_policy(self, policy_store):
        with pytest.raises(TypeError):
            policy_store.swap({"grants": {}})

    def test_failed_reload_keeps_current(self, policy_store, default_policy):
        def broken_loader():
            raise PolicyLoadError("boom")

        with pytest.raises(PolicyLoadError):
            policy_store.reload(broken_loader)

        assert policy_store.current is default_policy

    def test_reload(self, policy_store):
        policy = policy_store.reload(load_default_policy)

        assert isinstance(policy, Policy)
        assert policy_store.current is policy

    def test_readers_see_whole_snapshots(self, policy_store):
        """Test concurrent readers only ever observe a complete policy."""
        engine = AuthorizationEngine()
        restricted = policy_from_document(
            _document(grants={role.value: [] for role in Role}), source="restricted"
        )
        policies = [load_default_policy(), restricted]
        errors = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                snapshot = policy_store.current
                granted = engine.is_authorized(snapshot.grants.grants_for(Role.DRIVER), "trips.read")
                expected = snapshot.source == "defaults"
                if granted != expected:
                    errors.append(snapshot.source)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for i in range(200):
            policy_store.swap(policies[i % 2])
        stop.set()
        for thread in threads:
            thread.join()

        assert errors == []
