import pytest

from rbacbootstrap.crds.errors import BootstrapError, ReconcileError, StorageError
from rbacbootstrap.crds.management import GlobalRole, GlobalRoleBinding, RoleTemplate, User
from rbacbootstrap.rbac.bootstrap import bootstrap_rbac, reconcile_catalog


def test_bootstrap_from_empty_storage(store, settings, logger):
    result = bootstrap_rbac(store, settings, logger)

    assert len(result.global_roles.created) == 12
    assert len(result.role_templates.created) == 35
    assert store.get(User, result.admin_name) is not None
    binding = store.all(GlobalRoleBinding)[0]
    assert binding.user_name == result.admin_name
    assert store.get(GlobalRole, binding.global_role_name) is not None


def test_second_bootstrap_writes_nothing(store, settings, logger):
    first = bootstrap_rbac(store, settings, logger)
    store.calls.clear()

    second = bootstrap_rbac(store, settings, logger)

    assert second.admin_name == first.admin_name
    assert store.writes() == []


def test_role_templates_are_not_attempted_when_global_roles_fail(store, settings):
    store.fail_on[("create", "globalroles", "admin")] = StorageError("quota exceeded")

    with pytest.raises(ReconcileError, match="problem reconciling global roles: quota exceeded"):
        bootstrap_rbac(store, settings)

    assert store.all(RoleTemplate) == []
    assert store.all(User) == []


def test_admin_is_not_attempted_when_role_templates_fail(store, settings):
    store.fail_on[("list", "roletemplates")] = StorageError("forbidden", status=403)

    with pytest.raises(ReconcileError) as exc_info:
        bootstrap_rbac(store, settings)

    assert not isinstance(exc_info.value, BootstrapError)
    assert exc_info.value.stage == "problem reconciling role templates"
    assert store.all(User) == []


def test_reconcile_catalog_dry_run_on_empty_storage(store):
    result = reconcile_catalog(store, dry_run=True)

    assert len(result.global_roles.created) == 12
    assert result.admin_name is None
    assert store.writes() == []


def test_admin_failure_is_a_bootstrap_error_not_a_catalog_stage(store, settings):
    store.fail_on[("list", "users")] = StorageError("connection reset")

    with pytest.raises(BootstrapError) as exc_info:
        bootstrap_rbac(store, settings)

    assert not isinstance(exc_info.value, ReconcileError)
    assert str(exc_info.value) == "can not list admin users: connection reset"
    assert len(store.all(RoleTemplate)) == 35
