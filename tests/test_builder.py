import pytest

from rbacbootstrap.crds.management import Rule, Scope
from rbacbootstrap.rbac.builder import RoleBuilder


def test_add_role_chains_multiple_rules():
    rb = RoleBuilder()
    rb.add_role("Create Clusters", "clusters-create").add_rule().api_groups("management.cattle.io").resources(
        "clusters"
    ).verbs("create").add_rule().api_groups("management.cattle.io").resources("nodetemplates").verbs("*")

    role = rb.catalog.global_roles["clusters-create"]
    assert role.display_name == "Create Clusters"
    assert role.scope == Scope.NONE
    assert role.rules == [
        Rule(api_groups=["management.cattle.io"], resources=["clusters"], verbs=["create"]),
        Rule(api_groups=["management.cattle.io"], resources=["nodetemplates"], verbs=["*"]),
    ]


def test_only_admin_global_role_is_administrative():
    rb = RoleBuilder()
    rb.add_role("Admin", "admin")
    rb.add_role("User", "user")

    assert rb.catalog.global_roles["admin"].administrative is True
    assert rb.catalog.global_roles["user"].administrative is False
    assert rb.catalog.global_roles["user"].builtin is True


def test_non_resource_url_rule_with_empty_groups():
    rb = RoleBuilder()
    rb.add_role("Admin", "admin").add_rule().api_groups().non_resource_urls("*").verbs("*")

    rule = rb.catalog.global_roles["admin"].rules[0]
    assert rule.api_groups == []
    assert rule.resources == []
    assert rule.non_resource_urls == ["*"]
    assert rule.to_dict() == {"nonResourceURLs": ["*"], "verbs": ["*"]}


def test_core_api_group_is_kept_distinct_from_no_groups():
    rb = RoleBuilder()
    rb.add_role_template("Create Namespaces", "create-ns", "project", True, False, False). \
        add_rule().api_groups("").resources("namespaces").verbs("create")

    rule = rb.catalog.role_templates["create-ns"].rules[0]
    assert rule.to_dict() == {"apiGroups": [""], "resources": ["namespaces"], "verbs": ["create"]}


def test_role_template_flags_and_scope():
    rb = RoleBuilder()
    rb.add_role_template("Kubernetes view", "view", "project", False, True, True)
    rb.add_role_template("View Events", "events-view", "", True, False, False)

    view = rb.catalog.role_templates["view"]
    assert (view.scope, view.administrative, view.builtin, view.hidden) == (Scope.PROJECT, False, True, True)
    events = rb.catalog.role_templates["events-view"]
    assert (events.administrative, events.builtin, events.hidden) == (True, False, False)
    assert view.rules == []
    assert rb.catalog.role_templates["events-view"].scope == Scope.NONE


def test_set_role_template_names_stores_reference_only():
    rb = RoleBuilder()
    rb.add_role_template("Kubernetes admin", "admin", "project", True, True, True)
    rb.add_role_template("Project Owner", "project-owner", "project", True, False, False). \
        add_rule().api_groups("").resources("namespaces").verbs("create"). \
        set_role_template_names("admin")

    owner = rb.catalog.role_templates["project-owner"]
    assert owner.role_template_names == ["admin"]
    # Composition is not resolved: the inherited template's rules are not copied.
    assert len(owner.rules) == 1


def test_unfinished_rule_is_kept_without_validation():
    rb = RoleBuilder()
    rb.add_role("Empty", "empty").add_rule()

    assert rb.catalog.global_roles["empty"].rules == [Rule()]
    assert rb.catalog.global_roles["empty"].rules[0].to_dict() == {"verbs": []}


def test_builder_state_is_per_instance():
    first = RoleBuilder()
    second = RoleBuilder()
    first.add_role("One", "one").add_rule().verbs("get")

    with pytest.raises(ValueError):
        second.add_rule()
    assert second.catalog.global_roles == {}


def test_duplicate_internal_name_is_rejected():
    rb = RoleBuilder()
    rb.add_role("Manage Volumes", "volumes-manage")
    with pytest.raises(ValueError, match="volumes-manage"):
        rb.add_role("Manage Volumes again", "volumes-manage")


def test_same_name_allowed_across_global_roles_and_templates():
    rb = RoleBuilder()
    rb.add_role("Admin", "admin")
    rb.add_role_template("Kubernetes admin", "admin", "project", True, True, True)

    assert "admin" in rb.catalog.global_roles
    assert "admin" in rb.catalog.role_templates


def test_catalog_preserves_declaration_order():
    rb = RoleBuilder()
    for name in ("c", "a", "b"):
        rb.add_role(name.upper(), name)

    assert list(rb.catalog.global_roles) == ["c", "a", "b"]
