from rbacbootstrap.crds.management import Rule, Scope
from rbacbootstrap.rbac.catalog import WORKLOAD_RESOURCES, build_catalog


def test_catalog_sizes():
    catalog = build_catalog().catalog
    assert len(catalog.global_roles) == 12
    assert len(catalog.role_templates) == 35


def test_admin_global_role_grants_everything():
    admin = build_catalog().catalog.global_roles["admin"]

    assert admin.administrative is True
    assert admin.rules == [
        Rule(api_groups=["*"], resources=["*"], verbs=["*"]),
        Rule(non_resource_urls=["*"], verbs=["*"]),
    ]


def test_kubernetes_default_templates_are_hidden_and_ruleless():
    templates = build_catalog().catalog.role_templates
    for name, scope in (
        ("cluster-admin", Scope.CLUSTER),
        ("admin", Scope.PROJECT),
        ("edit", Scope.PROJECT),
        ("view", Scope.PROJECT),
    ):
        template = templates[name]
        assert template.scope == scope
        assert template.hidden and template.builtin
        assert not template.administrative
        assert template.rules == []


def test_project_templates_reference_kubernetes_defaults():
    templates = build_catalog().catalog.role_templates
    assert templates["project-owner"].role_template_names == ["admin"]
    assert templates["project-member"].role_template_names == ["edit"]
    assert templates["read-only"].role_template_names == ["view"]
    assert templates["cluster-owner"].role_template_names == []


def test_events_view_is_not_scoped():
    assert build_catalog().catalog.role_templates["events-view"].scope == Scope.NONE


def test_workload_resources_have_no_duplicates():
    assert len(WORKLOAD_RESOURCES) == len(set(WORKLOAD_RESOURCES))


def test_every_declared_rule_has_verbs():
    catalog = build_catalog().catalog
    for roles in (catalog.global_roles, catalog.role_templates):
        for role in roles.values():
            for rule in role.rules:
                assert rule.verbs, f"{role.name} has a rule without verbs"


def test_declared_templates_are_builtin_and_not_administrative():
    templates = build_catalog().catalog.role_templates
    kubernetes_defaults = {"cluster-admin", "admin", "edit", "view"}
    for name, template in templates.items():
        assert template.builtin, name
        assert not template.administrative, name
        assert template.hidden == (name in kubernetes_defaults), name


def test_template_counts_by_scope():
    templates = build_catalog().catalog.role_templates.values()
    scopes = [t.scope for t in templates]
    assert scopes.count(Scope.CLUSTER) == 11
    assert scopes.count(Scope.PROJECT) == 23
    assert scopes.count(Scope.NONE) == 1
