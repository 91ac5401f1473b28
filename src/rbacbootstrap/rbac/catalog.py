"""The built-in global roles and role templates."""

from __future__ import annotations

from .builder import RoleBuilder

MGMT = "management.cattle.io"
PROJECT = "project.cattle.io"

READ = ("get", "list", "watch")

WORKLOAD_RESOURCES = (
    "pods",
    "pods/attach",
    "pods/exec",
    "pods/portforward",
    "pods/proxy",
    "replicationcontrollers",
    "replicationcontrollers/scale",
    "daemonsets",
    "deployments",
    "deployments/rollback",
    "deployments/scale",
    "replicasets",
    "replicasets/scale",
    "statefulsets",
    "cronjobs",
    "jobs",
    "horizontalpodautoscalers",
)

WORKLOAD_STATUS_RESOURCES = (
    "limitranges",
    "pods/log",
    "pods/status",
    "replicationcontrollers/status",
    "resourcequotas",
    "resourcequotas/status",
    "bindings",
)


def build_catalog() -> RoleBuilder:
    """Return a builder holding the complete declared catalog."""
    rb = RoleBuilder()
    add_global_roles(rb)
    add_role_templates(rb)
    return rb


def add_global_roles(rb: RoleBuilder) -> None:
    rb.add_role("Create Clusters", "clusters-create").add_rule().api_groups(MGMT).resources("clusters").verbs("create"). \
        add_rule().api_groups(MGMT).resources("templates", "templateversions").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("nodedrivers").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("podsecuritypolicytemplates").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("nodetemplates").verbs("*")
    rb.add_role("Manage Node Drivers", "nodedrivers-manage").add_rule().api_groups(MGMT).resources("nodedrivers").verbs("*")
    rb.add_role("Manage Catalogs", "catalogs-manage").add_rule().api_groups(MGMT).resources("catalogs", "templates", "templateversions").verbs("*")
    rb.add_role("Use Catalog Templates", "catalogs-use").add_rule().api_groups(MGMT).resources("templates", "templateversions").verbs(*READ)
    rb.add_role("Manage Users", "users-manage").add_rule().api_groups(MGMT).resources("users", "globalroles", "globalrolebindings").verbs("*")
    rb.add_role("Manage Roles", "roles-manage").add_rule().api_groups(MGMT).resources("roletemplates").verbs("*")
    rb.add_role("Manage Authentication", "authn-manage").add_rule().api_groups(MGMT).resources("authconfigs").verbs(*READ, "update")
    rb.add_role("Manage Settings", "settings-manage").add_rule().api_groups(MGMT).resources("settings").verbs("*")
    rb.add_role("Manage PodSecurityPolicy Templates", "podsecuritypolicytemplates-manage"). \
        add_rule().api_groups(MGMT).resources("podsecuritypolicytemplates").verbs("*")

    rb.add_role("Admin", "admin").add_rule().api_groups("*").resources("*").verbs("*"). \
        add_rule().api_groups().non_resource_urls("*").verbs("*")

    rb.add_role("User", "user").add_rule().api_groups(MGMT).resources("principals", "roletemplates").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("users").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("preferences").verbs("*"). \
        add_rule().api_groups(MGMT).resources("settings").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("clusters").verbs("create"). \
        add_rule().api_groups(MGMT).resources("templates", "templateversions").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("nodedrivers").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("podsecuritypolicytemplates").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("nodetemplates").verbs("*")

    rb.add_role("User Base", "user-base").add_rule().api_groups(MGMT).resources("principals", "roletemplates").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("users").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("preferences").verbs("*"). \
        add_rule().api_groups(MGMT).resources("settings").verbs(*READ)


def add_role_templates(rb: RoleBuilder) -> None:
    # Kubernetes default roles; their rules come from the cluster's own ClusterRoles.
    rb.add_role_template("Kubernetes cluster-admin", "cluster-admin", "cluster", administrative=False, builtin=True, hidden=True)
    rb.add_role_template("Kubernetes admin", "admin", "project", administrative=False, builtin=True, hidden=True)
    rb.add_role_template("Kubernetes edit", "edit", "project", administrative=False, builtin=True, hidden=True)
    rb.add_role_template("Kubernetes view", "view", "project", administrative=False, builtin=True, hidden=True)

    # Cluster roles
    rb.add_role_template("Cluster Owner", "cluster-owner", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("*").verbs("*"). \
        add_rule().api_groups().non_resource_urls("*").verbs("*")

    rb.add_role_template("Cluster Member", "cluster-member", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("clusterroletemplatebindings").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("projects").verbs("create"). \
        add_rule().api_groups(MGMT).resources("nodes", "nodepools").verbs(*READ). \
        add_rule().api_groups("*").resources("nodes").verbs(*READ). \
        add_rule().api_groups("*").resources("persistentvolumes").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("clusterevents").verbs(*READ)

    rb.add_role_template("Create Projects", "projects-create", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projects").verbs("create")

    rb.add_role_template("View All Projects", "projects-view", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projects").verbs(*READ)

    rb.add_role_template("Manage Nodes", "nodes-manage", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("nodes", "nodepools").verbs("*"). \
        add_rule().api_groups("*").resources("nodes").verbs("*")

    rb.add_role_template("View Nodes", "nodes-view", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("nodes", "nodepools").verbs(*READ). \
        add_rule().api_groups("*").resources("nodes").verbs(*READ)

    rb.add_role_template("Manage Volumes", "volumes-manage", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("persistentvolumes").verbs("*")

    rb.add_role_template("Use Volumes", "volumes-use", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("persistentvolumes").verbs(*READ)

    rb.add_role_template("Manage Cluster Members", "clusterroletemplatebindings-manage", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("clusterroletemplatebindings").verbs("*")

    rb.add_role_template("View Cluster Members", "clusterroletemplatebindings-view", "cluster", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("clusterroletemplatebindings").verbs(*READ)

    # Project roles
    rb.add_role_template("Project Owner", "project-owner", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projectroletemplatebindings").verbs("*"). \
        add_rule().api_groups(PROJECT).resources("workloads").verbs("*"). \
        add_rule().api_groups(MGMT).resources("clusterevents").verbs(*READ). \
        add_rule().api_groups("").resources("namespaces").verbs("create"). \
        set_role_template_names("admin")

    rb.add_role_template("Project Member", "project-member", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projectroletemplatebindings").verbs(*READ). \
        add_rule().api_groups(PROJECT).resources("workloads").verbs("*"). \
        add_rule().api_groups("").resources("namespaces").verbs("create"). \
        add_rule().api_groups(MGMT).resources("clusterevents").verbs(*READ). \
        set_role_template_names("edit")

    rb.add_role_template("Read-only", "read-only", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projectroletemplatebindings").verbs(*READ). \
        add_rule().api_groups(PROJECT).resources("workloads").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("clusterevents").verbs(*READ). \
        set_role_template_names("view")

    rb.add_role_template("Create Namespaces", "create-ns", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("").resources("namespaces").verbs("create")

    rb.add_role_template("Manage Workloads", "workloads-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources(*WORKLOAD_RESOURCES).verbs("*"). \
        add_rule().api_groups("*").resources(*WORKLOAD_STATUS_RESOURCES).verbs(*READ)

    rb.add_role_template("View Workloads", "workloads-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources(*WORKLOAD_RESOURCES).verbs(*READ). \
        add_rule().api_groups("*").resources(*WORKLOAD_STATUS_RESOURCES).verbs(*READ)

    rb.add_role_template("Manage Ingress", "ingress-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("ingresses").verbs("*")

    rb.add_role_template("View Ingress", "ingress-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("ingresses").verbs(*READ)

    rb.add_role_template("Manage Services", "services-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("services", "endpoints").verbs("*")

    rb.add_role_template("View Services", "services-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("services", "endpoints").verbs(*READ)

    rb.add_role_template("Manage Secrets", "secrets-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("secrets").verbs("*")

    rb.add_role_template("View Secrets", "secrets-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("secrets").verbs(*READ)

    rb.add_role_template("Manage Config Maps", "configmaps-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("configmaps").verbs("*")

    rb.add_role_template("View Config Maps", "configmaps-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("configmaps").verbs(*READ)

    rb.add_role_template("Manage Volumes", "persistentvolumeclaims-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("persistentvolumeclaims").verbs("*")

    rb.add_role_template("View Volumes", "persistentvolumeclaims-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("persistentvolumeclaims").verbs(*READ)

    rb.add_role_template("Manage Service Accounts", "serviceaccounts-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("serviceaccounts").verbs("*")

    rb.add_role_template("View Service Accounts", "serviceaccounts-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("serviceaccounts").verbs(*READ)

    rb.add_role_template("Manage Project Members", "projectroletemplatebindings-manage", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projectroletemplatebindings").verbs("*")

    rb.add_role_template("View Project Members", "projectroletemplatebindings-view", "project", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups(MGMT).resources("projectroletemplatebindings").verbs(*READ)

    # Not specific to project or cluster
    # TODO: drop the clusterevents rule once clusterevents is replaced by events
    rb.add_role_template("View Events", "events-view", "", administrative=False, builtin=True, hidden=False). \
        add_rule().api_groups("*").resources("events").verbs(*READ). \
        add_rule().api_groups(MGMT).resources("clusterevents").verbs(*READ)
