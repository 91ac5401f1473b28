"""Chained DSL for declaring global roles and role templates.

A role is opened with ``add_role`` or ``add_role_template``; each ``add_rule``
appends a new empty rule to that role and returns a ``RuleBuilder`` whose
setters fill it in::

    rb = RoleBuilder()
    rb.add_role("Manage Catalogs", "catalogs-manage").add_rule().api_groups(
        "management.cattle.io"
    ).resources("catalogs").verbs("*")

The builder only records what it is told. Rules are not validated, so a rule
with no verbs is stored as-is and grants nothing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional

from ..crds.management import Rule, Scope

if TYPE_CHECKING:
    from ..storage import ManagementStore
    from .reconciler import ReconcileResult


@dataclass
class RoleDefinition:
    display_name: str
    name: str
    scope: Scope = Scope.NONE
    rules: List[Rule] = field(default_factory=list)
    builtin: bool = False
    administrative: bool = False
    hidden: bool = False
    role_template_names: List[str] = field(default_factory=list)


@dataclass
class Catalog:
    """Desired roles keyed by internal name, in declaration order."""

    global_roles: Dict[str, RoleDefinition] = field(default_factory=dict)
    role_templates: Dict[str, RoleDefinition] = field(default_factory=dict)


class RuleBuilder:
    """Fills in the rule most recently opened by ``RoleBuilder.add_rule``."""

    def __init__(self, role_builder: "RoleBuilder", rule: Rule) -> None:
        self._role_builder = role_builder
        self.rule = rule

    def api_groups(self, *groups: str) -> "RuleBuilder":
        self.rule.api_groups = list(groups)
        return self

    def resources(self, *resources: str) -> "RuleBuilder":
        self.rule.resources = list(resources)
        return self

    def non_resource_urls(self, *urls: str) -> "RuleBuilder":
        self.rule.non_resource_urls = list(urls)
        return self

    def verbs(self, *verbs: str) -> "RuleBuilder":
        self.rule.verbs = list(verbs)
        return self

    def add_rule(self) -> "RuleBuilder":
        return self._role_builder.add_rule()

    def set_role_template_names(self, *names: str) -> "RoleBuilder":
        return self._role_builder.set_role_template_names(*names)


class RoleBuilder:
    def __init__(self) -> None:
        self.catalog = Catalog()
        self._current: Optional[RoleDefinition] = None

    def add_role(self, display_name: str, name: str) -> "RoleBuilder":
        """Declare a global role. Only the ``admin`` role is administrative."""
        role = RoleDefinition(
            display_name=display_name,
            name=name,
            scope=Scope.NONE,
            builtin=True,
            administrative=name == "admin",
        )
        self._register(self.catalog.global_roles, role)
        return self

    def add_role_template(
        self,
        display_name: str,
        name: str,
        scope: str,
        administrative: bool,
        builtin: bool,
        hidden: bool,
    ) -> "RoleBuilder":
        role = RoleDefinition(
            display_name=display_name,
            name=name,
            scope=Scope(scope),
            administrative=administrative,
            builtin=builtin,
            hidden=hidden,
        )
        self._register(self.catalog.role_templates, role)
        return self

    def add_rule(self) -> RuleBuilder:
        if self._current is None:
            raise ValueError("add_role or add_role_template must be called before add_rule")
        rule = Rule()
        self._current.rules.append(rule)
        return RuleBuilder(self, rule)

    def set_role_template_names(self, *names: str) -> "RoleBuilder":
        """Record templates whose rules this role inherits.

        Only the names are stored; the consumer of the catalog resolves them.
        """
        if self._current is None:
            raise ValueError("add_role_template must be called before set_role_template_names")
        self._current.role_template_names = list(names)
        return self

    def reconcile_global_roles(
        self,
        store: "ManagementStore",
        logger: Optional[logging.Logger] = None,
        dry_run: bool = False,
    ) -> "ReconcileResult":
        # Imported here; the reconciler module depends on RoleDefinition.
        from .reconciler import GLOBAL_ROLES, CatalogReconciler

        return CatalogReconciler(store, logger).reconcile(
            self.catalog.global_roles, GLOBAL_ROLES, dry_run=dry_run
        )

    def reconcile_role_templates(
        self,
        store: "ManagementStore",
        logger: Optional[logging.Logger] = None,
        dry_run: bool = False,
    ) -> "ReconcileResult":
        from .reconciler import ROLE_TEMPLATES, CatalogReconciler

        return CatalogReconciler(store, logger).reconcile(
            self.catalog.role_templates, ROLE_TEMPLATES, dry_run=dry_run
        )

    def _register(self, roles: Dict[str, RoleDefinition], role: RoleDefinition) -> None:
        if role.name in roles:
            raise ValueError(f"role '{role.name}' is declared more than once")
        roles[role.name] = role
        self._current = role
