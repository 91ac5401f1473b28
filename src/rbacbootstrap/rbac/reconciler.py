"""Converges stored global roles and role templates to the declared catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional

from ..crds.base import ObjectMeta
from ..crds.errors import ReconcileError, StorageError
from ..crds.management import GlobalRole, RoleTemplate, rules_equal
from ..storage import ManagementStore, RoleKind, RoleObject
from .builder import RoleDefinition


@dataclass(frozen=True)
class CatalogKind:
    """How one mapping of the catalog is stored and compared."""

    kind: RoleKind
    stage: str
    build: Callable[[RoleDefinition, ObjectMeta], RoleObject]
    matches: Callable[[RoleDefinition, RoleObject], bool]


def _build_global_role(definition: RoleDefinition, metadata: ObjectMeta) -> GlobalRole:
    return GlobalRole(
        metadata=metadata,
        display_name=definition.display_name,
        rules=list(definition.rules),
        builtin=definition.builtin,
        administrative=definition.administrative,
    )


def _global_role_matches(definition: RoleDefinition, stored: GlobalRole) -> bool:
    return rules_equal(definition.rules, stored.rules)


def _build_role_template(definition: RoleDefinition, metadata: ObjectMeta) -> RoleTemplate:
    return RoleTemplate(
        metadata=metadata,
        display_name=definition.display_name,
        rules=list(definition.rules),
        context=definition.scope,
        builtin=definition.builtin,
        administrative=definition.administrative,
        hidden=definition.hidden,
        role_template_names=list(definition.role_template_names),
    )


def _role_template_matches(definition: RoleDefinition, stored: RoleTemplate) -> bool:
    return (
        rules_equal(definition.rules, stored.rules)
        and definition.scope == stored.context
        and definition.builtin == stored.builtin
        and definition.administrative == stored.administrative
        and definition.hidden == stored.hidden
        and list(definition.role_template_names) == list(stored.role_template_names)
    )


GLOBAL_ROLES = CatalogKind(
    kind=GlobalRole,
    stage="problem reconciling global roles",
    build=_build_global_role,
    matches=_global_role_matches,
)

ROLE_TEMPLATES = CatalogKind(
    kind=RoleTemplate,
    stage="problem reconciling role templates",
    build=_build_role_template,
    matches=_role_template_matches,
)


@dataclass
class ReconcileResult:
    created: List[str] = field(default_factory=list)
    updated: List[str] = field(default_factory=list)
    unchanged: List[str] = field(default_factory=list)

    @property
    def writes(self) -> int:
        return len(self.created) + len(self.updated)


class CatalogReconciler:
    """
    Makes storage contain every desired role with matching content.

    Reconciliation is additive: stored roles that are not in the catalog are
    never updated or deleted, so operator-defined custom roles survive. It is
    not transactional; the first failing write aborts the pass and earlier
    writes stay in place. Running it again picks up where it stopped.
    """

    def __init__(self, store: ManagementStore, logger: Optional[logging.Logger] = None) -> None:
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    def reconcile(
        self,
        desired: Mapping[str, RoleDefinition],
        catalog_kind: CatalogKind,
        dry_run: bool = False,
    ) -> ReconcileResult:
        kind_name = catalog_kind.kind.kind
        try:
            stored = self.store.list_roles(catalog_kind.kind)
        except StorageError as exc:
            raise ReconcileError(catalog_kind.stage) from exc

        existing: Dict[str, RoleObject] = {}
        for obj in stored:
            if obj.metadata.name:
                existing[obj.metadata.name] = obj

        result = ReconcileResult()
        for name, definition in desired.items():
            current = existing.get(name)
            try:
                if current is None:
                    if not dry_run:
                        self.store.create_role(
                            catalog_kind.kind,
                            catalog_kind.build(definition, ObjectMeta(name=name)),
                        )
                    self.logger.info(
                        "%s %s '%s'", "Would create" if dry_run else "Created", kind_name, name
                    )
                    result.created.append(name)
                elif not catalog_kind.matches(definition, current):
                    if not dry_run:
                        replacement = catalog_kind.build(definition, current.metadata)
                        replacement.retain_unmanaged(current)
                        self.store.update_role(catalog_kind.kind, replacement)
                    self.logger.info(
                        "%s %s '%s'", "Would update" if dry_run else "Updated", kind_name, name
                    )
                    result.updated.append(name)
                else:
                    self.logger.debug("%s '%s' is up to date", kind_name, name)
                    result.unchanged.append(name)
            except StorageError as exc:
                raise ReconcileError(catalog_kind.stage) from exc

        self.logger.info(
            "Reconciled %d %s(s): %d created, %d updated, %d unchanged%s",
            len(desired),
            kind_name,
            len(result.created),
            len(result.updated),
            len(result.unchanged),
            " (dry run)" if dry_run else "",
        )
        return result
