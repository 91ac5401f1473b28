"""Runs the whole RBAC bootstrap: catalog first, then the default admin."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..config import Configuration
from ..storage import ManagementStore
from .admin import AdminBootstrapper
from .catalog import build_catalog
from .reconciler import ReconcileResult


@dataclass
class BootstrapResult:
    global_roles: ReconcileResult
    role_templates: ReconcileResult
    admin_name: Optional[str] = None


def reconcile_catalog(
    store: ManagementStore,
    logger: Optional[logging.Logger] = None,
    dry_run: bool = False,
) -> BootstrapResult:
    """Converge global roles, then role templates, to the built-in catalog."""
    rb = build_catalog()
    global_roles = rb.reconcile_global_roles(store, logger, dry_run=dry_run)
    role_templates = rb.reconcile_role_templates(store, logger, dry_run=dry_run)
    return BootstrapResult(global_roles=global_roles, role_templates=role_templates)


def bootstrap_rbac(
    store: ManagementStore,
    settings: Configuration,
    logger: Optional[logging.Logger] = None,
) -> BootstrapResult:
    """
    Make the built-in catalog authoritative and ensure the default admin.

    Raises ReconcileError naming the catalog stage that failed, or
    BootstrapError when the default admin cannot be ensured. Roles must exist
    before the admin binding references them, so the stages run strictly in
    order.
    """
    logger = logger or logging.getLogger(__name__)
    result = reconcile_catalog(store, logger)
    result.admin_name = AdminBootstrapper(store, settings, logger).ensure_default_admin()
    logger.info("RBAC bootstrap complete; default admin is '%s'", result.admin_name)
    return result
