from .builder import Catalog, RoleBuilder, RoleDefinition, RuleBuilder
from .reconciler import CatalogReconciler, ReconcileResult
from .admin import AdminBootstrapper
from .bootstrap import BootstrapResult, bootstrap_rbac, reconcile_catalog

__all__ = [
    "AdminBootstrapper",
    "BootstrapResult",
    "Catalog",
    "CatalogReconciler",
    "ReconcileResult",
    "RoleBuilder",
    "RoleDefinition",
    "RuleBuilder",
    "bootstrap_rbac",
    "reconcile_catalog",
]
