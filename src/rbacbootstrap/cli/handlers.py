from typing import Iterable, Optional

import click
import yaml
from rich.console import Console
from rich.table import Table

from ..config import Configuration
from ..crds.errors import RBACBootstrapException
from ..rbac.bootstrap import bootstrap_rbac, reconcile_catalog
from ..rbac.builder import RoleDefinition
from ..rbac.catalog import build_catalog
from ..rbac.reconciler import ReconcileResult
from ..storage import KubernetesManagementStore, ManagementStore
from .utils import load_kube_config


def _summarize(console: Console, title: str, result: ReconcileResult, dry_run: bool) -> None:
    table = Table(title=title)
    table.add_column("Action", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Roles")
    created = "Would create" if dry_run else "Created"
    updated = "Would update" if dry_run else "Updated"
    table.add_row(created, str(len(result.created)), ", ".join(result.created))
    table.add_row(updated, str(len(result.updated)), ", ".join(result.updated))
    table.add_row("Unchanged", str(len(result.unchanged)), "")
    console.print(table)


def apply_bootstrap(
    configuration: Configuration,
    dry_run: bool = False,
    context: Optional[str] = None,
    store: Optional[ManagementStore] = None,
) -> bool:
    """Run the bootstrap against the cluster. Returns False on failure."""
    console = Console()
    try:
        if store is None:
            load_kube_config(context)
            store = KubernetesManagementStore()
        if dry_run:
            result = reconcile_catalog(store, dry_run=True)
        else:
            result = bootstrap_rbac(store, configuration)
    except RBACBootstrapException as e:
        console.print(f"[red]❌ RBAC bootstrap failed: {e}[/red]")
        return False

    _summarize(console, "Global roles", result.global_roles, dry_run)
    _summarize(console, "Role templates", result.role_templates, dry_run)
    if dry_run:
        console.print("[yellow]Dry run: no changes were written and the admin was not checked.[/yellow]")
    else:
        console.print(f"[green]✅ Default admin user: [cyan]{result.admin_name}[/cyan][/green]")
    return True


def _catalog_rows(roles: Iterable[RoleDefinition]) -> Iterable[dict]:
    for role in roles:
        row = {
            "name": role.name,
            "displayName": role.display_name,
            "context": role.scope.value,
            "builtin": role.builtin,
            "administrative": role.administrative,
            "hidden": role.hidden,
            "rules": [rule.to_dict() for rule in role.rules],
        }
        if role.role_template_names:
            row["roleTemplateNames"] = list(role.role_template_names)
        yield row


def show_catalog(output: str = "table") -> None:
    """Print the built-in catalog."""
    console = Console()
    catalog = build_catalog().catalog

    if output == "yaml":
        document = {
            "globalRoles": list(_catalog_rows(catalog.global_roles.values())),
            "roleTemplates": list(_catalog_rows(catalog.role_templates.values())),
        }
        click.echo(yaml.safe_dump(document, sort_keys=False), nl=False)
        return

    for title, roles in (
        ("Global roles", catalog.global_roles),
        ("Role templates", catalog.role_templates),
    ):
        table = Table(title=title)
        table.add_column("Name", style="cyan")
        table.add_column("Display Name")
        table.add_column("Context")
        table.add_column("Rules", justify="right")
        table.add_column("Inherits")
        for role in roles.values():
            table.add_row(
                role.name,
                role.display_name,
                role.scope.value or "-",
                str(len(role.rules)),
                ", ".join(role.role_template_names),
            )
        console.print(table)
