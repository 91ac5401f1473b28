import logging
import sys
from pathlib import Path

import click

from . import handlers
from ..config import get_default_config_path, load_config


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to the rbac-bootstrap config file.",
)
@click.option("--context", type=str, default=None, help="The kubeconfig context to use.")
@click.option("-v", "--verbose", is_flag=True, help="Log every role decision.")
@click.pass_context
def main(ctx, config_path, context, verbose) -> None:
    """Reconcile the built-in RBAC catalog and the default admin."""
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj["CONFIG"] = load_config(config_path or get_default_config_path())
    ctx.obj["CONTEXT"] = context


@main.command(help="Reconcile roles and ensure the default admin.")
@click.option("--dry-run", is_flag=True, help="Only show which roles would change.")
@click.pass_context
def apply(ctx, dry_run: bool) -> None:
    """Reconcile roles and ensure the default admin."""
    if not handlers.apply_bootstrap(
        ctx.obj["CONFIG"], dry_run=dry_run, context=ctx.obj["CONTEXT"]
    ):
        sys.exit(1)


@main.command(help="Show the built-in role catalog.")
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "yaml"]),
    default="table",
    help="Output format.",
)
def catalog(output: str) -> None:
    """Show the built-in role catalog."""
    handlers.show_catalog(output=output)


if __name__ == "__main__":
    main()
