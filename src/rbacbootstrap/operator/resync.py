"""
Periodic re-reconciliation of the built-in role catalog.
"""
import asyncio
import logging

from ..crds.errors import RBACBootstrapException
from ..rbac.bootstrap import reconcile_catalog
from ..storage import ManagementStore


async def resync_catalog_periodically(
    store: ManagementStore,
    logger: logging.Logger,
    interval_seconds: int,
) -> None:
    """
    Re-run catalog reconciliation forever on a fixed interval.

    Restores built-in roles that were edited or deleted after startup. The
    admin bootstrap is not repeated; it only ever runs at startup.

    Args:
        store: Storage the catalog is reconciled against
        logger: Logger instance
        interval_seconds: Seconds to sleep between passes
    """
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            result = await asyncio.to_thread(reconcile_catalog, store, logger)
            writes = result.global_roles.writes + result.role_templates.writes
            if writes:
                logger.info(f"Catalog resync restored {writes} role(s).")
        except RBACBootstrapException as e:
            logger.error(f"Catalog resync failed: {e}")
        except Exception as e:
            logger.error(
                f"An unexpected error occurred during catalog resync: {e}",
                exc_info=True,
            )
