"""
Kopf entry point for the RBAC bootstrap.

The startup handler makes the built-in role catalog authoritative and ensures
the default admin before the operator reports itself ready. The work is
delegated to ``rbacbootstrap.rbac``; this module only wires clients,
configuration and error reporting.
"""
import asyncio
import logging
from typing import Any, Set

import kopf
from kubernetes import client, config

from ..config import get_default_config_path, load_config
from ..crds.errors import RBACBootstrapException
from ..rbac.bootstrap import bootstrap_rbac
from ..storage import KubernetesManagementStore
from .resync import resync_catalog_periodically

# Strong references to background tasks; the event loop only keeps weak ones.
_background_tasks: Set[asyncio.Task] = set()


def _load_kube_config(logger: logging.Logger) -> None:
    try:
        config.load_incluster_config()
        logger.info("Using in-cluster Kubernetes configuration.")
    except config.ConfigException:
        try:
            config.load_kube_config()
            logger.info("Using local kubeconfig.")
        except config.ConfigException as e:
            logger.error(f"Could not configure Kubernetes client: {e}")
            raise kopf.PermanentError("Could not configure Kubernetes client.")


@kopf.on.startup()
async def bootstrap_on_startup(
    settings: kopf.OperatorSettings, logger: logging.Logger, **kwargs: Any
) -> None:
    """
    Bootstrap RBAC when the operator starts.

    A failure is reported as a PermanentError carrying the staged message so
    the process exits instead of serving with a half-built catalog.
    """
    _load_kube_config(logger)

    bootstrap_config = load_config(get_default_config_path())
    store = KubernetesManagementStore(client.CustomObjectsApi(), logger=logger)

    try:
        result = await asyncio.to_thread(bootstrap_rbac, store, bootstrap_config, logger)
    except RBACBootstrapException as e:
        logger.error(f"RBAC bootstrap failed: {e}")
        raise kopf.PermanentError(str(e))

    logger.info(f"RBAC bootstrapped; default admin is '{result.admin_name}'.")

    # Events for every log line would flood the API server during bootstrap.
    settings.posting.enabled = False

    if bootstrap_config.resync_interval > 0:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            resync_catalog_periodically(
                store=store,
                logger=logger,
                interval_seconds=bootstrap_config.resync_interval,
            )
        )
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
