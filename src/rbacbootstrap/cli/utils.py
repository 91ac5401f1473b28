from typing import Optional

from kubernetes import config

from ..crds.errors import KubeConfigError


def load_kube_config(context: Optional[str] = None) -> None:
    """Load kubeconfig for the given context, falling back to in-cluster config."""
    try:
        config.load_kube_config(context=context)
    except config.ConfigException as e:
        if context:
            raise KubeConfigError(f"Could not load kubeconfig context '{context}': {e}") from e
        try:
            config.load_incluster_config()
        except config.ConfigException:
            raise KubeConfigError(f"Could not configure Kubernetes client: {e}") from e
