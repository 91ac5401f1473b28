"""Access to the stored management.cattle.io objects.

``ManagementStore`` is the seam the reconciler and the admin bootstrap talk
to. ``KubernetesManagementStore`` backs it with the Kubernetes custom objects
API; tests substitute an in-memory implementation.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Type, TypeVar, Union

from kubernetes import client
from kubernetes.client import ApiException

from .crds.errors import AlreadyExistsError, StorageError
from .crds.management import GlobalRole, GlobalRoleBinding, RoleTemplate, User

RoleObject = Union[GlobalRole, RoleTemplate]
RoleKind = Union[Type[GlobalRole], Type[RoleTemplate]]

T = TypeVar("T", GlobalRole, RoleTemplate, User, GlobalRoleBinding)


def format_label_selector(labels: Mapping[str, str]) -> str:
    """Render a label mapping as an equality-based selector string."""
    return ",".join(f"{key}={value}" for key, value in sorted(labels.items()))


class ManagementStore(Protocol):
    def list_roles(self, kind: RoleKind) -> List[RoleObject]: ...

    def create_role(self, kind: RoleKind, role: RoleObject) -> RoleObject: ...

    def update_role(self, kind: RoleKind, role: RoleObject) -> RoleObject: ...

    def list_users(self, label_selector: Mapping[str, str]) -> List[User]: ...

    def create_user(self, user: User) -> User: ...

    def list_global_role_bindings(
        self, label_selector: Mapping[str, str]
    ) -> List[GlobalRoleBinding]: ...

    def create_global_role_binding(self, binding: GlobalRoleBinding) -> GlobalRoleBinding: ...


class KubernetesManagementStore:
    """ManagementStore over cluster-scoped custom objects."""

    def __init__(
        self,
        custom_objects_api: Optional[client.CustomObjectsApi] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.custom_objects_api = (
            custom_objects_api if custom_objects_api is not None else client.CustomObjectsApi()
        )
        self.logger = logger or logging.getLogger(__name__)

    def list_roles(self, kind: RoleKind) -> List[RoleObject]:
        return self._list(kind)

    def create_role(self, kind: RoleKind, role: RoleObject) -> RoleObject:
        return self._create(kind, role)

    def update_role(self, kind: RoleKind, role: RoleObject) -> RoleObject:
        name = role.metadata.name
        if not name:
            raise ValueError(f"{kind.kind} update requires metadata.name")
        try:
            data = self.custom_objects_api.replace_cluster_custom_object(
                group=kind.group,
                version=kind.version,
                plural=kind.plural,
                name=name,
                body=role.to_dict(),
            )
        except ApiException as exc:
            raise StorageError(
                f"failed to update {kind.kind} '{name}': {exc.reason}", status=exc.status
            ) from exc
        return kind.from_dict(data)

    def list_users(self, label_selector: Mapping[str, str]) -> List[User]:
        return self._list(User, label_selector)

    def create_user(self, user: User) -> User:
        return self._create(User, user)

    def list_global_role_bindings(
        self, label_selector: Mapping[str, str]
    ) -> List[GlobalRoleBinding]:
        return self._list(GlobalRoleBinding, label_selector)

    def create_global_role_binding(self, binding: GlobalRoleBinding) -> GlobalRoleBinding:
        return self._create(GlobalRoleBinding, binding)

    def _list(self, kind: Type[T], label_selector: Optional[Mapping[str, str]] = None) -> List[T]:
        kwargs: Dict[str, Any] = {}
        if label_selector:
            kwargs["label_selector"] = format_label_selector(label_selector)
        try:
            data = self.custom_objects_api.list_cluster_custom_object(
                group=kind.group,
                version=kind.version,
                plural=kind.plural,
                **kwargs,
            )
        except ApiException as exc:
            raise StorageError(
                f"failed to list {kind.plural}: {exc.reason}", status=exc.status
            ) from exc
        items = []
        for item in data.get("items", []):
            try:
                items.append(kind.from_dict(item))
            except (AttributeError, TypeError, ValueError) as exc:
                name = (item.get("metadata") or {}).get("name") if isinstance(item, dict) else None
                raise StorageError(f"failed to decode {kind.kind} '{name}': {exc}") from exc
        return items

    def _create(self, kind: Type[T], obj: T) -> T:
        identity = obj.metadata.name or f"{obj.metadata.generate_name}*"
        try:
            data = self.custom_objects_api.create_cluster_custom_object(
                group=kind.group,
                version=kind.version,
                plural=kind.plural,
                body=obj.to_dict(),
            )
        except ApiException as exc:
            if exc.status == 409:
                raise AlreadyExistsError(f"{kind.kind} '{identity}' already exists") from exc
            raise StorageError(
                f"failed to create {kind.kind} '{identity}': {exc.reason}", status=exc.status
            ) from exc
        self.logger.debug("Created %s '%s'", kind.kind, data.get("metadata", {}).get("name"))
        return kind.from_dict(data)
