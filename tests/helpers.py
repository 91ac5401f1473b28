"""
In-memory ManagementStore used by the unit tests.
"""
import copy
import itertools
from typing import Any, Dict, List, Mapping, Optional, Tuple

from rbacbootstrap.crds.base import ObjectMeta
from rbacbootstrap.crds.errors import AlreadyExistsError, StorageError
from rbacbootstrap.crds.management import GlobalRoleBinding, User


class InMemoryManagementStore:
    """
    Stores objects as wire dicts keyed by plural and name, like the API server.

    ``calls`` records every write as ``(operation, plural, name)``. Failures are
    injected by setting ``fail_on[(operation, plural)]`` to an exception, or
    ``fail_on[(operation, plural, name)]`` for a single object.
    """

    def __init__(self) -> None:
        self.objects: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.calls: List[Tuple[str, str, Optional[str]]] = []
        self.fail_on: Dict[Tuple[str, ...], Exception] = {}
        self._suffix = itertools.count(1)
        self._resource_version = itertools.count(1)

    # --- seeding / inspection -------------------------------------------

    def seed(self, obj) -> Any:
        body = obj.to_dict()
        if not body["metadata"].get("name"):
            body["metadata"]["name"] = f"{obj.metadata.generate_name}{next(self._suffix)}"
        body["metadata"]["resourceVersion"] = str(next(self._resource_version))
        self.objects.setdefault(obj.plural, {})[body["metadata"]["name"]] = body
        return type(obj).from_dict(copy.deepcopy(body))

    def get(self, kind, name: str):
        body = self.objects.get(kind.plural, {}).get(name)
        return kind.from_dict(copy.deepcopy(body)) if body else None

    def all(self, kind) -> list:
        return [kind.from_dict(copy.deepcopy(b)) for b in self.objects.get(kind.plural, {}).values()]

    def writes(self) -> List[Tuple[str, str, Optional[str]]]:
        return [c for c in self.calls if c[0] in ("create", "update")]

    # --- ManagementStore --------------------------------------------------

    def list_roles(self, kind):
        self._maybe_fail("list", kind.plural)
        return self.all(kind)

    def create_role(self, kind, role):
        return self._create(kind, role)

    def update_role(self, kind, role):
        name = role.metadata.name
        self.calls.append(("update", kind.plural, name))
        self._maybe_fail("update", kind.plural, name)
        if name not in self.objects.get(kind.plural, {}):
            raise StorageError(f"{kind.kind} '{name}' not found", status=404)
        body = role.to_dict()
        body["metadata"]["resourceVersion"] = str(next(self._resource_version))
        self.objects[kind.plural][name] = body
        return kind.from_dict(copy.deepcopy(body))

    def list_users(self, label_selector: Mapping[str, str]) -> List[User]:
        self._maybe_fail("list", User.plural)
        return self._select(User, label_selector)

    def create_user(self, user: User) -> User:
        return self._create(User, user)

    def list_global_role_bindings(self, label_selector: Mapping[str, str]) -> List[GlobalRoleBinding]:
        self._maybe_fail("list", GlobalRoleBinding.plural)
        return self._select(GlobalRoleBinding, label_selector)

    def create_global_role_binding(self, binding: GlobalRoleBinding) -> GlobalRoleBinding:
        return self._create(GlobalRoleBinding, binding)

    # --- internals --------------------------------------------------------

    def _maybe_fail(self, operation: str, plural: str, name: Optional[str] = None) -> None:
        exc = self.fail_on.get((operation, plural, name)) if name else None
        exc = exc or self.fail_on.get((operation, plural))
        if exc is not None:
            raise exc

    def _select(self, kind, label_selector: Mapping[str, str]) -> list:
        return [
            obj
            for obj in self.all(kind)
            if all(obj.metadata.labels.get(k) == v for k, v in label_selector.items())
        ]

    def _create(self, kind, obj):
        self.calls.append(("create", kind.plural, obj.metadata.name))
        self._maybe_fail("create", kind.plural, obj.metadata.name)
        if obj.metadata.name and obj.metadata.name in self.objects.get(kind.plural, {}):
            raise AlreadyExistsError(f"{kind.kind} '{obj.metadata.name}' already exists")
        return self.seed(obj)


ADMIN_LABELS = {"authz.management.cattle.io/bootstrapping": "admin-user"}


def labeled_admin(name: str = "user-existing") -> User:
    return User(
        metadata=ObjectMeta(name=name, labels=dict(ADMIN_LABELS)),
        display_name="Default Admin",
        username="admin",
        password="hash",
        must_change_password=True,
    )
