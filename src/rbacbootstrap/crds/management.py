"""Object model for the management.cattle.io authorization resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Sequence, Tuple, Union

from .base import BaseManagementObject, ObjectMeta
from .const import (
    CRD_PLURAL_GLOBALROLE,
    CRD_PLURAL_GLOBALROLEBINDING,
    CRD_PLURAL_ROLETEMPLATE,
    CRD_PLURAL_USER,
)


class Scope(str, Enum):
    """Where a role template can be bound. Global roles use NONE."""

    NONE = ""
    CLUSTER = "cluster"
    PROJECT = "project"

    def __str__(self) -> str:
        return self.value


def parse_scope(value: str) -> Union[Scope, str]:
    """Return the matching Scope, or the raw value for contexts this package does not know."""
    try:
        return Scope(value or "")
    except ValueError:
        return value


@dataclass
class Rule:
    """A single grant of verbs, equivalent to a Kubernetes PolicyRule."""

    api_groups: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)
    non_resource_urls: List[str] = field(default_factory=list)
    verbs: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        return cls(
            api_groups=list(data.get("apiGroups") or []),
            resources=list(data.get("resources") or []),
            non_resource_urls=list(data.get("nonResourceURLs") or []),
            verbs=list(data.get("verbs") or []),
        )

    def to_dict(self) -> Dict[str, List[str]]:
        # Matches the omitempty behaviour of PolicyRule; verbs is always sent.
        rule: Dict[str, List[str]] = {}
        if self.api_groups:
            rule["apiGroups"] = list(self.api_groups)
        if self.resources:
            rule["resources"] = list(self.resources)
        if self.non_resource_urls:
            rule["nonResourceURLs"] = list(self.non_resource_urls)
        rule["verbs"] = list(self.verbs)
        return rule

    def normalized(self) -> Tuple[FrozenSet[str], ...]:
        return (
            frozenset(self.api_groups),
            frozenset(self.resources),
            frozenset(self.non_resource_urls),
            frozenset(self.verbs),
        )


def rules_equal(left: Sequence[Rule], right: Sequence[Rule]) -> bool:
    """Compare rule lists position by position, each field as a set."""
    if len(left) != len(right):
        return False
    return all(a.normalized() == b.normalized() for a, b in zip(left, right))


@dataclass
class GlobalRole(BaseManagementObject):
    kind = "GlobalRole"
    plural = CRD_PLURAL_GLOBALROLE
    managed_fields = ("displayName", "rules", "builtin", "administrative")

    metadata: ObjectMeta
    display_name: str = ""
    rules: List[Rule] = field(default_factory=list)
    builtin: bool = False
    administrative: bool = False

    @classmethod
    def _from_body(cls, metadata: ObjectMeta, data: Dict[str, Any]) -> "GlobalRole":
        return cls(
            metadata=metadata,
            display_name=data.get("displayName", ""),
            rules=[Rule.from_dict(r) for r in data.get("rules") or []],
            builtin=bool(data.get("builtin", False)),
            administrative=bool(data.get("administrative", False)),
        )

    def _body(self) -> Dict[str, Any]:
        return {
            "displayName": self.display_name,
            "rules": [r.to_dict() for r in self.rules],
            "builtin": self.builtin,
            "administrative": self.administrative,
        }


@dataclass
class RoleTemplate(BaseManagementObject):
    kind = "RoleTemplate"
    plural = CRD_PLURAL_ROLETEMPLATE
    managed_fields = (
        "displayName",
        "rules",
        "context",
        "builtin",
        "administrative",
        "hidden",
        "roleTemplateNames",
    )

    metadata: ObjectMeta
    display_name: str = ""
    rules: List[Rule] = field(default_factory=list)
    context: Union[Scope, str] = Scope.NONE
    builtin: bool = False
    administrative: bool = False
    hidden: bool = False
    role_template_names: List[str] = field(default_factory=list)

    @classmethod
    def _from_body(cls, metadata: ObjectMeta, data: Dict[str, Any]) -> "RoleTemplate":
        return cls(
            metadata=metadata,
            display_name=data.get("displayName", ""),
            rules=[Rule.from_dict(r) for r in data.get("rules") or []],
            context=parse_scope(data.get("context") or ""),
            builtin=bool(data.get("builtin", False)),
            administrative=bool(data.get("administrative", False)),
            hidden=bool(data.get("hidden", False)),
            role_template_names=list(data.get("roleTemplateNames") or []),
        )

    def _body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "displayName": self.display_name,
            "rules": [r.to_dict() for r in self.rules],
            "context": str(self.context),
            "builtin": self.builtin,
            "administrative": self.administrative,
            "hidden": self.hidden,
        }
        if self.role_template_names:
            body["roleTemplateNames"] = list(self.role_template_names)
        return body


@dataclass
class User(BaseManagementObject):
    kind = "User"
    plural = CRD_PLURAL_USER
    managed_fields = ("displayName", "username", "password", "mustChangePassword")

    metadata: ObjectMeta
    display_name: str = ""
    username: str = ""
    password: str = ""
    must_change_password: bool = False

    @classmethod
    def _from_body(cls, metadata: ObjectMeta, data: Dict[str, Any]) -> "User":
        return cls(
            metadata=metadata,
            display_name=data.get("displayName", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            must_change_password=bool(data.get("mustChangePassword", False)),
        )

    def _body(self) -> Dict[str, Any]:
        return {
            "displayName": self.display_name,
            "username": self.username,
            "password": self.password,
            "mustChangePassword": self.must_change_password,
        }


@dataclass
class GlobalRoleBinding(BaseManagementObject):
    kind = "GlobalRoleBinding"
    plural = CRD_PLURAL_GLOBALROLEBINDING
    managed_fields = ("userName", "globalRoleName")

    metadata: ObjectMeta
    user_name: str = ""
    global_role_name: str = ""

    @classmethod
    def _from_body(cls, metadata: ObjectMeta, data: Dict[str, Any]) -> "GlobalRoleBinding":
        return cls(
            metadata=metadata,
            user_name=data.get("userName", ""),
            global_role_name=data.get("globalRoleName", ""),
        )

    def _body(self) -> Dict[str, Any]:
        return {
            "userName": self.user_name,
            "globalRoleName": self.global_role_name,
        }
