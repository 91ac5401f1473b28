import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .const import CRD_GROUP, CRD_VERSION


@dataclass
class ObjectMeta:
    name: Optional[str] = None
    generate_name: Optional[str] = None
    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)
    resource_version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectMeta":
        return cls(
            name=data.get("name"),
            generate_name=data.get("generateName"),
            labels=dict(data.get("labels") or {}),
            annotations=dict(data.get("annotations") or {}),
            resource_version=data.get("resourceVersion"),
        )

    def to_dict(self) -> Dict[str, Any]:
        meta: Dict[str, Any] = {}
        if self.name:
            meta["name"] = self.name
        if self.generate_name:
            meta["generateName"] = self.generate_name
        if self.labels:
            meta["labels"] = dict(self.labels)
        if self.annotations:
            meta["annotations"] = dict(self.annotations)
        if self.resource_version:
            meta["resourceVersion"] = self.resource_version
        return meta


class BaseManagementObject:
    """Common wire handling for cluster-scoped management.cattle.io objects.

    Subclasses declare ``kind``, ``plural`` and the top-level keys they own in
    ``managed_fields``, and implement ``_body`` and ``_from_body`` for them.

    An object read from storage remembers the body it was decoded from. When
    it is written back, that body is the starting point: only the managed keys
    and the modeled metadata are replaced, so finalizers, owner references and
    fields this package does not model survive the round trip.
    """

    group: str = CRD_GROUP
    version: str = CRD_VERSION
    kind: str
    plural: str
    managed_fields: Tuple[str, ...] = ()

    metadata: ObjectMeta
    _stored: Optional[Dict[str, Any]] = None

    @property
    def name(self) -> Optional[str]:
        return self.metadata.name

    @classmethod
    def api_version(cls) -> str:
        return f"{cls.group}/{cls.version}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        meta = ObjectMeta.from_dict(data.get("metadata") or {})
        obj = cls._from_body(meta, data)
        obj._stored = copy.deepcopy(data)
        return obj

    def retain_unmanaged(self, stored: "BaseManagementObject") -> None:
        """Write this object over the stored body of ``stored``."""
        self._stored = copy.deepcopy(stored._stored)

    @classmethod
    def _from_body(cls, metadata: ObjectMeta, data: Dict[str, Any]):
        raise NotImplementedError

    def _body(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = copy.deepcopy(self._stored) if self._stored else {}
        for key in self.managed_fields:
            body.pop(key, None)
        metadata = dict(body.get("metadata") or {})
        metadata.update(self.metadata.to_dict())
        body.update(
            {
                "apiVersion": self.api_version(),
                "kind": self.kind,
                "metadata": metadata,
            }
        )
        body.update(self._body())
        return body
