"""API schema identifiers and discovery records.

Mirrors the Kubernetes group/version/kind vocabulary. All types are frozen
so they can be used as dict keys and shared between concurrent callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ResourceScope(StrEnum):
    """Whether instances of a resource live inside a namespace."""

    CLUSTER = "root"
    NAMESPACE = "namespace"


@dataclass(frozen=True)
class GroupVersion:
    """A (group, version) pair. The empty group is the legacy core group."""

    group: str
    version: str

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    @classmethod
    def parse(cls, text: str) -> GroupVersion:
        """Parse ``group/version`` or a bare core ``version``.

        Raises:
            ValueError: if *text* contains more than one ``/``.
        """
        if not text or text == "/":
            return cls(group="", version="")
        parts = text.split("/")
        if len(parts) == 1:
            return cls(group="", version=parts[0])
        if len(parts) == 2:
            return cls(group=parts[0], version=parts[1])
        raise ValueError(f"unexpected GroupVersion string: {text}")

    def with_kind(self, kind: str) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=kind)

    def with_resource(self, resource: str) -> GroupVersionResource:
        return GroupVersionResource(group=self.group, version=self.version, resource=resource)


@dataclass(frozen=True)
class GroupKind:
    """A kind within a group, with no version pinned."""

    group: str
    kind: str

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class GroupVersionKind:
    group: str
    version: str
    kind: str

    def group_version(self) -> GroupVersion:
        return GroupVersion(group=self.group, version=self.version)


@dataclass(frozen=True)
class GroupVersionResource:
    """A resource address. ``version`` may be empty, meaning unspecified."""

    group: str
    version: str
    resource: str

    def group_version(self) -> GroupVersion:
        return GroupVersion(group=self.group, version=self.version)


@dataclass(frozen=True)
class GroupVersionForDiscovery:
    """One version entry of an API group as listed by discovery."""

    group_version: str  # e.g. "apps/v1"
    version: str  # e.g. "v1"


@dataclass(frozen=True)
class APIGroup:
    """An API group and the versions the server offers for it."""

    name: str = ""
    versions: tuple[GroupVersionForDiscovery, ...] = ()
    preferred_version: GroupVersionForDiscovery | None = None


@dataclass(frozen=True)
class APIResource:
    """A resource served within one group-version."""

    name: str  # plural wire name, "pods" or subresource "pods/status"
    kind: str
    namespaced: bool
    verbs: tuple[str, ...] = ()

    @property
    def is_subresource(self) -> bool:
        return "/" in self.name


@dataclass(frozen=True)
class CachedResource:
    """Cached resource name and scope for one kind in one group-version."""

    resource: str
    scope: ResourceScope


@dataclass(frozen=True)
class RESTMapping:
    """The resolved mapping between a kind and the resource that serves it."""

    resource: GroupVersionResource
    group_version_kind: GroupVersionKind
    scope: ResourceScope
