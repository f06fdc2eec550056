"""In-memory cache of discovery results.

Two lock scopes:

* ``RESTMappingCache._lock`` guards the map of per-group-version entries.
  It is only held while looking up or allocating an entry, never across I/O.
* ``CachedGroupVersion._lock`` guards one entry's kind maps and IS held
  across the discovery call that populates them, so at most one discovery
  round-trip per group-version is in flight. Concurrent callers for the
  same group-version wait for the first caller's result.

The group list has its own lock, held across the single "list groups" call.

Successful results are cached for the life of the process. Failures are
never cached: the next call retries discovery.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from types import MappingProxyType

from kubemapper.discovery import DiscoveryClient
from kubemapper.errors import DiscoveryError, is_not_found
from kubemapper.models.schema import (
    APIGroup,
    CachedResource,
    GroupVersion,
    GroupVersionKind,
    GroupVersionResource,
    ResourceScope,
    RESTMapping,
)
from kubemapper.observability.logging import get_logger

_log = get_logger("cache.restmapping")


class CachedGroupVersion:
    """All resource information for one group-version, fetched once on success."""

    def __init__(self, group_version: GroupVersion) -> None:
        self.group_version = group_version
        self._lock = asyncio.Lock()
        # kind -> resource + scope; None until a successful fetch
        self._kinds: dict[str, CachedResource] | None = None
        # resource -> kind
        self._to_kind: dict[str, str] = {}

    @property
    def populated(self) -> bool:
        return self._kinds is not None

    async def fetch(self, discovery: DiscoveryClient) -> Mapping[str, CachedResource]:
        """Return the kind map, querying discovery if it is not cached yet.

        The returned mapping is read-only. A group-version the server does not
        know yields an empty mapping which is not cached, so a later call picks
        it up once it is served.

        Raises:
            DiscoveryError: any other discovery failure.
        """
        async with self._lock:
            if self._kinds is not None:
                return MappingProxyType(self._kinds)

            gv = str(self.group_version)
            _log.info("discovering_group_version_resources", gv=gv)
            try:
                resources = await discovery.list_resources(gv)
            except Exception as exc:
                if is_not_found(exc):
                    _log.debug("group_version_not_found", gv=gv)
                    return MappingProxyType({})
                _log.warning(
                    "discovery_failed",
                    operation="list_resources",
                    gv=gv,
                    error=str(exc),
                )
                raise DiscoveryError("list_resources", exc, group_version=gv) from exc

            kinds: dict[str, CachedResource] = {}
            to_kind: dict[str, str] = {}
            for resource in resources:
                # subresources ("pods/status") get no mappings
                if resource.is_subresource:
                    continue
                scope = ResourceScope.NAMESPACE if resource.namespaced else ResourceScope.CLUSTER
                kinds[resource.kind] = CachedResource(resource=resource.name, scope=scope)
                to_kind[resource.name] = resource.kind

            self._to_kind = to_kind
            self._kinds = kinds
            return MappingProxyType(kinds)

    async def find_rest_mapping(self, discovery: DiscoveryClient, kind: str) -> RESTMapping | None:
        """Return the mapping for *kind*, or None if this group-version does not serve it."""
        kinds = await self.fetch(discovery)
        cached = kinds.get(kind)
        if cached is None:
            return None
        return RESTMapping(
            resource=self.group_version.with_resource(cached.resource),
            group_version_kind=self.group_version.with_kind(kind),
            scope=cached.scope,
        )

    def kind_for_resource(self, resource: str) -> str:
        """Return the cached kind for *resource*, or "" if unknown or not fetched."""
        return self._to_kind.get(resource, "")


class RESTMappingCache:
    """Process-lifetime cache of API groups and per-group-version mappings.

    Construction performs no I/O. Entries are created on demand and never
    removed; callers share one instance by injection.
    """

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._groups_lock = asyncio.Lock()
        self._groups: dict[str, APIGroup] | None = None
        self._group_versions: dict[GroupVersion, CachedGroupVersion] = {}

    async def find_group_info(self, discovery: DiscoveryClient, group: str) -> tuple[APIGroup, bool]:
        """Return ``(group_info, found)`` for *group*, listing groups if not cached.

        The empty string names the core group. An unknown group returns
        ``(APIGroup(), False)``.

        Raises:
            DiscoveryError: the group listing failed; nothing is cached.
        """
        async with self._groups_lock:
            if self._groups is None:
                _log.info("discovering_server_groups")
                try:
                    server_groups = await discovery.list_groups()
                except Exception as exc:
                    _log.warning("discovery_failed", operation="list_groups", error=str(exc))
                    raise DiscoveryError("list_groups", exc) from exc
                self._groups = {g.name: g for g in server_groups}

            info = self._groups.get(group)
        if info is None:
            return APIGroup(), False
        return info, True

    async def find_rest_mapping(
        self,
        discovery: DiscoveryClient,
        group_version: GroupVersion,
        kind: str,
    ) -> RESTMapping | None:
        """Return the mapping for *kind* in *group_version*, querying discovery if not cached.

        Returns None when the group-version does not serve the kind.
        """
        async with self._lock:
            cached = self._group_versions.get(group_version)
            if cached is None:
                cached = CachedGroupVersion(group_version)
                self._group_versions[group_version] = cached
        return await cached.find_rest_mapping(discovery, kind)

    def kind_from_resource(self, gvr: GroupVersionResource) -> str:
        """Return the kind cached for *gvr*, or "" if none. Never queries discovery.

        With a version, only that exact group-version is consulted. Without
        one, every cached group-version of the group is scanned and the first
        match wins; the scan order is unspecified, so when several versions
        map the same resource any of their kinds may be returned.
        """
        gvk = self.resolve_resource(gvr)
        return gvk.kind if gvk is not None else ""

    def resolve_resource(self, gvr: GroupVersionResource) -> GroupVersionKind | None:
        """Like kind_from_resource, but also reports which group-version answered."""
        if gvr.version:
            cached = self._group_versions.get(gvr.group_version())
            if cached is None:
                return None
            kind = cached.kind_for_resource(gvr.resource)
            return cached.group_version.with_kind(kind) if kind else None

        for gv, cached in self._group_versions.items():
            if gv.group != gvr.group:
                continue
            kind = cached.kind_for_resource(gvr.resource)
            if kind:
                return gv.with_kind(kind)
        return None

    def cached_group_versions(self) -> list[GroupVersion]:
        """Snapshot of the group-versions that have an entry (populated or not)."""
        return list(self._group_versions)
