"""REST mapper facade over the discovery cache.

CachingRESTMapper answers "which resource serves this kind?" and "which
kind does this resource hold?" for one discovery client, delegating all
caching to an injected RESTMappingCache.
"""

from __future__ import annotations

import structlog

from kubemapper.cache import RESTMappingCache
from kubemapper.discovery import DiscoveryClient
from kubemapper.errors import NoKindMatchError, NoResourceMatchError
from kubemapper.models.schema import (
    APIGroup,
    GroupKind,
    GroupVersion,
    GroupVersionKind,
    GroupVersionResource,
    RESTMapping,
)
from kubemapper.observability.logging import get_logger

_log = get_logger("mapper")


class CachingRESTMapper:
    """Resolves kinds and resources through a shared RESTMappingCache.

    Args:
        discovery: Client used whenever the cache has to be populated.
        cache:     Cache to share with other mappers; a fresh one if omitted.
    """

    def __init__(self, discovery: DiscoveryClient, cache: RESTMappingCache | None = None) -> None:
        self._discovery = discovery
        self._cache = cache or RESTMappingCache()

    async def __aenter__(self) -> CachingRESTMapper:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def cache(self) -> RESTMappingCache:
        return self._cache

    async def close(self) -> None:
        """Release the discovery client's connections, if it holds any.

        The cache is left intact so it can keep serving other mappers.
        """
        close = getattr(self._discovery, "close", None)
        if close is not None:
            await close()

    async def find_group_info(self, group: str) -> tuple[APIGroup, bool]:
        return await self._cache.find_group_info(self._discovery, group)

    async def find_rest_mapping(self, gvk: GroupVersionKind) -> RESTMapping | None:
        return await self._cache.find_rest_mapping(self._discovery, gvk.group_version(), gvk.kind)

    def kind_from_resource(self, group: str, resource: str, version: str = "") -> str:
        return self._cache.kind_from_resource(GroupVersionResource(group=group, version=version, resource=resource))

    async def rest_mapping(self, group_kind: GroupKind, *versions: str) -> RESTMapping:
        """Return the mapping for *group_kind* in the first version that serves it.

        Explicit *versions* are tried in order. Without them the group's
        preferred version is tried first, then the remaining served versions.

        Raises:
            NoKindMatchError: no candidate version serves the kind.
            DiscoveryError:   discovery failed.
        """
        with structlog.contextvars.bound_contextvars(group_kind=str(group_kind)):
            candidates = await self._candidate_versions(group_kind, versions)
            for version in candidates:
                gv = GroupVersion(group=group_kind.group, version=version)
                mapping = await self._cache.find_rest_mapping(self._discovery, gv, group_kind.kind)
                if mapping is not None:
                    return mapping
            _log.debug("no_kind_match", searched_versions=candidates)
            raise NoKindMatchError(group_kind, candidates)

    async def rest_mappings(self, group_kind: GroupKind, *versions: str) -> list[RESTMapping]:
        """Return the mappings for *group_kind* in every candidate version that serves it.

        Raises:
            NoKindMatchError: no candidate version serves the kind.
        """
        with structlog.contextvars.bound_contextvars(group_kind=str(group_kind)):
            candidates = await self._candidate_versions(group_kind, versions)
            mappings: list[RESTMapping] = []
            for version in candidates:
                gv = GroupVersion(group=group_kind.group, version=version)
                mapping = await self._cache.find_rest_mapping(self._discovery, gv, group_kind.kind)
                if mapping is not None:
                    mappings.append(mapping)
            if not mappings:
                raise NoKindMatchError(group_kind, candidates)
            return mappings

    def kind_for(self, gvr: GroupVersionResource) -> GroupVersionKind:
        """Return the kind for *gvr* from already-cached group-versions only.

        Raises:
            NoResourceMatchError: no cached group-version maps the resource.
        """
        gvk = self._cache.resolve_resource(gvr)
        if gvk is None:
            raise NoResourceMatchError(gvr)
        return gvk

    async def _candidate_versions(self, group_kind: GroupKind, versions: tuple[str, ...]) -> list[str]:
        if versions:
            return list(versions)

        group, found = await self._cache.find_group_info(self._discovery, group_kind.group)
        if not found:
            raise NoKindMatchError(group_kind)

        candidates: list[str] = []
        if group.preferred_version is not None and group.preferred_version.version:
            candidates.append(group.preferred_version.version)
        for v in group.versions:
            if v.version not in candidates:
                candidates.append(v.version)
        return candidates
