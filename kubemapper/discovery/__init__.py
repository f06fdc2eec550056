"""Discovery collaborators.

DiscoveryClient     -- the two queries the cache depends on.
KubernetesDiscovery -- kubernetes_asyncio-backed implementation
                       (``kubemapper.discovery.kubernetes``; imported lazily
                       by callers so the client library loads only when used).
"""

from __future__ import annotations

from typing import Protocol

from kubemapper.models.schema import APIGroup, APIResource


class DiscoveryClient(Protocol):
    """Lists the API groups and per-group-version resources a server offers."""

    async def list_groups(self) -> list[APIGroup]:
        """Return every API group, including the core group (name "")."""
        ...

    async def list_resources(self, group_version: str) -> list[APIResource]:
        """Return the resources served by *group_version* (``"v1"``, ``"apps/v1"``).

        Raises:
            NoMatchError: the server does not serve *group_version*.
        """
        ...


__all__ = ["DiscoveryClient"]
