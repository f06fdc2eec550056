"""Shared fixtures for kubemapper tests.

Provides a call-counting in-memory DiscoveryClient with a realistic slice of
a cluster's discovery documents, so cache and mapper tests never need a real
API server.
"""

from __future__ import annotations

import asyncio
from collections import Counter

import pytest

from kubemapper.cache import RESTMappingCache
from kubemapper.errors import NoMatchError
from kubemapper.models.schema import APIGroup, APIResource, GroupVersionForDiscovery

# ---------------------------------------------------------------------------
# Discovery documents
# ---------------------------------------------------------------------------


def _gv(group_version: str) -> GroupVersionForDiscovery:
    return GroupVersionForDiscovery(group_version=group_version, version=group_version.rsplit("/", 1)[-1])


CORE_GROUP = APIGroup(name="", versions=(_gv("v1"),), preferred_version=_gv("v1"))
APPS_GROUP = APIGroup(name="apps", versions=(_gv("apps/v1"),), preferred_version=_gv("apps/v1"))
EXAMPLE_GROUP = APIGroup(
    name="example.com",
    versions=(_gv("example.com/v2"), _gv("example.com/v1")),
    preferred_version=_gv("example.com/v2"),
)

RESOURCES: dict[str, list[APIResource]] = {
    "v1": [
        APIResource(name="pods", kind="Pod", namespaced=True, verbs=("get", "list", "watch")),
        APIResource(name="pods/status", kind="Pod", namespaced=True, verbs=("get", "patch")),
        APIResource(name="pods/log", kind="Pod", namespaced=True, verbs=("get",)),
        APIResource(name="namespaces", kind="Namespace", namespaced=False, verbs=("get", "list")),
        APIResource(name="nodes", kind="Node", namespaced=False, verbs=("get", "list")),
    ],
    "apps/v1": [
        APIResource(name="deployments", kind="Deployment", namespaced=True),
        APIResource(name="deployments/scale", kind="Scale", namespaced=True),
        APIResource(name="deployments/status", kind="Deployment", namespaced=True),
    ],
    "example.com/v1": [
        APIResource(name="widgets", kind="Widget", namespaced=True),
    ],
    "example.com/v2": [
        APIResource(name="gadgets", kind="Gadget", namespaced=False),
    ],
}


class FakeDiscovery:
    """In-memory DiscoveryClient that counts calls.

    ``resources`` maps a group-version string to its resource list, or to an
    exception to raise. Unknown group-versions raise NoMatchError. A gate
    registered in ``gates`` (keyed by group-version, or "groups") blocks the
    matching call until the event is set.
    """

    def __init__(
        self,
        groups: list[APIGroup] | None = None,
        resources: dict[str, list[APIResource] | Exception] | None = None,
    ) -> None:
        self.groups: list[APIGroup] = list(groups or [])
        self.resources: dict[str, list[APIResource] | Exception] = dict(resources or {})
        self.group_error: Exception | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.group_calls = 0
        self.resource_calls: Counter[str] = Counter()

    async def list_groups(self) -> list[APIGroup]:
        self.group_calls += 1
        gate = self.gates.get("groups")
        if gate is not None:
            await gate.wait()
        if self.group_error is not None:
            raise self.group_error
        return list(self.groups)

    async def list_resources(self, group_version: str) -> list[APIResource]:
        self.resource_calls[group_version] += 1
        gate = self.gates.get(group_version)
        if gate is not None:
            await gate.wait()
        result = self.resources.get(group_version)
        if result is None:
            raise NoMatchError(group_version)
        if isinstance(result, Exception):
            raise result
        return list(result)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def discovery() -> FakeDiscovery:
    """A fake discovery client serving the core, apps and example.com groups."""
    return FakeDiscovery(
        groups=[CORE_GROUP, APPS_GROUP, EXAMPLE_GROUP],
        resources=dict(RESOURCES),
    )


@pytest.fixture()
def cache() -> RESTMappingCache:
    """A fresh, empty RESTMappingCache."""
    return RESTMappingCache()
