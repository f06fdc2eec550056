"""Discovery over the Kubernetes API server using kubernetes_asyncio.

Reads ``/api`` and ``/apis`` for the group list and ``/api/v1`` or
``/apis/<group>/<version>`` for resources, translating the client's
generated models into kubemapper's schema records.
"""

from __future__ import annotations

from typing import Any

from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
from kubernetes_asyncio.client.exceptions import ApiException  # type: ignore[import-untyped]

from kubemapper.errors import NoMatchError
from kubemapper.models.schema import APIGroup, APIResource, GroupVersion, GroupVersionForDiscovery
from kubemapper.observability.logging import get_logger

_log = get_logger("discovery.kubernetes")


class KubernetesDiscovery:
    """DiscoveryClient backed by a kubernetes_asyncio ApiClient.

    Args:
        api_client:      A configured ``kubernetes_asyncio.client.ApiClient``.
        request_timeout: Per-request timeout in seconds, or None for the
                         client default.
    """

    def __init__(self, api_client: Any, request_timeout: float | None = None) -> None:
        self._api_client = api_client
        self._request_timeout = request_timeout
        self._core_api = k8s_client.CoreApi(api_client)
        self._apis_api = k8s_client.ApisApi(api_client)

    async def list_groups(self) -> list[APIGroup]:
        _log.debug("listing_api_groups")
        core = await self._core_api.get_api_versions(_request_timeout=self._request_timeout)
        named = await self._apis_api.get_api_versions(_request_timeout=self._request_timeout)

        groups: list[APIGroup] = []
        core_versions = tuple(GroupVersionForDiscovery(group_version=v, version=v) for v in core.versions or [])
        if core_versions:
            groups.append(APIGroup(name="", versions=core_versions, preferred_version=core_versions[0]))
        for group in named.groups or []:
            groups.append(_to_api_group(group))
        return groups

    async def list_resources(self, group_version: str) -> list[APIResource]:
        gv = GroupVersion.parse(group_version)
        path = f"/api/{gv.version}" if not gv.group else f"/apis/{gv.group}/{gv.version}"
        _log.debug("listing_api_resources", gv=group_version, path=path)
        try:
            resource_list = await self._api_client.call_api(
                path,
                "GET",
                header_params={"Accept": "application/json"},
                response_types_map={200: "V1APIResourceList"},
                auth_settings=["BearerToken"],
                _return_http_data_only=True,
                _request_timeout=self._request_timeout,
            )
        except ApiException as exc:
            if exc.status == 404:
                raise NoMatchError(group_version) from exc
            raise
        return [_to_api_resource(r) for r in resource_list.resources or []]

    async def close(self) -> None:
        """Close the underlying ApiClient and its connection pool."""
        await self._api_client.close()


def _to_group_version(v: Any) -> GroupVersionForDiscovery:
    return GroupVersionForDiscovery(group_version=v.group_version, version=v.version)


def _to_api_group(group: Any) -> APIGroup:
    preferred = group.preferred_version
    return APIGroup(
        name=group.name,
        versions=tuple(_to_group_version(v) for v in group.versions or []),
        preferred_version=_to_group_version(preferred) if preferred is not None else None,
    )


def _to_api_resource(resource: Any) -> APIResource:
    return APIResource(
        name=resource.name,
        kind=resource.kind,
        namespaced=bool(resource.namespaced),
        verbs=tuple(resource.verbs or ()),
    )
