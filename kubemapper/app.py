"""Bootstrap for kubemapper.

Wires config -> logging -> Kubernetes client -> discovery -> cache -> mapper.
Callers that already own a DiscoveryClient can construct CachingRESTMapper
directly; this module covers the common "talk to the current cluster" case.
"""

from __future__ import annotations

from kubemapper.cache import RESTMappingCache
from kubemapper.config import load_config
from kubemapper.errors import DiscoveryError
from kubemapper.mapper import CachingRESTMapper
from kubemapper.models.config import KubeMapperConfig
from kubemapper.observability.logging import get_logger, setup_logging


async def build_rest_mapper(
    config: KubeMapperConfig | None = None,
    cache: RESTMappingCache | None = None,
) -> CachingRESTMapper:
    """Create a CachingRESTMapper for the cluster described by *config*.

    Credentials come from the in-cluster service account when available,
    otherwise from kubeconfig (``config.discovery.kubeconfig`` /
    ``config.discovery.context``, or the library defaults when empty).

    Raises:
        DiscoveryError: no usable Kubernetes configuration was found.
    """
    config = config or load_config()
    setup_logging(config.log.level, config.log.format)
    log = get_logger("app")

    # Import lazily: kubernetes_asyncio is only needed for a live cluster.
    import kubernetes_asyncio.config as k8s_config  # type: ignore[import-untyped]
    from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

    from kubemapper.discovery.kubernetes import KubernetesDiscovery

    try:
        try:
            k8s_config.load_incluster_config()
            log.info("k8s config loaded", source="incluster")
        except k8s_config.ConfigException:
            await k8s_config.load_kube_config(
                config_file=config.discovery.kubeconfig or None,
                context=config.discovery.context or None,
            )
            log.info("k8s config loaded", source="kubeconfig", context=config.discovery.context or "<current>")
    except Exception as exc:
        log.error("k8s config load failed", error=str(exc))
        raise DiscoveryError("load_config", exc) from exc

    discovery = KubernetesDiscovery(
        k8s_client.ApiClient(),
        request_timeout=config.discovery.timeout_seconds,
    )
    return CachingRESTMapper(discovery, cache=cache)
