"""Core data structures for kubemapper."""

from kubemapper.models.config import DiscoveryConfig, KubeMapperConfig, LogConfig
from kubemapper.models.schema import (
    APIGroup,
    APIResource,
    CachedResource,
    GroupKind,
    GroupVersion,
    GroupVersionForDiscovery,
    GroupVersionKind,
    GroupVersionResource,
    ResourceScope,
    RESTMapping,
)

__all__ = [
    "APIGroup",
    "APIResource",
    "CachedResource",
    "DiscoveryConfig",
    "GroupKind",
    "GroupVersion",
    "GroupVersionForDiscovery",
    "GroupVersionKind",
    "GroupVersionResource",
    "KubeMapperConfig",
    "LogConfig",
    "RESTMapping",
    "ResourceScope",
]
