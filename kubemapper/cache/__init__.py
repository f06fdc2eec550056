"""Cache layer for kubemapper.

Holds discovery results in memory for the life of the process: the API
group list and, per group-version, the kind <-> resource mapping and scope.

Submodules:
    restmapping_cache -- RESTMappingCache and its per-group-version entries.
"""

from kubemapper.cache.restmapping_cache import CachedGroupVersion, RESTMappingCache

__all__ = ["CachedGroupVersion", "RESTMappingCache"]
