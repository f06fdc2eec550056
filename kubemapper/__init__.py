"""kubemapper: cached resolution of Kubernetes kinds and resources via discovery."""

from kubemapper.cache import RESTMappingCache
from kubemapper.mapper import CachingRESTMapper

__version__ = "0.1.0"

__all__ = ["CachingRESTMapper", "RESTMappingCache", "__version__"]
