"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class DiscoveryConfig:
    """Kubernetes discovery client configuration."""

    kubeconfig: str = ""
    context: str = ""
    timeout_seconds: int = 15


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"  # "json" or "console"


@dataclass
class KubeMapperConfig:
    """Top-level kubemapper configuration."""

    discovery: DiscoveryConfig = field(default_factory=DiscoveryConfig)
    log: LogConfig = field(default_factory=LogConfig)
