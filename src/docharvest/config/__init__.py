from .config import (
    Config,
    DiscoveryConfig,
    MonitoringConfig,
    ResolverConfig,
    ScoringConfig,
    find_config_file,
    settings,
)

__all__ = [
    "Config",
    "DiscoveryConfig",
    "ScoringConfig",
    "ResolverConfig",
    "MonitoringConfig",
    "find_config_file",
    "settings",
]
