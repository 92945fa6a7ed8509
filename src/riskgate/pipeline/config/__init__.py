"""Risk tier configuration resolution."""

from riskgate.pipeline.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG, load_risk_config, resolve_config
from riskgate.pipeline.config.types import (
    TIER_NAMES,
    ConfigResolution,
    DocsDriftConfig,
    RiskConfig,
    RiskTierDefinition,
    ShaDisciplineConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "TIER_NAMES",
    "ConfigResolution",
    "DocsDriftConfig",
    "RiskConfig",
    "RiskTierDefinition",
    "ShaDisciplineConfig",
    "load_risk_config",
    "resolve_config",
]
