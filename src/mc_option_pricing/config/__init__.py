"""Configuration: frozen settings and centralized tolerances."""

from mc_option_pricing.config.settings import SETTINGS, Settings, SimulationConfig
from mc_option_pricing.config.tolerances import get_tolerance, mc_tolerance

__all__ = [
    "SETTINGS",
    "Settings",
    "SimulationConfig",
    "get_tolerance",
    "mc_tolerance",
]
