from .loader import load_config, load_config_with_overrides
from .schema import AvadaConfig

__all__ = [
    "load_config",
    "load_config_with_overrides",
    "AvadaConfig",
]
