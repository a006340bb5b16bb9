from app.configs.settings import (
    CONFIG_MAP,
    LimiterConfig,
    settings,
)

__all__ = [
    "LimiterConfig",
    "settings",
    "CONFIG_MAP",
]
