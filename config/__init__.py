"""Engine configuration utilities."""

from .settings import DEFAULT_UNCATEGORIZED_ID, Settings, get_settings

__all__ = [
    "DEFAULT_UNCATEGORIZED_ID",
    "Settings",
    "get_settings",
]
