"""Core configuration and factory components."""

from template_variables.core.config import Settings, get_settings
from template_variables.core.factory import ComponentFactory, get_factory

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "get_factory",
]
