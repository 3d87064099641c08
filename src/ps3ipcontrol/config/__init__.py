"""Configuration management for ps3ipcontrol.

Loads and validates YAML-based configuration with Pydantic models.
"""

from ps3ipcontrol.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
