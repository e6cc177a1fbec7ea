"""
Settings loading
"""
from .loader import ConfigLoader, load_settings, resolve_home

__all__ = ["ConfigLoader", "load_settings", "resolve_home"]
