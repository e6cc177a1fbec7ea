"""
Key management domain module
"""
from .service import KeyService

__all__ = ["KeyService"]
