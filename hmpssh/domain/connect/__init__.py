"""
Connect domain module
"""
from .service import Connector

__all__ = ["Connector"]
