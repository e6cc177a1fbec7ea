"""
State storage implementations
"""
from .record_store import FlatFileRecordStore

__all__ = ["FlatFileRecordStore"]
