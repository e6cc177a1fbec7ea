"""
Connection record domain module
"""
from .models import ConnectionRecord, is_valid_port, parse_selection

__all__ = ["ConnectionRecord", "is_valid_port", "parse_selection"]
