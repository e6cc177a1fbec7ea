"""
Backup domain module
"""
from .service import BackupService, BackupResult, ARCHIVE_MEMBERS

__all__ = ["BackupService", "BackupResult", "ARCHIVE_MEMBERS"]
