"""Core functionality for pagetoc package."""

from .keys import slugify, assign_keys
from .scanner import scan_headings, resolve_anchor
from .overrides import merge_overrides, sanitize_for_save
from .service import TocService, resolve_document_id, SCHEMA_VERSION
from .sources import DirectorySource, EpubSource
from .stores import MemoryOverrideStore, JsonFileOverrideStore, PostgresOverrideStore
from .permissions import ConfigPermissionChecker
from .database import setup_database, check_database_status
from .config import Config, validate_config

__all__ = [
    "slugify",
    "assign_keys",
    "scan_headings",
    "resolve_anchor",
    "merge_overrides",
    "sanitize_for_save",
    "TocService",
    "resolve_document_id",
    "SCHEMA_VERSION",
    "DirectorySource",
    "EpubSource",
    "MemoryOverrideStore",
    "JsonFileOverrideStore",
    "PostgresOverrideStore",
    "ConfigPermissionChecker",
    "setup_database",
    "check_database_status",
    "Config",
    "validate_config",
]
