"""
pagetoc - 문서 목차(TOC) 추출 및 오버라이드 관리

문서 본문에서 1, 2단계 제목을 추출해 안정적인 키와 앵커를 부여하고,
사용자가 저장한 숨김/라벨 설정과 병합한 목차를 제공하는 패키지입니다.
"""

__version__ = "0.1.0"

# Core classes and functions
from .core.keys import slugify, assign_keys
from .core.scanner import scan_headings, resolve_anchor
from .core.overrides import merge_overrides, sanitize_for_save
from .core.service import TocService, resolve_document_id, SCHEMA_VERSION
from .core.sources import DirectorySource, EpubSource
from .core.stores import (
    MemoryOverrideStore,
    JsonFileOverrideStore,
    PostgresOverrideStore,
)
from .core.permissions import ConfigPermissionChecker
from .core.database import setup_database, check_database_status
from .core.config import Config, validate_config

# Data models
from .models.toc import HeadingRecord, KeyedHeading, TocItem
from .models.overrides import (
    OverrideRecord,
    FetchResult,
    GetTocResult,
    SaveOverridesResult,
)

# Utilities
from .utils.format import (
    visible_items,
    overrides_from_items,
    format_toc_item,
    format_toc_result,
)

__all__ = [
    # Version info
    "__version__",
    "SCHEMA_VERSION",
    # Core functions
    "slugify",
    "assign_keys",
    "scan_headings",
    "resolve_anchor",
    "merge_overrides",
    "sanitize_for_save",
    "resolve_document_id",
    # Core classes
    "TocService",
    "DirectorySource",
    "EpubSource",
    "MemoryOverrideStore",
    "JsonFileOverrideStore",
    "PostgresOverrideStore",
    "ConfigPermissionChecker",
    "Config",
    # Data models
    "HeadingRecord",
    "KeyedHeading",
    "TocItem",
    "OverrideRecord",
    "FetchResult",
    "GetTocResult",
    "SaveOverridesResult",
    # Database functions
    "setup_database",
    "check_database_status",
    "validate_config",
    # Utilities
    "visible_items",
    "overrides_from_items",
    "format_toc_item",
    "format_toc_result",
]
