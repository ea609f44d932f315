"""Data models for pagetoc package."""

from .toc import HeadingRecord, KeyedHeading, TocItem
from .overrides import (
    OverrideRecord,
    FetchResult,
    GetTocResult,
    SaveOverridesResult,
)

__all__ = [
    "HeadingRecord",
    "KeyedHeading",
    "TocItem",
    "OverrideRecord",
    "FetchResult",
    "GetTocResult",
    "SaveOverridesResult",
]
