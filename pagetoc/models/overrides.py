"""Override record and service result data models."""

from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from .toc import TocItem

OVERRIDE_RECORD_VERSION = 1


@dataclass
class OverrideRecord:
    """문서별로 저장되는 사용자 오버라이드 (숨김 키, 라벨 변경)"""

    version: int = OVERRIDE_RECORD_VERSION
    hidden_keys: List[str] = field(default_factory=list)
    label_by_key: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "OverrideRecord":
        """
        저장소에서 읽은 값을 OverrideRecord로 변환합니다.

        값이 없거나 필드가 빠져 있으면 빈 기본값을 사용하고,
        문자열이 아닌 항목은 무시합니다.
        """
        if not isinstance(data, dict):
            return cls()

        hidden_keys = data.get("hiddenKeys") or []
        label_by_key = data.get("labelByKey") or {}

        if not isinstance(hidden_keys, (list, tuple)):
            hidden_keys = []
        if not isinstance(label_by_key, dict):
            label_by_key = {}

        version = data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            version = OVERRIDE_RECORD_VERSION

        return cls(
            version=version,
            hidden_keys=list(
                dict.fromkeys(k for k in hidden_keys if isinstance(k, str))
            ),
            label_by_key={
                k: v
                for k, v in label_by_key.items()
                if isinstance(k, str) and isinstance(v, str)
            },
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "hiddenKeys": list(self.hidden_keys),
            "labelByKey": dict(self.label_by_key),
        }


@dataclass
class FetchResult:
    """문서 본문 조회 결과"""

    ok: bool
    status: int
    body: str = ""
    web_url: Optional[str] = None


@dataclass
class GetTocResult:
    """getToc 호출 결과"""

    schema_version: str
    document_id: Optional[str]
    can_edit: bool
    page_url: Optional[str]
    items: List[TocItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": self.schema_version,
            "documentId": self.document_id,
            "canEdit": self.can_edit,
            "pageUrl": self.page_url,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class SaveOverridesResult:
    """saveOverrides 호출 결과"""

    ok: bool
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"ok": self.ok}
        if self.error is not None:
            result["error"] = self.error
        return result
