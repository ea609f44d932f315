"""
TOC 조회 및 오버라이드 저장 서비스
문서 본문을 스캔하여 키를 부여하고, 저장된 오버라이드와 병합한 TOC를 반환합니다.
"""

import re
import math
import logging
from typing import Any, Mapping, Optional, Protocol

from ..models.overrides import (
    FetchResult,
    GetTocResult,
    OverrideRecord,
    SaveOverridesResult,
)
from .keys import assign_keys
from .overrides import merge_overrides, sanitize_for_save
from .scanner import scan_headings

# 로깅 설정
logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1"

ERROR_NO_DOCUMENT = "No document context."
ERROR_NO_PERMISSION = "No permission to edit."

_DOCUMENT_ID_RE = re.compile(r"[0-9]+")

# 호스트 컨텍스트에서 문서 ID를 찾는 경로 (앞쪽이 우선)
_CONTEXT_ID_PATHS = (
    ("extension", "content", "id"),
    ("extension", "contentId"),
    ("contentId",),
    ("extension", "page", "id"),
    ("extension", "pageId"),
)


class DocumentSource(Protocol):
    def fetch_document_body(self, document_id: str, format: str) -> FetchResult: ...


class PermissionChecker(Protocol):
    def check_edit_permission(self, document_id: str) -> bool: ...


class OverrideStore(Protocol):
    def load_override_record(self, document_id: str) -> Optional[OverrideRecord]: ...

    def store_override_record(self, document_id: str, record: OverrideRecord) -> None: ...


def is_document_id(value: str) -> bool:
    """ASCII 숫자로만 이루어진 문서 ID인지 확인합니다."""
    return bool(_DOCUMENT_ID_RE.fullmatch(value))


def _lookup(context: Any, path) -> Any:
    current = context
    for part in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def _coerce_document_id(candidate: Any) -> Optional[str]:
    if isinstance(candidate, bool):
        return None
    if isinstance(candidate, int):
        return str(candidate)
    if isinstance(candidate, float):
        if math.isfinite(candidate) and candidate.is_integer():
            return str(int(candidate))
        return None
    if isinstance(candidate, str) and is_document_id(candidate.strip()):
        return candidate.strip()
    return None


def resolve_document_id(context: Any) -> Optional[str]:
    """
    호스트 컨텍스트에서 숫자 문서 ID를 찾습니다.

    Args:
        context: 호스트가 전달한 컨텍스트 (중첩 매핑)

    Returns:
        문서 ID 문자열 또는 None
    """
    for path in _CONTEXT_ID_PATHS:
        document_id = _coerce_document_id(_lookup(context, path))
        if document_id is not None:
            return document_id
    return None


def normalize_page_url(web_url: Optional[str], prefix: str = "") -> Optional[str]:
    """페이지 URL이 접두사로 시작하도록 맞춥니다."""
    if web_url is None:
        return None
    if not prefix or web_url.startswith(prefix):
        return web_url
    return f"{prefix}{web_url}"


class TocService:
    """TOC 조회/저장 서비스 클래스"""

    def __init__(
        self,
        source: DocumentSource,
        store: OverrideStore,
        permissions: PermissionChecker,
        page_url_prefix: str = "",
    ):
        """
        Args:
            source: 문서 본문 소스
            store: 오버라이드 저장소
            permissions: 편집 권한 확인기
            page_url_prefix: 페이지 URL 접두사
        """
        self.source = source
        self.store = store
        self.permissions = permissions
        self.page_url_prefix = page_url_prefix

    def user_can_edit(self, document_id: str) -> bool:
        """편집 권한을 확인합니다. 확인에 실패하면 권한 없음으로 처리합니다."""
        try:
            return bool(self.permissions.check_edit_permission(document_id))
        except Exception as e:
            logger.warning(f"권한 확인 실패, 편집 불가로 처리합니다: {e}")
            return False

    def get_toc(self, context: Any = None) -> GetTocResult:
        """
        문서의 TOC를 조회합니다.

        Args:
            context: 문서 ID를 담은 호스트 컨텍스트

        Returns:
            TOC 조회 결과
        """
        document_id = resolve_document_id(context)
        if not document_id:
            logger.info("문서 ID를 찾을 수 없어 빈 TOC를 반환합니다.")
            return GetTocResult(
                schema_version=SCHEMA_VERSION,
                document_id=None,
                can_edit=False,
                page_url=None,
            )

        can_edit = self.user_can_edit(document_id)

        page = self.source.fetch_document_body(document_id, "storage")
        if not page.ok:
            logger.warning(f"문서 {document_id} 조회 실패 (상태 {page.status})")
            return GetTocResult(
                schema_version=SCHEMA_VERSION,
                document_id=document_id,
                can_edit=can_edit,
                page_url=None,
            )

        headings = assign_keys(scan_headings(page.body))
        record = self.store.load_override_record(document_id) or OverrideRecord()
        items = merge_overrides(headings, record)

        logger.info(
            f"문서 {document_id} TOC 생성: 항목 {len(items)}개, "
            f"숨김 {sum(1 for item in items if item.hidden)}개"
        )

        return GetTocResult(
            schema_version=SCHEMA_VERSION,
            document_id=document_id,
            can_edit=can_edit,
            page_url=normalize_page_url(page.web_url, self.page_url_prefix),
            items=items,
        )

    def save_overrides(self, payload: Any, context: Any = None) -> SaveOverridesResult:
        """
        오버라이드 저장 요청을 처리합니다.

        편집 권한은 요청마다 다시 확인하며, 저장은 기존 레코드를 통째로 덮어씁니다.

        Args:
            payload: 저장 요청 (documentId, hiddenKeys, labelByKey)
            context: 호스트 컨텍스트

        Returns:
            저장 결과
        """
        document_id = None
        if isinstance(payload, Mapping) and payload.get("documentId"):
            document_id = str(payload["documentId"]).strip() or None
        if not document_id:
            document_id = resolve_document_id(context)

        if not document_id:
            return SaveOverridesResult(ok=False, error=ERROR_NO_DOCUMENT)

        if not self.user_can_edit(document_id):
            logger.warning(f"문서 {document_id} 편집 권한 없음, 저장 거부")
            return SaveOverridesResult(ok=False, error=ERROR_NO_PERMISSION)

        record = sanitize_for_save(payload)
        self.store.store_override_record(document_id, record)

        logger.info(
            f"문서 {document_id} 오버라이드 저장: 숨김 {len(record.hidden_keys)}개, "
            f"라벨 {len(record.label_by_key)}개"
        )
        return SaveOverridesResult(ok=True)
