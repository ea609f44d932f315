"""
문서 편집 권한 확인
"""

import logging
from typing import Iterable, Optional

# 로깅 설정
logger = logging.getLogger(__name__)


class ConfigPermissionChecker:
    """설정값(전역 허용 여부, 허용 문서 목록)으로 편집 권한을 판단합니다."""

    def __init__(
        self, edit_enabled: bool = True, editable_documents: Optional[Iterable[str]] = None
    ):
        """
        Args:
            edit_enabled: 편집 기능 전체 허용 여부
            editable_documents: 편집 가능한 문서 ID 목록 (None이면 전체 허용)
        """
        self.edit_enabled = edit_enabled
        self.editable_documents = (
            set(editable_documents) if editable_documents is not None else None
        )

    def check_edit_permission(self, document_id: str) -> bool:
        if not self.edit_enabled:
            logger.debug("편집 기능이 비활성화되어 있습니다.")
            return False
        if self.editable_documents is None:
            return True
        return document_id in self.editable_documents
