"""
스캔 결과와 저장된 오버라이드를 병합하고, 저장 요청을 정제하는 모듈
"""

import logging
from typing import List, Dict, Any, Iterable, Optional
from collections.abc import Mapping

from ..models.toc import KeyedHeading, TocItem
from ..models.overrides import OverrideRecord, OVERRIDE_RECORD_VERSION

# 로깅 설정
logger = logging.getLogger(__name__)

LABEL_MAX_LENGTH = 200


def merge_overrides(
    headings: Iterable[KeyedHeading], override_record: Optional[OverrideRecord] = None
) -> List[TocItem]:
    """
    키가 부여된 제목에 오버라이드를 적용하여 TOC 항목을 만듭니다.

    숨김 항목도 그대로 포함되며 (필터링은 표시 계층의 몫), 순서는 유지됩니다.

    Args:
        headings: 키가 부여된 제목 목록
        override_record: 저장된 오버라이드 (없으면 빈 기본값)

    Returns:
        TOC 항목 리스트
    """
    record = override_record or OverrideRecord()
    hidden_keys = set(record.hidden_keys)
    label_by_key = record.label_by_key

    items = []
    for heading in headings:
        label = (label_by_key.get(heading.key) or "").strip()
        items.append(
            TocItem(
                key=heading.key,
                level=heading.level,
                text=heading.text,
                anchor_id=heading.anchor_id,
                hidden=heading.key in hidden_keys,
                label=label or heading.text,
            )
        )

    return items


def sanitize_for_save(payload: Any) -> OverrideRecord:
    """
    저장 요청 페이로드를 검증하여 OverrideRecord로 변환합니다.

    - hiddenKeys가 리스트가 아니면 빈 리스트로 취급, 문자열이 아닌 항목은 제거
    - labelByKey가 매핑이 아니면 빈 매핑으로 취급
    - 라벨은 앞뒤 공백 제거 후 빈 값은 제거, 200자로 자름
    - 현재 문서에 없는 키도 그대로 유지

    Args:
        payload: 저장 요청 (hiddenKeys, labelByKey)

    Returns:
        저장할 오버라이드 레코드
    """
    if not isinstance(payload, Mapping):
        payload = {}

    hidden_keys = payload.get("hiddenKeys")
    if not isinstance(hidden_keys, (list, tuple)):
        hidden_keys = []

    label_by_key = payload.get("labelByKey")
    if not isinstance(label_by_key, Mapping):
        label_by_key = {}

    sanitized_labels: Dict[str, str] = {}
    for key, value in label_by_key.items():
        if not isinstance(key, str) or not isinstance(value, str):
            continue
        trimmed = value.strip()
        if not trimmed:
            continue
        sanitized_labels[key] = trimmed[:LABEL_MAX_LENGTH]

    record = OverrideRecord(
        version=OVERRIDE_RECORD_VERSION,
        hidden_keys=list(dict.fromkeys(k for k in hidden_keys if isinstance(k, str))),
        label_by_key=sanitized_labels,
    )

    logger.debug(
        f"오버라이드 정제 완료: 숨김 {len(record.hidden_keys)}개, 라벨 {len(record.label_by_key)}개"
    )
    return record
