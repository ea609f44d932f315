"""
TOC 결과 포맷팅 및 편집 보조 유틸리티
"""

from typing import List, Dict, Any

from ..models.toc import TocItem
from ..models.overrides import GetTocResult


def visible_items(items: List[TocItem]) -> List[TocItem]:
    """숨김 처리되지 않은 항목만 반환합니다."""
    return [item for item in items if not item.hidden]


def overrides_from_items(items: List[TocItem]) -> Dict[str, Any]:
    """
    표시 중인 TOC 항목으로부터 편집용 저장 요청 초안을 만듭니다.

    원래 텍스트와 다른 라벨만 labelByKey에 포함됩니다.

    Args:
        items: TOC 항목 리스트

    Returns:
        hiddenKeys, labelByKey를 담은 페이로드
    """
    return {
        "hiddenKeys": [item.key for item in items if item.hidden],
        "labelByKey": {
            item.key: item.label
            for item in items
            if item.label and item.label != item.text
        },
    }


def format_toc_item(item: TocItem, show_keys: bool = False) -> str:
    """
    TOC 항목 하나를 한 줄로 포맷팅합니다.

    Args:
        item: TOC 항목
        show_keys: 키와 앵커 표시 여부

    Returns:
        포맷팅된 문자열
    """
    indent = "  " * (item.level - 1)
    line = f"{indent}- {item.label}"

    if item.label != item.text:
        line += f" (원문: {item.text})"
    if item.hidden:
        line += " [숨김]"
    if show_keys:
        line += f"  <{item.key} #{item.anchor_id}>"

    return line


def format_toc_result(
    result: GetTocResult, include_hidden: bool = False, show_keys: bool = False
) -> str:
    """
    TOC 조회 결과를 포맷팅합니다.

    Args:
        result: TOC 조회 결과
        include_hidden: 숨김 항목 표시 여부
        show_keys: 키와 앵커 표시 여부

    Returns:
        포맷팅된 TOC 문자열
    """
    lines = [f"📄 문서 {result.document_id or '알 수 없음'}"]

    if result.page_url:
        lines.append(f"🔗 {result.page_url}")
    lines.append(f"✏️  편집 가능: {'예' if result.can_edit else '아니오'}")
    lines.append("=" * 50)

    items = result.items if include_hidden else visible_items(result.items)
    if not items:
        lines.append("목차 항목이 없습니다.")
    else:
        lines.extend(format_toc_item(item, show_keys) for item in items)

    return "\n".join(lines)
