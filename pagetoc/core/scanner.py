"""
문서 마크업에서 1, 2단계 제목을 추출하고 각 제목의 앵커 ID를 결정하는 모듈
"""

import re
import logging
from typing import List, Optional, Union

from ..models.toc import HeadingRecord
from .markup import MarkupNode, parse_markup

# 로깅 설정
logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2")
EMOTICON_TAG = "ac:emoticon"
EMOJI_FALLBACK_ATTR = "ac:emoji-fallback"

_WHITESPACE_RE = re.compile(r"\s+")
_HYPHENS_RE = re.compile(r"-+")


def collapse_whitespace(text: Optional[str]) -> str:
    """연속된 공백을 하나로 줄이고 앞뒤 공백을 제거합니다."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def normalize_fragment(text: Optional[str]) -> str:
    """앵커용 텍스트 정규화: 공백은 하이픈으로, 연속 하이픈은 하나로 (대소문자 유지)"""
    fragment = _WHITESPACE_RE.sub("-", (text or "").strip())
    return _HYPHENS_RE.sub("-", fragment)


def _first_with_attr(nodes: List[MarkupNode], name: str) -> Optional[MarkupNode]:
    for node in nodes:
        if node.attr(name) is not None:
            return node
    return None


def resolve_anchor(heading: MarkupNode) -> str:
    """
    제목 요소의 앵커 ID를 결정합니다.

    우선순위:
        1. 제목 요소 자체의 id 속성
        2. 하위 <a> 중 id 속성을 가진 첫 요소의 id
        3. 하위 <a> 중 name 속성을 가진 첫 요소의 name
        4. 이모지 마커가 있으면 "<fallback>-<나머지 텍스트>"
        5. 그 외에는 정규화된 제목 텍스트

    Args:
        heading: 제목 요소

    Returns:
        앵커 ID
    """
    explicit_id = heading.attr("id")
    if explicit_id:
        return explicit_id

    links = heading.find_all("a")
    for attr_name in ("id", "name"):
        link = _first_with_attr(links, attr_name)
        if link is not None and link.attr(attr_name):
            return link.attr(attr_name)

    marker = _first_with_attr(heading.find_all(EMOTICON_TAG), EMOJI_FALLBACK_ATTR)
    if marker is None:
        return normalize_fragment(heading.text())

    fallback = marker.attr(EMOJI_FALLBACK_ATTR)
    rest = normalize_fragment(heading.text_without(EMOTICON_TAG))
    if not fallback:
        return rest or normalize_fragment(heading.text())

    return f"{fallback}-{rest}" if rest else fallback


def scan_headings(markup: Union[str, MarkupNode, None]) -> List[HeadingRecord]:
    """
    문서 순서대로 h1, h2 제목을 추출합니다.

    텍스트가 비어 있는 제목은 건너뛰며, 순서 변경이나 중복 제거는 하지 않습니다.

    Args:
        markup: 마크업 문자열 또는 이미 파싱된 루트 노드

    Returns:
        제목 레코드 리스트
    """
    root = parse_markup(markup) if markup is None or isinstance(markup, str) else markup

    headings = []
    for node in root.find_all(*HEADING_TAGS):
        text = collapse_whitespace(node.text())
        if not text:
            continue

        level = int(node.name[1:])
        anchor_id = resolve_anchor(node)
        headings.append(HeadingRecord(level=level, text=text, anchor_id=anchor_id))

        logger.debug(f"제목 추가: {text} (레벨 {level}, 앵커 {anchor_id})")

    logger.info(f"총 {len(headings)}개의 제목을 추출했습니다.")
    return headings
