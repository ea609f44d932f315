"""
제목 텍스트로부터 슬러그와 식별 키를 생성하는 모듈
"""

import re
import logging
from typing import List, Dict, Iterable, Optional

from ..models.toc import HeadingRecord, KeyedHeading

# 로깅 설정
logger = logging.getLogger(__name__)

SLUG_MAX_LENGTH = 80

_QUOTES_RE = re.compile("['\"‘’“”]")
_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: Optional[str]) -> str:
    """
    제목 텍스트를 소문자 하이픈 슬러그로 변환합니다.

    Args:
        text: 제목 텍스트

    Returns:
        최대 80자의 슬러그 (빈 입력이면 빈 문자열)
    """
    if not text:
        return ""

    slug = text.lower().strip()
    slug = _QUOTES_RE.sub("", slug)
    slug = _NON_SLUG_RE.sub("-", slug).strip("-")
    # 잘린 끝에 하이픈이 남지 않아야 멱등성이 유지됨
    return slug[:SLUG_MAX_LENGTH].rstrip("-")


def assign_keys(headings: Iterable[HeadingRecord]) -> List[KeyedHeading]:
    """
    문서 순서대로 제목마다 `slug::n` 형태의 키를 부여합니다.

    같은 슬러그가 반복되면 등장 순서에 따라 n이 증가합니다.
    카운터는 호출마다 새로 만들어지며 공유되지 않습니다.

    Args:
        headings: 스캔된 제목 목록

    Returns:
        키가 부여된 제목 목록
    """
    counts: Dict[str, int] = {}
    keyed = []

    for heading in headings:
        slug = slugify(heading.text)
        counts[slug] = counts.get(slug, 0) + 1
        keyed.append(KeyedHeading.from_heading(heading, f"{slug}::{counts[slug]}"))

    logger.debug(f"{len(keyed)}개의 제목에 키를 부여했습니다.")
    return keyed
