"""
문서 마크업 트리 추상화

스캐너는 특정 파서가 아니라 아래 MarkupNode 프로토콜(태그로 하위 요소 찾기,
속성 읽기, 텍스트 추출)에만 의존합니다. 기본 구현은 BeautifulSoup 기반입니다.
"""

import copy
from typing import List, Optional, Protocol

from bs4 import BeautifulSoup
from bs4.element import Tag


class MarkupNode(Protocol):
    """스캐너가 요구하는 최소한의 문서 트리 기능"""

    @property
    def name(self) -> str: ...

    def find_all(self, *names: str) -> List["MarkupNode"]: ...

    def attr(self, name: str) -> Optional[str]: ...

    def text(self) -> str: ...

    def text_without(self, *names: str) -> str: ...


class SoupNode:
    """BeautifulSoup Tag를 MarkupNode로 감싸는 어댑터"""

    def __init__(self, tag: Tag):
        self._tag = tag

    @property
    def name(self) -> str:
        return (self._tag.name or "").lower()

    def find_all(self, *names: str) -> List["SoupNode"]:
        """문서 순서대로 하위 요소를 찾습니다."""
        return [SoupNode(tag) for tag in self._tag.find_all(list(names))]

    def attr(self, name: str) -> Optional[str]:
        value = self._tag.get(name)
        if value is None:
            return None
        # class 같은 다중 값 속성은 리스트로 반환됨
        if isinstance(value, list):
            return " ".join(value)
        return value

    def text(self) -> str:
        return self._tag.get_text()

    def text_without(self, *names: str) -> str:
        """지정한 태그들을 제거한 복사본의 텍스트를 반환합니다."""
        clone = copy.copy(self._tag)
        for tag in clone.find_all(list(names)):
            tag.decompose()
        return clone.get_text()


def parse_markup(markup: Optional[str]) -> SoupNode:
    """
    마크업 문자열을 파싱하여 루트 노드를 반환합니다.

    Args:
        markup: HTML/스토리지 형식 마크업

    Returns:
        문서 루트 노드
    """
    return SoupNode(BeautifulSoup(markup or "", "html.parser"))
