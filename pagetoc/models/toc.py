"""TOC (Table of Contents) related data models."""

from typing import Dict, Any
from dataclasses import dataclass


@dataclass(frozen=True)
class HeadingRecord:
    """스캔 한 번으로 추출된 제목 하나를 나타내는 데이터 클래스"""

    level: int
    text: str
    anchor_id: str


@dataclass(frozen=True)
class KeyedHeading:
    """식별 키가 부여된 제목"""

    level: int
    text: str
    anchor_id: str
    key: str

    @classmethod
    def from_heading(cls, heading: HeadingRecord, key: str) -> "KeyedHeading":
        return cls(
            level=heading.level,
            text=heading.text,
            anchor_id=heading.anchor_id,
            key=key,
        )


@dataclass(frozen=True)
class TocItem:
    """오버라이드가 반영된 최종 TOC 항목"""

    key: str
    level: int
    text: str
    anchor_id: str
    hidden: bool
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "level": self.level,
            "text": self.text,
            "anchorId": self.anchor_id,
            "hidden": self.hidden,
            "label": self.label,
        }
