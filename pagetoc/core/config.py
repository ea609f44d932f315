"""
환경 설정 및 구성 관리
"""

import os
from typing import List, Optional, Set

from dotenv import load_dotenv

from .service import is_document_id

# 환경 변수 로드
load_dotenv()

OVERRIDE_STORES = ("json", "postgres", "memory")
DOCUMENT_SOURCES = ("directory", "epub")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    """애플리케이션 설정 클래스"""

    # 데이터베이스 설정
    DATABASE_URL = os.getenv(
        "DATABASE_URL", "postgresql://user@localhost:5432/postgres"
    )

    # 오버라이드 저장소 설정
    OVERRIDE_STORE = os.getenv("OVERRIDE_STORE", "json").lower()
    OVERRIDES_PATH = os.getenv("OVERRIDES_PATH", "toc_overrides.json")

    # 문서 소스 설정
    DOCUMENT_SOURCE = os.getenv("DOCUMENT_SOURCE", "directory").lower()
    DOCUMENT_PATH = os.getenv("DOCUMENT_PATH", "documents")

    # 편집 권한 설정
    EDIT_ENABLED = _env_flag("EDIT_ENABLED", "true")
    EDITABLE_DOCUMENTS = _env_list("EDITABLE_DOCUMENTS")

    # 페이지 URL 접두사
    PAGE_URL_PREFIX = os.getenv("PAGE_URL_PREFIX", "")

    # 로깅 설정
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @property
    def database_url(self):
        """데이터베이스 URL"""
        return self.DATABASE_URL

    @property
    def override_store(self):
        """오버라이드 저장소 종류"""
        return self.OVERRIDE_STORE

    @property
    def overrides_path(self):
        """JSON 오버라이드 파일 경로"""
        return self.OVERRIDES_PATH

    @property
    def document_source(self):
        """문서 소스 종류"""
        return self.DOCUMENT_SOURCE

    @property
    def document_path(self):
        """문서 디렉터리 또는 EPUB 파일 경로"""
        return self.DOCUMENT_PATH

    @property
    def editable_documents(self) -> Optional[Set[str]]:
        """편집 가능한 문서 ID 집합 (None이면 전체 허용)"""
        return set(self.EDITABLE_DOCUMENTS) if self.EDITABLE_DOCUMENTS else None

    @classmethod
    def validate(cls):
        """설정 유효성 검사"""
        errors = []

        if cls.OVERRIDE_STORE not in OVERRIDE_STORES:
            errors.append(
                f"OVERRIDE_STORE는 {', '.join(OVERRIDE_STORES)} 중 하나여야 합니다."
            )

        if cls.OVERRIDE_STORE == "postgres" and not cls.DATABASE_URL:
            errors.append("DATABASE_URL이 설정되지 않았습니다.")

        if cls.OVERRIDE_STORE == "json" and not cls.OVERRIDES_PATH:
            errors.append("OVERRIDES_PATH가 설정되지 않았습니다.")

        if cls.DOCUMENT_SOURCE not in DOCUMENT_SOURCES:
            errors.append(
                f"DOCUMENT_SOURCE는 {', '.join(DOCUMENT_SOURCES)} 중 하나여야 합니다."
            )

        if not cls.DOCUMENT_PATH:
            errors.append("DOCUMENT_PATH가 설정되지 않았습니다.")

        invalid_ids = [d for d in cls.EDITABLE_DOCUMENTS if not is_document_id(d)]
        if invalid_ids:
            errors.append(
                f"EDITABLE_DOCUMENTS에는 숫자 ID만 올 수 있습니다: {', '.join(invalid_ids)}"
            )

        return errors

    @classmethod
    def print_config(cls):
        """현재 설정을 출력합니다."""
        print("현재 설정:")
        print(f"  데이터베이스 URL: {cls.DATABASE_URL}")
        print(f"  오버라이드 저장소: {cls.OVERRIDE_STORE}")
        print(f"  오버라이드 파일: {cls.OVERRIDES_PATH}")
        print(f"  문서 소스: {cls.DOCUMENT_SOURCE}")
        print(f"  문서 경로: {cls.DOCUMENT_PATH}")
        print(f"  편집 허용: {'예' if cls.EDIT_ENABLED else '아니오'}")
        print(f"  편집 가능 문서: {', '.join(cls.EDITABLE_DOCUMENTS) or '전체'}")
        print(f"  페이지 URL 접두사: {cls.PAGE_URL_PREFIX or '(없음)'}")
        print(f"  로그 레벨: {cls.LOG_LEVEL}")


def validate_config(config: Config) -> None:
    """
    설정 유효성 검사 함수

    Args:
        config: Config 인스턴스

    Raises:
        ValueError: 설정이 유효하지 않은 경우
    """
    errors = config.validate()
    if errors:
        error_message = "설정 오류가 발견되었습니다:\n" + "\n".join(
            f"  - {error}" for error in errors
        )
        raise ValueError(error_message)
