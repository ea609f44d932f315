"""
문서별 오버라이드 레코드 저장소 구현

- MemoryOverrideStore: 프로세스 메모리 (테스트, 일회성 실행)
- JsonFileOverrideStore: 문서 ID를 키로 하는 단일 JSON 파일
- PostgresOverrideStore: toc_overrides 테이블 (JSONB)

모든 저장소는 레코드를 통째로 덮어쓰며 (부분 병합 없음),
읽을 때는 OverrideRecord.from_dict로 기본값을 채웁니다.
"""

import os
import json
import tempfile
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import psycopg
from psycopg.types.json import Jsonb

from ..models.overrides import OverrideRecord
from .database import setup_database

# 로깅 설정
logger = logging.getLogger(__name__)


class MemoryOverrideStore:
    """메모리 기반 오버라이드 저장소"""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}

    def load_override_record(self, document_id: str) -> Optional[OverrideRecord]:
        data = self._records.get(document_id)
        if data is None:
            return None
        return OverrideRecord.from_dict(data)

    def store_override_record(self, document_id: str, record: OverrideRecord) -> None:
        self._records[document_id] = record.to_dict()


class JsonFileOverrideStore:
    """JSON 파일 기반 오버라이드 저장소"""

    def __init__(self, path: str):
        """
        Args:
            path: 오버라이드를 저장할 JSON 파일 경로
        """
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"오버라이드 파일을 읽는 중 오류 발생: {e}")
            raise

        if not isinstance(data, dict):
            logger.warning(f"오버라이드 파일 형식이 올바르지 않습니다: {self.path}")
            return {}
        return data

    def load_override_record(self, document_id: str) -> Optional[OverrideRecord]:
        data = self._read_all().get(document_id)
        if data is None:
            return None
        return OverrideRecord.from_dict(data)

    def store_override_record(self, document_id: str, record: OverrideRecord) -> None:
        records = self._read_all()
        records[document_id] = record.to_dict()

        # 임시 파일에 먼저 쓰고 교체하여 저장 실패 시 기존 파일을 보존함
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        )
        try:
            with tmp as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp.name, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"오버라이드 파일 저장 중 오류 발생: {e}")
            Path(tmp.name).unlink(missing_ok=True)
            raise

        logger.info(f"오버라이드 저장: 문서 {document_id} -> {self.path}")


class PostgresOverrideStore:
    """PostgreSQL 기반 오버라이드 저장소"""

    def __init__(
        self,
        connection_string: str = "postgresql://user@localhost:5432/postgres",
        auto_setup: bool = False,
    ):
        """
        Args:
            connection_string: PostgreSQL 연결 문자열
            auto_setup: True면 초기화 시 테이블을 생성합니다
        """
        self.connection_string = connection_string

        if auto_setup:
            setup_database(connection_string)

    def load_override_record(self, document_id: str) -> Optional[OverrideRecord]:
        conn = None
        try:
            conn = psycopg.connect(self.connection_string)
            with conn.cursor() as cursor:
                cursor.execute(
                    "SELECT record FROM toc_overrides WHERE document_id = %s",
                    (document_id,),
                )
                row = cursor.fetchone()
        except Exception as e:
            logger.error(f"오버라이드 조회 중 오류 발생: {e}")
            raise
        finally:
            if conn:
                conn.close()

        if row is None:
            return None
        return OverrideRecord.from_dict(row[0])

    def store_override_record(self, document_id: str, record: OverrideRecord) -> None:
        conn = None
        try:
            conn = psycopg.connect(self.connection_string)
            with conn.cursor() as cursor:
                cursor.execute(
                    """
                    INSERT INTO toc_overrides (document_id, record)
                    VALUES (%s, %s)
                    ON CONFLICT (document_id) DO UPDATE SET record = EXCLUDED.record
                    """,
                    (document_id, Jsonb(record.to_dict())),
                )
            conn.commit()
            logger.info(f"오버라이드 저장: 문서 {document_id}")
        except Exception as e:
            logger.error(f"오버라이드 저장 중 오류 발생: {e}")
            raise
        finally:
            if conn:
                conn.close()
