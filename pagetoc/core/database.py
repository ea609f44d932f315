"""
PostgreSQL 데이터베이스 스키마 설정 모듈
문서별 TOC 오버라이드를 저장하는 toc_overrides 테이블을 생성합니다.
"""

import psycopg
import logging

# 로깅 설정
logger = logging.getLogger(__name__)


def setup_database(connection_string="postgresql://user@localhost:5432/postgres"):
    """
    데이터베이스 스키마를 설정합니다.

    Args:
        connection_string (str): PostgreSQL 연결 문자열
    """
    try:
        # 데이터베이스 연결
        conn = psycopg.connect(connection_string)
        conn.autocommit = True
        cursor = conn.cursor()

        logger.info("데이터베이스에 연결되었습니다.")

        # toc_overrides 테이블 생성
        logger.info("toc_overrides 테이블을 생성하는 중...")

        create_table_query = """
        CREATE TABLE IF NOT EXISTS toc_overrides (
            document_id TEXT PRIMARY KEY,
            record JSONB NOT NULL,
            created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
        );
        """

        cursor.execute(create_table_query)
        logger.info("toc_overrides 테이블이 생성되었습니다.")

        # 업데이트 트리거 함수 생성
        cursor.execute("""
            CREATE OR REPLACE FUNCTION update_updated_at_column()
            RETURNS TRIGGER AS $$
            BEGIN
               NEW.updated_at = CURRENT_TIMESTAMP;
               RETURN NEW;
            END;
            $$ language 'plpgsql';
        """)

        # 트리거가 이미 존재하는지 확인
        cursor.execute("""
            SELECT EXISTS (
                SELECT 1 FROM pg_trigger
                WHERE tgname = 'update_toc_overrides_updated_at'
            );
        """)

        trigger_exists = cursor.fetchone()[0]
        if not trigger_exists:
            cursor.execute("""
                CREATE TRIGGER update_toc_overrides_updated_at
                BEFORE UPDATE ON toc_overrides
                FOR EACH ROW EXECUTE FUNCTION update_updated_at_column();
            """)
            logger.info("업데이트 트리거가 생성되었습니다.")
        else:
            logger.info("업데이트 트리거가 이미 존재합니다.")

        logger.info("데이터베이스 스키마 설정이 완료되었습니다.")

        # 연결 종료
        cursor.close()
        conn.close()

    except Exception as e:
        logger.error(f"데이터베이스 설정 중 오류가 발생했습니다: {e}")
        raise


def check_database_status(
    connection_string="postgresql://user@localhost:5432/postgres",
):
    """
    데이터베이스 상태를 확인합니다.

    Args:
        connection_string (str): PostgreSQL 연결 문자열

    Returns:
        테이블 존재 여부와 저장된 오버라이드 수
    """
    try:
        conn = psycopg.connect(connection_string)
        cursor = conn.cursor()

        # 테이블 존재 확인
        cursor.execute("""
            SELECT EXISTS (
                SELECT FROM information_schema.tables
                WHERE table_schema = 'public'
                AND table_name = 'toc_overrides'
            );
        """)
        table_exists = cursor.fetchone()[0]
        logger.info(f"toc_overrides 테이블 존재 여부: {table_exists}")

        record_count = 0
        if table_exists:
            cursor.execute("SELECT COUNT(*) FROM toc_overrides;")
            record_count = cursor.fetchone()[0]
            logger.info(f"저장된 오버라이드 수: {record_count}")

        cursor.close()
        conn.close()

        return {"table_exists": table_exists, "record_count": record_count}

    except Exception as e:
        logger.error(f"데이터베이스 상태 확인 중 오류가 발생했습니다: {e}")
        raise
