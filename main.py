#!/usr/bin/env python3
"""
문서 목차(TOC) 추출 및 오버라이드 관리 통합 실행 스크립트
"""

import sys
import json
import argparse
import logging

from tqdm import tqdm

from pagetoc import (
    Config,
    validate_config,
    TocService,
    DirectorySource,
    EpubSource,
    MemoryOverrideStore,
    JsonFileOverrideStore,
    PostgresOverrideStore,
    ConfigPermissionChecker,
    setup_database,
    check_database_status,
    format_toc_result,
)

logger = logging.getLogger(__name__)


def build_service(args, config: Config) -> TocService:
    """명령행 인수와 설정으로 TocService를 구성합니다."""
    source_kind = args.source or config.document_source
    document_path = args.path or config.document_path
    store_kind = args.store or config.override_store
    overrides_path = args.overrides_path or config.overrides_path

    if source_kind == "epub":
        source = EpubSource(document_path)
    else:
        source = DirectorySource(document_path)

    if store_kind == "postgres":
        store = PostgresOverrideStore(config.database_url)
    elif store_kind == "memory":
        store = MemoryOverrideStore()
    else:
        store = JsonFileOverrideStore(overrides_path)

    permissions = ConfigPermissionChecker(
        edit_enabled=config.EDIT_ENABLED,
        editable_documents=config.editable_documents,
    )

    return TocService(
        source=source,
        store=store,
        permissions=permissions,
        page_url_prefix=config.PAGE_URL_PREFIX,
    )


def parse_labels(pairs):
    """KEY=TEXT 형식의 라벨 인수를 매핑으로 변환합니다."""
    labels = {}
    for pair in pairs or []:
        key, sep, text = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"라벨 형식이 올바르지 않습니다 (KEY=TEXT): {pair}")
        labels[key] = text
    return labels


def setup_command(args):
    """데이터베이스 설정 명령"""
    try:
        config = Config()
        validate_config(config)
        setup_database(config.database_url)
        print("✅ 데이터베이스 설정이 완료되었습니다.")
    except Exception as e:
        logger.error(f"데이터베이스 설정 중 오류 발생: {e}")
        return 1
    return 0


def status_command(args):
    """데이터베이스 상태 확인 명령"""
    try:
        config = Config()
        status = check_database_status(config.database_url)
        if status["table_exists"]:
            print(f"✅ toc_overrides 테이블 존재 (저장된 오버라이드 {status['record_count']}개)")
        else:
            print("⚠️  toc_overrides 테이블이 없습니다. 'setup' 명령을 먼저 실행하세요.")
    except Exception as e:
        logger.error(f"데이터베이스 상태 확인 중 오류 발생: {e}")
        return 1
    return 0


def toc_command(args):
    """문서 TOC 출력 명령"""
    try:
        config = Config()
        validate_config(config)
        service = build_service(args, config)

        result = service.get_toc({"contentId": args.document_id})

        if args.json:
            print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        else:
            print(
                format_toc_result(
                    result, include_hidden=args.all, show_keys=args.show_keys
                )
            )
    except Exception as e:
        logger.error(f"TOC 조회 중 오류 발생: {e}")
        return 1
    return 0


def save_command(args):
    """오버라이드 저장 명령"""
    try:
        config = Config()
        validate_config(config)
        service = build_service(args, config)

        payload = {
            "documentId": args.document_id,
            "hiddenKeys": args.hide or [],
            "labelByKey": parse_labels(args.label),
        }
        result = service.save_overrides(payload)

        if not result.ok:
            print(f"❌ 저장 실패: {result.error}")
            return 1

        print(f"✅ 문서 {args.document_id}의 오버라이드를 저장했습니다.")
    except Exception as e:
        logger.error(f"오버라이드 저장 중 오류 발생: {e}")
        return 1
    return 0


def list_command(args):
    """소스의 전체 문서 목록 출력 명령"""
    try:
        config = Config()
        validate_config(config)
        service = build_service(args, config)

        document_ids = service.source.document_ids()
        if not document_ids:
            print("📭 문서가 없습니다.")
            return 0

        rows = []
        for document_id in tqdm(document_ids, desc="TOC 추출"):
            result = service.get_toc({"contentId": document_id})
            hidden = sum(1 for item in result.items if item.hidden)
            rows.append((document_id, len(result.items), hidden, result.page_url))

        print(f"📚 문서 {len(rows)}개:")
        for document_id, total, hidden, page_url in rows:
            print(f"  {document_id:>5}  제목 {total}개 (숨김 {hidden}개)  {page_url or ''}")
    except Exception as e:
        logger.error(f"문서 목록 조회 중 오류 발생: {e}")
        return 1
    return 0


def create_parser():
    """명령행 인수 파서 생성"""
    parser = argparse.ArgumentParser(
        description="문서 목차(TOC) 추출 및 오버라이드 관리",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예제:
  # 데이터베이스 설정 (postgres 저장소 사용 시)
  python main.py setup

  # 문서 TOC 출력
  python main.py --path docs toc 12345 --all --show-keys

  # 항목 숨김 및 라벨 변경
  python main.py --path docs save 12345 --hide intro::1 --label "setup::1=Setup Guide"

  # EPUB 책의 전체 문서 목록
  python main.py --source epub --path book.epub list
        """,
    )

    parser.add_argument(
        "--source", choices=["directory", "epub"], help="문서 소스 종류"
    )
    parser.add_argument("--path", help="문서 디렉터리 또는 EPUB 파일 경로")
    parser.add_argument(
        "--store", choices=["json", "postgres", "memory"], help="오버라이드 저장소 종류"
    )
    parser.add_argument("--overrides-path", help="JSON 오버라이드 파일 경로")

    subparsers = parser.add_subparsers(dest="command", help="사용 가능한 명령어")

    # setup 명령
    subparsers.add_parser("setup", help="데이터베이스 설정")

    # status 명령
    subparsers.add_parser("status", help="데이터베이스 상태 확인")

    # toc 명령
    toc_parser = subparsers.add_parser("toc", help="문서 TOC 출력")
    toc_parser.add_argument("document_id", help="문서 ID")
    toc_parser.add_argument("--json", action="store_true", help="JSON 형식으로 출력")
    toc_parser.add_argument("--all", action="store_true", help="숨김 항목도 표시")
    toc_parser.add_argument(
        "--show-keys", action="store_true", help="항목 키와 앵커 표시"
    )

    # save 명령
    save_parser = subparsers.add_parser("save", help="오버라이드 저장 (기존 값 대체)")
    save_parser.add_argument("document_id", help="문서 ID")
    save_parser.add_argument(
        "--hide", action="append", metavar="KEY", help="숨길 항목 키 (반복 가능)"
    )
    save_parser.add_argument(
        "--label", action="append", metavar="KEY=TEXT", help="항목 라벨 (반복 가능)"
    )

    # list 명령
    subparsers.add_parser("list", help="소스의 전체 문서와 제목 수 출력")

    return parser


def main(argv=None):
    """메인 함수"""
    logging.basicConfig(
        level=Config.LOG_LEVEL, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    # 명령 실행
    if args.command == "setup":
        return setup_command(args)
    elif args.command == "status":
        return status_command(args)
    elif args.command == "toc":
        return toc_command(args)
    elif args.command == "save":
        return save_command(args)
    elif args.command == "list":
        return list_command(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
