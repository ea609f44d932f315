"""
문서 본문 소스 구현

문서 ID는 숫자 문자열이며, 조회 결과는 HTTP 상태 코드와 같은 의미의
status를 담은 FetchResult로 반환합니다.
"""

import logging
from pathlib import Path
from typing import List, Optional

import ebooklib
from ebooklib import epub

from ..models.overrides import FetchResult
from .service import is_document_id

# 로깅 설정
logger = logging.getLogger(__name__)

STORAGE_FORMAT = "storage"
DOCUMENT_SUFFIXES = (".html", ".xhtml", ".htm")


class DirectorySource:
    """`<root>/<문서 ID>.html` 파일들을 문서로 제공하는 소스"""

    def __init__(self, root: str):
        """
        Args:
            root: 문서 파일들이 있는 디렉터리
        """
        self.root = Path(root)

    def _find_file(self, document_id: str) -> Optional[Path]:
        if not self.root.is_dir():
            return None

        # 확장자 대소문자를 무시하며, 여러 개면 DOCUMENT_SUFFIXES 순서를 따름
        candidates = {
            path.suffix.lower(): path
            for path in sorted(self.root.iterdir())
            if path.stem == document_id
            and path.suffix.lower() in DOCUMENT_SUFFIXES
            and path.is_file()
        }
        for suffix in DOCUMENT_SUFFIXES:
            if suffix in candidates:
                return candidates[suffix]
        return None

    def document_ids(self) -> List[str]:
        """디렉터리에 있는 문서 ID를 숫자 순서로 반환합니다."""
        if not self.root.is_dir():
            logger.warning(f"문서 디렉터리를 찾을 수 없습니다: {self.root}")
            return []

        ids = {
            path.stem
            for path in self.root.iterdir()
            if path.suffix.lower() in DOCUMENT_SUFFIXES and is_document_id(path.stem)
        }
        return sorted(ids, key=int)

    def fetch_document_body(
        self, document_id: str, format: str = STORAGE_FORMAT
    ) -> FetchResult:
        """
        문서 파일을 읽습니다.

        Args:
            document_id: 숫자 문서 ID
            format: 본문 형식 (storage만 지원)

        Returns:
            조회 결과
        """
        if format != STORAGE_FORMAT:
            return FetchResult(ok=False, status=415)

        # 숫자 ID만 허용하므로 경로 탈출이 불가능함
        if not is_document_id(document_id):
            return FetchResult(ok=False, status=400)

        path = self._find_file(document_id)
        if path is None:
            logger.warning(f"문서 파일을 찾을 수 없습니다: {document_id}")
            return FetchResult(ok=False, status=404)

        try:
            body = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.error(f"문서 파일을 읽는 중 오류 발생: {e}")
            raise

        logger.debug(f"문서 {document_id} 본문 길이: {len(body)}자")
        return FetchResult(ok=True, status=200, body=body, web_url=path.name)


class EpubSource:
    """EPUB 책의 문서 항목들을 spine 순서대로 1부터 번호를 매겨 제공하는 소스"""

    def __init__(self, epub_file_path: str):
        """
        Args:
            epub_file_path: EPUB 파일 경로
        """
        self.epub_file_path = epub_file_path
        self._documents: Optional[List[epub.EpubItem]] = None

    def _load_documents(self) -> List[epub.EpubItem]:
        if self._documents is not None:
            return self._documents

        logger.info(f"EPUB 파일을 읽는 중: {self.epub_file_path}")

        try:
            book = epub.read_epub(self.epub_file_path)
        except Exception as e:
            logger.error(f"EPUB 파일을 읽는 중 오류 발생: {e}")
            raise

        documents = []
        for idref, _linear in book.spine:
            item = book.get_item_with_id(idref)
            if item is not None and item.get_type() == ebooklib.ITEM_DOCUMENT:
                documents.append(item)

        logger.info(f"총 {len(documents)}개의 문서 항목을 찾았습니다.")
        self._documents = documents
        return documents

    def document_ids(self) -> List[str]:
        return [str(i) for i in range(1, len(self._load_documents()) + 1)]

    def fetch_document_body(
        self, document_id: str, format: str = STORAGE_FORMAT
    ) -> FetchResult:
        """
        spine에서 document_id번째 문서의 HTML을 반환합니다.

        Args:
            document_id: 1부터 시작하는 숫자 문서 ID
            format: 본문 형식 (storage만 지원)

        Returns:
            조회 결과
        """
        if format != STORAGE_FORMAT:
            return FetchResult(ok=False, status=415)

        if not is_document_id(document_id):
            return FetchResult(ok=False, status=400)

        documents = self._load_documents()
        index = int(document_id) - 1
        if not 0 <= index < len(documents):
            logger.warning(f"문서 항목을 찾을 수 없습니다: {document_id}")
            return FetchResult(ok=False, status=404)

        item = documents[index]
        body = item.get_content().decode("utf-8", errors="ignore")
        return FetchResult(ok=True, status=200, body=body, web_url=item.get_name())
