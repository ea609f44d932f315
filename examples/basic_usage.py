#!/usr/bin/env python3
"""
pagetoc 패키지 기본 사용 예제

이 예제는 pagetoc를 Python 라이브러리로 사용하는 방법을 보여줍니다.
"""

import json

from pagetoc import (
    TocService,
    FetchResult,
    MemoryOverrideStore,
    ConfigPermissionChecker,
    scan_headings,
    assign_keys,
    format_toc_result,
)

SAMPLE_DOCUMENT = """
<h1>Intro</h1>
<p>Welcome.</p>
<h2 id="install-steps">Setup</h2>
<h2><ac:emoticon ac:name="rocket" ac:emoji-fallback="rocket" /> Getting Started</h2>
<h1>Intro</h1>
<h2>   </h2>
"""


class InlineSource:
    """메모리에 있는 문서 하나를 제공하는 예제 소스"""

    def fetch_document_body(self, document_id, format="storage"):
        if document_id != "100":
            return FetchResult(ok=False, status=404)
        return FetchResult(ok=True, status=200, body=SAMPLE_DOCUMENT, web_url="/pages/100")


def main():
    """기본 사용 예제"""
    print("📚 pagetoc 패키지 기본 사용 예제")
    print("=" * 50)

    # 1. 제목 추출과 키 부여
    for heading in assign_keys(scan_headings(SAMPLE_DOCUMENT)):
        print(f"  {heading.key:<20} #{heading.anchor_id}")

    # 2. 서비스 구성
    service = TocService(
        source=InlineSource(),
        store=MemoryOverrideStore(),
        permissions=ConfigPermissionChecker(),
        page_url_prefix="/wiki",
    )

    # 3. 오버라이드 저장
    result = service.save_overrides(
        {
            "documentId": "100",
            "hiddenKeys": ["intro::2"],
            "labelByKey": {"setup::1": "  Setup Guide  "},
        }
    )
    print(f"\n💾 저장 결과: {result.to_dict()}")

    # 4. 병합된 TOC 조회
    toc = service.get_toc({"contentId": "100"})
    print()
    print(format_toc_result(toc, include_hidden=True, show_keys=True))
    print()
    print(json.dumps(toc.to_dict(), ensure_ascii=False, indent=2))

    print("\n✨ 예제 완료!")


if __name__ == "__main__":
    main()
