#!/usr/bin/env python3
"""Simple runner script for the Markdown link extractor."""

import sys


def main():
    if "--help" in sys.argv[1:] or "-h" in sys.argv[1:]:
        print("""
Markdown Link Extractor - Markdown 링크 추출 + URL 정리

사용법:
    python run.py input.source_dir=DIR [옵션...]

옵션 (hydra override):
    output.format=FORMAT       stdout, text, csv, html (기본: stdout)
    output.path=FILE           출력 파일 (stdout 외 필수)
    filter.domain=DOMAIN       호스트에 포함되어야 하는 문자열
    filter.protocols=[a,b]     허용 프로토콜 (기본: [http,https])

예시:
    python run.py input.source_dir=./notes
    python run.py input.source_dir=./notes output.format=csv output.path=links.csv
""")
        return

    try:
        from link_extractor.main import main as extractor_main
    except ImportError as e:
        print(f"❌ 모듈 import 실패: {e}")
        print("\n설치 명령어:")
        print("  pip install -e .")
        sys.exit(1)

    extractor_main()


if __name__ == "__main__":
    main()
