import argparse
import asyncio
import json
import sys
from pathlib import Path

from loguru import logger

from core.config import settings
from core.exceptions import ScraperException
from services.extractor import NewsExtractor
from services.fetcher import HomepageFetcher


def _read_html(args: argparse.Namespace) -> str:
    if args.file:
        logger.info(f"Reading HTML from {args.file}")
        return Path(args.file).read_text(encoding="utf-8")
    return asyncio.run(HomepageFetcher().fetch(args.url))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Extract the homepage news feed as JSON.")
    parser.add_argument("--file", help="saved homepage HTML instead of a live fetch")
    parser.add_argument("--url", default=settings.HOMEPAGE_URL, help="page to fetch")
    parser.add_argument("--diagnostics", action="store_true", help="include per-section diagnostics")
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level=settings.LOG_LEVEL.upper())

    try:
        html = _read_html(args)
        result = NewsExtractor().extract(html, with_diagnostics=args.diagnostics)
    except ScraperException as exc:
        print(json.dumps(exc.to_dict(), ensure_ascii=False, indent=2))
        return 1
    except OSError as exc:
        logger.error(f"Cannot read {args.file}: {exc}")
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
