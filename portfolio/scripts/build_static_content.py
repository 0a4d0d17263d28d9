# portfolio/scripts/build_static_content.py
"""
Builds static JSON and copies article assets for static hosting.

    python -m portfolio.scripts.build_static_content [--content-dir DIR] [--public-dir DIR]

ENV (via .env locally): CONTENT_DIR, PUBLIC_DIR, LOG_LEVEL
"""
import argparse
import sys

from portfolio import configure_logging
from portfolio.builder import IndexBuilder
from portfolio.config import Settings


def main(argv=None) -> int:
    from dotenv import load_dotenv; load_dotenv()
    settings = Settings.from_env()

    p = argparse.ArgumentParser(description="Export articles into a static JSON/asset tree.")
    p.add_argument("--content-dir", default=str(settings.content_dir))
    p.add_argument("--public-dir", default=str(settings.public_dir))
    args = p.parse_args(argv)

    configure_logging(settings.log_level)
    report = IndexBuilder(args.content_dir, args.public_dir).build()
    print(f"Static content built: {len(report.articles)} articles, {report.assets} assets")
    if report.skipped:
        print(f"Skipped: {', '.join(report.skipped)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
