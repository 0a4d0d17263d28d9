# portfolio/scripts/check_articles.py
import argparse
import sys

from portfolio.config import Settings
from portfolio.models import Article
from portfolio.store import ArticleStore


def check(store: ArticleStore):
    valid, unpublished, invalid = [], [], []
    for slug, item in store.scan():
        if not isinstance(item, Article):
            invalid.append((slug, item.detail))
        elif not item.metadata.published:
            unpublished.append(slug)
        else:
            valid.append(slug)
    return valid, unpublished, invalid


def main(argv=None) -> int:
    from dotenv import load_dotenv; load_dotenv()
    p = argparse.ArgumentParser(description="Report article folders that would be skipped.")
    p.add_argument("--content-dir", default=str(Settings.from_env().content_dir))
    args = p.parse_args(argv)

    valid, unpublished, invalid = check(ArticleStore(args.content_dir))
    print(f"Total: {len(valid) + len(unpublished) + len(invalid)}")
    print(f"Published: {len(valid)}")
    print(f"Unpublished: {len(unpublished)}")
    for slug in unpublished:
        print("-", slug)
    print(f"Invalid: {len(invalid)}")
    for slug, reason in invalid:
        print("-", slug, "|", reason[:200])
    return 1 if invalid else 0


if __name__ == "__main__":
    sys.exit(main())
