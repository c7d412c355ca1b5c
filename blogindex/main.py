import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from blogindex.errors import DuplicateSlugError, NotFoundError
from blogindex.services.content_loader import ContentLoader
from blogindex.services.posts_service import PostsService
from blogindex.settings import settings

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Index a directory of Markdown blog posts as JSON."
    )
    parser.add_argument(
        "content_dir",
        nargs="?",
        default=settings.CONTENT_DIR,
        help=f"Directory of posts (default: {settings.CONTENT_DIR})",
    )
    parser.add_argument("-o", "--output", help="Write JSON here instead of stdout")
    parser.add_argument(
        "--workers",
        type=int,
        default=settings.MAX_WORKERS,
        help="Read files on this many threads",
    )
    parser.add_argument(
        "--fail-on-duplicate",
        action="store_true",
        help="Abort when two files resolve to the same slug",
    )
    parser.add_argument("--log-level", default=None)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    service = PostsService(
        loader=ContentLoader(max_workers=args.workers),
        content_dir=args.content_dir,
        duplicate_slugs="fatal" if args.fail_on_duplicate else None,
    )
    try:
        index = service.load()
    except (NotFoundError, DuplicateSlugError) as e:
        logger.error(str(e))
        return 1

    payload = index.model_dump_json(indent=2)
    if args.output:
        Path(args.output).write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Wrote index to {args.output}")
    else:
        sys.stdout.write(payload + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
