import logging
from typing import Dict, Iterable, List, Optional

from blogindex.schemas.blog import BlogIndex, Post, PostSummary, SkippedFile
from blogindex.settings import settings
from blogindex.utils import calculate_reading_time

logger = logging.getLogger(__name__)


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Newest first; posts sharing a date are ordered by slug."""
    ordered = sorted(posts, key=lambda p: p.slug)
    ordered.sort(key=lambda p: p.pubDate, reverse=True)
    return ordered


def tag_key(tag: str) -> str:
    return tag.casefold()


def build_tag_index(posts: Iterable[Post]) -> Dict[str, List[str]]:
    index: Dict[str, List[str]] = {}
    for post in sort_posts(posts):
        for tag in post.tags:
            index.setdefault(tag_key(tag), []).append(post.slug)
    return {tag: index[tag] for tag in sorted(index)}


def summarize(post: Post, words_per_minute: Optional[int] = None) -> PostSummary:
    return PostSummary(
        slug=post.slug,
        title=post.title,
        description=post.description,
        pubDate=post.pubDate,
        updatedDate=post.updatedDate,
        heroImage=post.heroImage,
        tags=list(post.tags),
        readingTime=calculate_reading_time(
            post.body, words_per_minute or settings.WORDS_PER_MINUTE
        ),
        source_path=post.source_path,
    )


def build_index(
    posts: Iterable[Post],
    skipped: Iterable[SkippedFile] = (),
    *,
    words_per_minute: Optional[int] = None,
) -> BlogIndex:
    ordered = sort_posts(posts)
    index = BlogIndex(
        posts=[summarize(p, words_per_minute) for p in ordered],
        tags=build_tag_index(ordered),
        skipped=sorted(skipped, key=lambda s: s.path),
    )
    logger.debug(f"Built index: {len(index.posts)} posts, {len(index.tags)} tags")
    return index
