import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from blogindex.errors import DuplicateSlugError, PostError
from blogindex.schemas.blog import BlogIndex, Post, PostDetail, PostSummary, SkippedFile
from blogindex.services.content_loader import ContentLoader, slug_for
from blogindex.services.frontmatter_parser import parse_post
from blogindex.services.index_builder import build_index, sort_posts, summarize, tag_key
from blogindex.settings import settings

logger = logging.getLogger(__name__)


class PostsService:
    def __init__(
        self,
        loader: Optional[ContentLoader] = None,
        content_dir: Union[str, Path, None] = None,
        duplicate_slugs: Optional[str] = None,
        *,
        parse_post_fn=None,
    ):
        self.loader = loader or ContentLoader()
        self.content_dir = Path(content_dir) if content_dir else settings.content_path
        self.duplicate_slugs = duplicate_slugs or settings.DUPLICATE_SLUG_POLICY
        self.parse_post_fn = parse_post_fn or parse_post
        self._published: Optional[Tuple[Tuple[Post, ...], BlogIndex]] = None

    def load(self) -> BlogIndex:
        """Run one load pass and publish the resulting collection.

        Per-file problems are logged and reported in `BlogIndex.skipped`.
        A missing content directory raises NotFoundError. A duplicate slug
        raises DuplicateSlugError when the policy is "fatal".
        """
        documents, unreadable = self.loader.read_documents(self.content_dir)
        errors: List[PostError] = list(unreadable)

        posts: Dict[str, Post] = {}
        for document in documents:
            slug = slug_for(document.path)
            if slug in posts:
                error = DuplicateSlugError(document.path, slug, posts[slug].source_path)
                if self.duplicate_slugs == "fatal":
                    raise error
                logger.warning(f"Skipping {document.path}: {error}")
                errors.append(error)
                continue

            try:
                posts[slug] = self.parse_post_fn(document, slug)
            except PostError as e:
                logger.warning(f"Skipping {document.path}: {e}")
                errors.append(e)

        skipped = [SkippedFile.from_error(e) for e in errors]
        ordered = tuple(sort_posts(posts.values()))
        index = build_index(ordered, skipped)

        self._published = (ordered, index)
        logger.info(
            f"Loaded {len(ordered)} posts from {self.content_dir} "
            f"({len(skipped)} skipped, {len(index.tags)} tags)"
        )
        return index

    def published(self) -> Tuple[Tuple[Post, ...], BlogIndex]:
        """The last published (posts, index) pair, loading on first use."""
        published = self._published
        if published is None:
            self.load()
            published = self._published
        return published

    @property
    def posts(self) -> Tuple[Post, ...]:
        return self.published()[0]

    @property
    def index(self) -> BlogIndex:
        return self.published()[1]

    def list_posts(self) -> List[PostSummary]:
        return list(self.index.posts)

    def get_post(self, slug: str) -> Optional[PostDetail]:
        post = next((p for p in self.posts if p.slug == slug), None)
        if not post:
            return None
        return PostDetail(**summarize(post).model_dump(), body=post.body)

    def posts_for_tag(self, tag: str) -> List[PostSummary]:
        _, index = self.published()
        slugs = set(index.tags.get(tag_key(tag), []))
        return [p for p in index.posts if p.slug in slugs]
