import datetime
import logging
import re
from typing import List, Optional, Tuple

import yaml
from frontmatter.default_handlers import YAMLHandler

from blogindex.errors import DateFormatError, MalformedFrontMatterError, ValidationError
from blogindex.schemas.blog import Post
from blogindex.services.content_loader import RawDocument

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "pubDate")

DATE_FORMATS = (
    "%b %d %Y",  # Jul 08 2022
    "%B %d %Y",  # July 08 2022
    "%Y-%m-%d",
)

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_SEPT = re.compile(r"\bsept\b", re.IGNORECASE)
_SCALARS = (str, int, float)


class _PlainDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves date-looking scalars as strings."""


_PlainDateLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class FrontMatterHandler(YAMLHandler):
    def load(self, fm, **kwargs):
        return yaml.load(fm, Loader=_PlainDateLoader)


_handler = FrontMatterHandler()


def split_front_matter(text: str, path: str = "<string>") -> Tuple[dict, str]:
    """Split a document into its front-matter mapping and the body text."""
    text = text.lstrip("\ufeff").lstrip()
    if not _handler.detect(text):
        raise MalformedFrontMatterError(path, "Missing opening front-matter marker")

    try:
        fm, body = _handler.split(text)
    except ValueError:
        raise MalformedFrontMatterError(
            path, "Closing front-matter marker never found"
        )

    try:
        metadata = _handler.load(fm)
    except yaml.YAMLError as e:
        raise MalformedFrontMatterError(path, f"Invalid front matter: {e}")

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise MalformedFrontMatterError(
            path, f"Front matter must be a mapping, got {type(metadata).__name__}"
        )
    return metadata, body.lstrip("\r\n")


def parse_date(value, field: str, path: str = "<string>") -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    text = " ".join(str(value).replace(",", " ").split())
    text = _SEPT.sub("Sep", text)  # %b only knows "Sep"
    for fmt in DATE_FORMATS:
        try:
            return datetime.datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise DateFormatError(path, field, value)


def normalize_tags(value, path: str = "<string>") -> List[str]:
    """Accept a string or a sequence of scalars; anything else is invalid."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple)):
        for item in value:
            if item is not None and not isinstance(item, _SCALARS):
                raise ValidationError(
                    path, "tags", f"Tags must be strings, got {type(item).__name__}"
                )
        items = [str(item) for item in value if item]
    else:
        raise ValidationError(
            path, "tags", f"Tags must be a list of strings, got {type(value).__name__}"
        )

    tags = []
    seen = set()
    for item in items:
        tag = item.strip()
        key = tag.casefold()
        if not tag or key in seen:
            continue
        seen.add(key)
        tags.append(tag)
    return tags


def _required(metadata: dict, field: str, path: str) -> str:
    value = metadata.get(field)
    if value is None or not str(value).strip():
        raise ValidationError(path, field)
    return str(value).strip()


def _optional(metadata: dict, field: str) -> Optional[str]:
    value = metadata.get(field)
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def parse_post(document: RawDocument, slug: str) -> Post:
    """Build a Post from a raw document, raising a PostError subclass on failure."""
    metadata, body = split_front_matter(document.text, document.path)

    title, description, pub_date_raw = (
        _required(metadata, field, document.path) for field in REQUIRED_FIELDS
    )
    pub_date = parse_date(pub_date_raw, "pubDate", document.path)

    updated = _optional(metadata, "updatedDate")
    updated_date = (
        parse_date(updated, "updatedDate", document.path) if updated else None
    )

    post = Post(
        slug=slug,
        title=title,
        description=description,
        pubDate=pub_date,
        updatedDate=updated_date,
        heroImage=_optional(metadata, "heroImage"),
        tags=tuple(normalize_tags(metadata.get("tags"), document.path)),
        body=body,
        source_path=document.path,
    )
    logger.debug(f"Parsed {document.path} as {slug} ({post.pubDate})")
    return post
