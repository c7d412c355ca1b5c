from __future__ import annotations


class BlogIndexError(Exception):
    """Base exception for all blogindex errors."""


class NotFoundError(BlogIndexError):
    """Raised when the content directory does not exist."""

    def __init__(self, path: str, message: str | None = None) -> None:
        super().__init__(message or f"Content directory not found: {path}")
        self.path = path


class PostError(BlogIndexError):
    """Base error for a single post file that has to be skipped."""

    field: str | None = None

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path


class UnreadableFileError(PostError):
    """Raised when a post file cannot be read or decoded."""


class MalformedFrontMatterError(PostError):
    """Raised when the front-matter block is missing or cannot be loaded."""


class ValidationError(PostError):
    """Raised when a required front-matter field is missing or empty."""

    def __init__(self, path: str, field: str, message: str | None = None) -> None:
        super().__init__(path, message or f"Missing required field: {field}")
        self.field = field


class DateFormatError(ValidationError):
    """Raised when a date field is not in a recognized format."""

    def __init__(self, path: str, field: str, value) -> None:
        super().__init__(path, field, f"Unrecognized date for {field}: {value!r}")
        self.value = value


class DuplicateSlugError(PostError):
    """Raised when two files resolve to the same slug."""

    def __init__(self, path: str, slug: str, first_path: str) -> None:
        super().__init__(
            path, f"Slug {slug!r} already used by {first_path}"
        )
        self.slug = slug
        self.first_path = first_path
