import textwrap
from pathlib import Path

import pytest

from blogindex.services.content_loader import RawDocument


def make_post(
    title="A Post",
    description="Something to read",
    pub_date="Jul 08 2022",
    tags=None,
    hero_image=None,
    body="Body text.",
    extra="",
) -> str:
    """Render a Markdown post with front matter; pass None to omit a field."""
    lines = ["---"]
    if title is not None:
        lines.append(f"title: '{title}'")
    if description is not None:
        lines.append(f"description: '{description}'")
    if pub_date is not None:
        lines.append(f"pubDate: '{pub_date}'")
    if hero_image is not None:
        lines.append(f"heroImage: '{hero_image}'")
    if tags is not None:
        lines.append("tags: [" + ", ".join(f"'{t}'" for t in tags) + "]")
    if extra:
        lines.append(textwrap.dedent(extra).strip())
    lines.append("---")
    lines.append(body)
    return "\n".join(lines) + "\n"


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    root = tmp_path / "blog"
    root.mkdir()
    return root


def write_post(root: Path, name: str, text: str) -> Path:
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class FakeLoader:
    """
    In-memory ContentLoader stand-in keyed by relative path.
    """

    def __init__(self, texts: dict[str, str], unreadable=None):
        self.texts = texts
        self.unreadable = list(unreadable or [])
        self.calls = []

    def read_documents(self, directory):
        self.calls.append(directory)
        documents = [RawDocument(path, self.texts[path]) for path in sorted(self.texts)]
        return documents, list(self.unreadable)
