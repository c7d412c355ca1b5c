import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Tuple, Union

from blogindex.errors import NotFoundError, UnreadableFileError
from blogindex.settings import normalize_extensions, settings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class RawDocument(NamedTuple):
    path: str  # relative to the content directory, POSIX separators
    text: str


def slug_for(path: str) -> str:
    """Derive a slug from a relative file path: drop the extension, lowercase."""
    base = path.rsplit(".", 1)[0] if "." in Path(path).name else path
    base = base.replace("\\", "/").strip("/")
    return _WHITESPACE.sub("-", base.strip()).lower()


class ContentLoader:
    def __init__(
        self,
        extensions: Optional[Iterable[str]] = None,
        max_workers: Optional[int] = None,
    ):
        self.extensions = (
            normalize_extensions(extensions)
            if extensions is not None
            else settings.normalized_extensions
        )
        self.max_workers = max_workers or settings.MAX_WORKERS

    def read_documents(
        self, directory: Union[str, Path]
    ) -> Tuple[List[RawDocument], List[UnreadableFileError]]:
        """Read every Markdown file under `directory`.

        Unreadable files are returned separately instead of raising, so one
        bad file never aborts the pass. Only a missing directory is fatal.
        """
        root = Path(directory)
        if not root.is_dir():
            raise NotFoundError(str(root))

        paths = self.find_files(root)
        logger.debug(f"Found {len(paths)} content files under {root}")

        if self.max_workers > 1 and len(paths) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                results = list(pool.map(lambda p: self._read(root, p), paths))
        else:
            results = [self._read(root, p) for p in paths]

        documents: List[RawDocument] = []
        errors: List[UnreadableFileError] = []
        for result in results:
            if isinstance(result, UnreadableFileError):
                logger.warning(f"Skipping unreadable file {result.path}: {result}")
                errors.append(result)
            else:
                documents.append(result)
        return documents, errors

    def find_files(self, root: Path) -> List[Path]:
        return sorted(
            p
            for p in root.rglob("*")
            if p.is_file() and p.suffix.lower() in self.extensions
        )

    @staticmethod
    def _read(root: Path, path: Path) -> Union[RawDocument, UnreadableFileError]:
        relative = path.relative_to(root).as_posix()
        try:
            return RawDocument(relative, path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            return UnreadableFileError(relative, f"Not valid UTF-8: {e}")
        except OSError as e:
            return UnreadableFileError(relative, f"Cannot read file: {e}")
