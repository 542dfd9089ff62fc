"""
Content Loader

Resolves (category, content_key) pairs to text under a resources directory.
Loads lazily and caches every successful load for the process lifetime.

Layout:
    <resources_dir>/<category>/<content_key>.md
    <resources_dir>/<category>/<content_key>.txt
    <resources_dir>/<category>/<content_key>.json
    <resources_dir>/<category>/<content_key>      (key carries its own extension)
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional, Tuple

from pattern_library.mcp_types import BulkLoadResult, LoadFailure, ResourceDescriptor
from pattern_library.registry.errors import LoadError

logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".md", ".txt", ".json")

ContentReader = Callable[[Path], str]
CacheKey = Tuple[str, str]


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class ContentCache:
    """Process-lifetime cache of loaded content. Entries are never evicted."""

    def __init__(self):
        self._entries: Dict[CacheKey, str] = {}

    def get(self, key: CacheKey) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: CacheKey, value: str) -> None:
        # Concurrent misses may both write; the value is identical either way.
        self._entries[key] = value

    def has(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class ContentLoader:
    """
    Lazy, caching loader for content units.

    Args:
        resources_dir: Root directory holding one sub-directory per category
        cache: Cache to populate (default: a fresh ContentCache)
        reader: Function that reads a resolved path (default: UTF-8 read)
    """

    def __init__(
        self,
        resources_dir: Path,
        cache: Optional[ContentCache] = None,
        reader: Optional[ContentReader] = None,
    ):
        self.resources_dir = Path(resources_dir)
        self.cache = cache if cache is not None else ContentCache()
        self._reader = reader or read_text

    def load(self, category: str, content_key: str) -> str:
        """
        Load a content unit.

        Raises:
            LoadError: If the content cannot be located or read
        """
        key = (category, content_key)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        path = self.resolve(category, content_key)
        try:
            content = self._reader(path)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(category, content_key, e) from e

        self.cache.set(key, content)
        logger.debug(f"Loaded content {category}/{content_key} from {path}")
        return content

    def resolve(self, category: str, content_key: str) -> Path:
        """
        Find the file backing a content unit.

        Raises:
            LoadError: If no candidate exists or the pair escapes resources_dir
        """
        root = self.resources_dir.resolve()
        category_dir = (root / category).resolve()
        if not category_dir.is_relative_to(root) or category_dir == root:
            raise LoadError(category, content_key, ValueError("category outside content root"))

        base = category_dir / content_key
        candidates = [base.with_name(base.name + suffix) for suffix in CONTENT_SUFFIXES]
        candidates.append(base)

        for candidate in candidates:
            resolved = candidate.resolve()
            if not resolved.is_relative_to(category_dir):
                raise LoadError(category, content_key, ValueError("content key outside category"))
            if resolved.is_file():
                return resolved

        raise LoadError(category, content_key, FileNotFoundError(f"no content file for {base}"))

    def load_all(self, descriptors: Iterable[ResourceDescriptor]) -> BulkLoadResult:
        """
        Load every descriptor's content, collecting failures instead of
        stopping at the first one.
        """
        result = BulkLoadResult()
        for descriptor in descriptors:
            try:
                result.contents[descriptor.uri] = self.load(descriptor.category, descriptor.contentKey)
            except LoadError as e:
                result.failures.append(LoadFailure(
                    uri=descriptor.uri,
                    category=descriptor.category,
                    contentKey=descriptor.contentKey,
                    message=e.message,
                ))
        return result
