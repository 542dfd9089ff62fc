"""
Manifest Store

Ordered, immutable collection of resource descriptors. The ordered tuple is
the source of truth for listing; a uri index is built once for lookups.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from jsonschema import ValidationError, validate

from pattern_library.mcp_types import ResourceDescriptor
from pattern_library.registry.errors import DuplicateUriError, ManifestError, ResourceNotFoundError

logger = logging.getLogger(__name__)


MANIFEST_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "uri": {"type": "string", "minLength": 1},
            "mimeType": {"type": "string", "minLength": 1},
            "name": {"type": "string"},
            "description": {"type": "string"},
            "category": {"type": "string", "minLength": 1},
            "contentKey": {"type": "string", "minLength": 1},
        },
        "required": ["uri", "name", "category", "contentKey"],
    },
}


def parse_manifest(entries: Any, default_mime_type: str = "text/markdown") -> List[ResourceDescriptor]:
    """
    Validate raw manifest data and turn it into descriptors.

    Args:
        entries: Decoded JSON (list of objects)
        default_mime_type: Used for entries without a mimeType

    Raises:
        ManifestError: If the data does not match MANIFEST_SCHEMA
    """
    try:
        validate(instance=entries, schema=MANIFEST_SCHEMA)
    except ValidationError as e:
        path = "/".join(str(p) for p in e.path)
        raise ManifestError(f"Invalid manifest at '{path}': {e.message}") from e

    return [
        ResourceDescriptor(
            uri=entry["uri"],
            mimeType=entry.get("mimeType", default_mime_type),
            name=entry["name"],
            description=entry.get("description", ""),
            category=entry["category"],
            contentKey=entry["contentKey"],
        )
        for entry in entries
    ]


class ManifestStore:
    """Read-only manifest with O(1) uri lookup."""

    def __init__(self, descriptors: Iterable[ResourceDescriptor]):
        self._descriptors: Tuple[ResourceDescriptor, ...] = tuple(descriptors)
        self._by_uri: Dict[str, ResourceDescriptor] = {}

        for descriptor in self._descriptors:
            if descriptor.uri in self._by_uri:
                raise DuplicateUriError(descriptor.uri)
            self._by_uri[descriptor.uri] = descriptor

        logger.debug(f"Manifest built with {len(self._descriptors)} resources")

    def __len__(self) -> int:
        return len(self._descriptors)

    def list_all(self) -> Tuple[ResourceDescriptor, ...]:
        """All descriptors in insertion order."""
        return self._descriptors

    def find_by_uri(self, uri: str) -> ResourceDescriptor:
        """Look up a descriptor; raises ResourceNotFoundError on a miss."""
        try:
            return self._by_uri[uri]
        except KeyError:
            raise ResourceNotFoundError(uri) from None

    def categories(self) -> List[str]:
        """Distinct categories in order of first appearance."""
        return list(dict.fromkeys(d.category for d in self._descriptors))

    def by_category(self, category: str) -> List[ResourceDescriptor]:
        return [d for d in self._descriptors if d.category == category]

    def search(self, query: str, category: Optional[str] = None) -> List[ResourceDescriptor]:
        """
        Case-insensitive substring search over uri, name, description and
        category, best matches first. Ties keep manifest order. An empty
        query returns everything.

        Args:
            query: Text to look for
            category: Only search this category's descriptors
        """
        pool = self.by_category(category) if category else list(self._descriptors)
        needle = query.strip().lower()
        if not needle:
            return pool

        scored = [(relevance(needle, d), d) for d in pool]
        return [d for score, d in sorted(scored, key=lambda pair: -pair[0]) if score > 0]


def relevance(needle: str, descriptor: ResourceDescriptor) -> int:
    """Score a descriptor against a lowercase query; 0 means no match."""
    score = 0
    if descriptor.contentKey.lower() == needle:
        score += 100
    if needle in descriptor.uri.lower():
        score += 75
    if needle in descriptor.name.lower():
        score += 50
    if needle in descriptor.description.lower():
        score += 25
    if needle in descriptor.category.lower():
        score += 10
    return score
