"""Resource and prompt registry."""

from .errors import (
    RegistryError,
    NotFoundError,
    ResourceNotFoundError,
    PromptNotFoundError,
    ProfileNotFoundError,
    LoadError,
    ManifestError,
    DuplicateUriError,
)
from .manifest import ManifestStore, parse_manifest
from .loader import ContentCache, ContentLoader
from .prompts import PromptTable, PromptTemplate, parse_prompts
from .dispatcher import RegistryDispatcher

__all__ = [
    "RegistryError",
    "NotFoundError",
    "ResourceNotFoundError",
    "PromptNotFoundError",
    "ProfileNotFoundError",
    "LoadError",
    "ManifestError",
    "DuplicateUriError",
    "ManifestStore",
    "parse_manifest",
    "ContentCache",
    "ContentLoader",
    "PromptTable",
    "PromptTemplate",
    "parse_prompts",
    "RegistryDispatcher",
]
