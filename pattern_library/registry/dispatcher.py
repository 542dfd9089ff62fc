"""
Registry Dispatcher

Stateless facade over the manifest, prompt table and content loader. Each
call is a single lookup-and-delegate pass; failures propagate as typed
registry errors.
"""

import logging
from typing import Any, Dict, Optional

from pattern_library.mcp_types import BulkLoadResult, PromptArguments
from pattern_library.registry import responses
from pattern_library.registry.loader import ContentLoader
from pattern_library.registry.manifest import ManifestStore
from pattern_library.registry.prompts import PromptTable

logger = logging.getLogger(__name__)


class RegistryDispatcher:
    """Answers list/read/get requests for one server profile."""

    def __init__(
        self,
        manifest: ManifestStore,
        loader: ContentLoader,
        prompts: Optional[PromptTable] = None,
        name: str = "",
        version: str = "",
        description: str = "",
    ):
        self.manifest = manifest
        self.loader = loader
        self.prompts = prompts if prompts is not None else PromptTable()
        self.name = name
        self.version = version
        self.description = description

    def list_resources(self, category: Optional[str] = None, query: Optional[str] = None) -> Dict[str, Any]:
        """List resources, optionally narrowed by category and/or ranked by a search query."""
        if query:
            descriptors = self.manifest.search(query, category)
        elif category:
            descriptors = self.manifest.by_category(category)
        else:
            descriptors = list(self.manifest.list_all())
        return responses.resource_list(descriptors)

    def read_resource(self, uri: str) -> Dict[str, Any]:
        """
        Read one resource.

        Raises:
            ResourceNotFoundError: Unknown uri
            LoadError: Known uri whose content is missing or unreadable
        """
        descriptor = self.manifest.find_by_uri(uri)
        content = self.loader.load(descriptor.category, descriptor.contentKey)
        return responses.resource_content(uri, content, descriptor.mimeType)

    def list_prompts(self) -> Dict[str, Any]:
        return responses.prompt_list(self.prompts.list_all())

    def get_prompt(self, name: str, arguments: Optional[PromptArguments] = None) -> Dict[str, Any]:
        """
        Render a prompt.

        Raises:
            PromptNotFoundError: Unknown prompt name
        """
        result = self.prompts.render(name, arguments or {})
        return responses.prompt_response(result.description, result.messages)

    def verify(self) -> BulkLoadResult:
        """Load every manifest entry and log the ones that fail."""
        result = self.loader.load_all(self.manifest.list_all())
        for failure in result.failures:
            logger.warning(f"Resource {failure.uri} is unavailable: {failure.message}")
        logger.info(
            f"Verified {len(result.contents)}/{len(self.manifest)} resources"
            + (f", {len(result.failures)} failed" if result.failures else "")
        )
        return result

    def server_info(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "resourceCount": len(self.manifest),
            "promptCount": len(self.prompts),
            "categories": self.manifest.categories(),
            "prompts": [p.name for p in self.prompts.list_all()],
        }
