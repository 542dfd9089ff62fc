"""
Registry-related types
Descriptors and render results served by the registry - follows MCP specification.
"""

from typing import Dict, List, Mapping, Optional, Callable, Tuple
from dataclasses import dataclass, field
from enum import Enum


class MCPErrorCode(Enum):
    """Protocol-facing error kinds raised by the registry."""
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    PROMPT_NOT_FOUND = "PROMPT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    CONTENT_LOAD_ERROR = "CONTENT_LOAD_ERROR"
    INVALID_MANIFEST = "INVALID_MANIFEST"
    DUPLICATE_URI = "DUPLICATE_URI"


@dataclass(frozen=True)
class ResourceDescriptor:
    """One manifest entry. `category` and `contentKey` never leave the server."""
    uri: str
    mimeType: str
    name: str
    description: str
    category: str
    contentKey: str


@dataclass(frozen=True)
class PromptArgument:
    """Declared prompt argument - follows MCP specification."""
    name: str
    description: str = ""
    required: bool = False


@dataclass(frozen=True)
class TextContent:
    """Text content of a prompt message - follows MCP specification."""
    type: str
    text: str


@dataclass(frozen=True)
class PromptMessage:
    """A single rendered prompt message."""
    role: str
    content: TextContent

    def to_dict(self) -> Dict[str, object]:
        return {
            "role": self.role,
            "content": {"type": self.content.type, "text": self.content.text},
        }


@dataclass(frozen=True)
class PromptRenderResult:
    """Output of a prompt render function."""
    description: str
    messages: Tuple[PromptMessage, ...] = ()


PromptArguments = Mapping[str, Optional[str]]
PromptRenderer = Callable[[PromptArguments], PromptRenderResult]


@dataclass(frozen=True)
class PromptDescriptor:
    """Prompt metadata plus its pure render function."""
    name: str
    description: str
    render: PromptRenderer = field(compare=False, repr=False)
    arguments: Tuple[PromptArgument, ...] = ()

    def metadata(self) -> Dict[str, object]:
        """Listing view of the prompt; never includes the render function."""
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [
                {"name": a.name, "description": a.description, "required": a.required}
                for a in self.arguments
            ],
        }


@dataclass(frozen=True)
class LoadFailure:
    """A manifest entry whose content could not be loaded during a bulk load."""
    uri: str
    category: str
    contentKey: str
    message: str


@dataclass
class BulkLoadResult:
    """Contents that loaded, keyed by uri, paired with per-entry failures."""
    contents: Dict[str, str] = field(default_factory=dict)
    failures: List[LoadFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
