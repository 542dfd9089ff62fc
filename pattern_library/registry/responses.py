"""
Response Builder
Pure functions that shape registry results into protocol envelopes.
"""

from typing import Any, Dict, Iterable, List

from pattern_library.mcp_types import PromptDescriptor, PromptMessage, ResourceDescriptor

DEFAULT_MIME_TYPE = "text/plain"


def resource_content(uri: str, content: str, mime_type: str = DEFAULT_MIME_TYPE) -> Dict[str, Any]:
    """Single-entry content envelope for a read."""
    return {
        "contents": [
            {"uri": uri, "mimeType": mime_type, "text": content},
        ]
    }


def resource_list(descriptors: Iterable[ResourceDescriptor]) -> Dict[str, Any]:
    """Resource listing; category and contentKey stay internal."""
    return {
        "resources": [
            {
                "uri": d.uri,
                "mimeType": d.mimeType,
                "name": d.name,
                "description": d.description,
            }
            for d in descriptors
        ]
    }


def prompt_response(description: str, messages: Iterable[PromptMessage]) -> Dict[str, Any]:
    return {
        "description": description,
        "messages": [m.to_dict() if isinstance(m, PromptMessage) else m for m in messages],
    }


def prompt_list(descriptors: Iterable[PromptDescriptor]) -> Dict[str, List[Dict[str, Any]]]:
    """Prompt listing from descriptor metadata only."""
    return {"prompts": [d.metadata() for d in descriptors]}
