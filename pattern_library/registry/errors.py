"""
Registry Errors

NotFoundError is a user-facing miss, LoadError is a content configuration
defect, ManifestError (and DuplicateUriError) abort start-up.
"""

from typing import Optional

from pattern_library.mcp_types import MCPErrorCode


class RegistryError(Exception):
    """Base class for all registry failures."""

    code: MCPErrorCode = MCPErrorCode.CONTENT_LOAD_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RegistryError):
    """A uri, prompt name or profile is not known to the registry."""

    code = MCPErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ResourceNotFoundError(NotFoundError):
    code = MCPErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, uri: str):
        super().__init__("Resource", uri)
        self.uri = uri


class PromptNotFoundError(NotFoundError):
    code = MCPErrorCode.PROMPT_NOT_FOUND

    def __init__(self, name: str):
        super().__init__("Prompt", name)
        self.name = name


class ProfileNotFoundError(NotFoundError):
    code = MCPErrorCode.PROFILE_NOT_FOUND

    def __init__(self, name: str):
        super().__init__("Profile", name)
        self.name = name


class LoadError(RegistryError):
    """Content referenced by the manifest could not be located or read."""

    code = MCPErrorCode.CONTENT_LOAD_ERROR

    def __init__(self, category: str, content_key: str, cause: Optional[BaseException] = None):
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to load content {category}/{content_key}{detail}")
        self.category = category
        self.content_key = content_key
        self.cause = cause


class ManifestError(RegistryError):
    """Manifest or prompt data is structurally invalid."""

    code = MCPErrorCode.INVALID_MANIFEST


class DuplicateUriError(ManifestError):
    """Two manifest entries share the same uri."""

    code = MCPErrorCode.DUPLICATE_URI

    def __init__(self, uri: str):
        super().__init__(f"Duplicate resource uri in manifest: {uri}")
        self.uri = uri
