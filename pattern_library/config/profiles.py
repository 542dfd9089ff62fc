"""
Server Profiles

A profile is one content server: metadata, a resource manifest, an optional
prompt file and a resources directory.

    <content_root>/<profile>/
    ├── server.json
    ├── manifest.json
    ├── prompts.json        (optional)
    └── resources/<category>/<content_key>.md
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import ValidationError, validate

from pattern_library.registry import (
    ContentCache,
    ContentLoader,
    ManifestError,
    ManifestStore,
    ProfileNotFoundError,
    PromptTable,
    RegistryDispatcher,
    parse_manifest,
    parse_prompts,
)

logger = logging.getLogger(__name__)


SERVER_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "version": {"type": "string"},
        "description": {"type": "string"},
        "uriScheme": {"type": "string", "pattern": "^[a-z][a-z0-9+.-]*$"},
        "defaultMimeType": {"type": "string"},
    },
    "required": ["name", "uriScheme"],
}


@dataclass
class ServerProfile:
    """A loaded content server profile."""
    name: str
    version: str
    description: str
    uri_scheme: str
    path: Path
    manifest: ManifestStore
    prompts: PromptTable = field(default_factory=PromptTable)

    @property
    def resources_dir(self) -> Path:
        return self.path / "resources"

    @property
    def has_prompts(self) -> bool:
        return len(self.prompts) > 0

    def create_dispatcher(self, cache: Optional[ContentCache] = None) -> RegistryDispatcher:
        return RegistryDispatcher(
            manifest=self.manifest,
            loader=ContentLoader(self.resources_dir, cache=cache),
            prompts=self.prompts,
            name=self.name,
            version=self.version,
            description=self.description,
        )


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e


def available_profiles(content_root: Path) -> List[str]:
    """Names of every directory under content_root that has a server.json."""
    if not content_root.is_dir():
        return []
    return sorted(p.name for p in content_root.iterdir() if (p / "server.json").is_file())


def load_profile(name: str, content_root: Path) -> ServerProfile:
    """
    Load and validate a profile.

    Raises:
        ProfileNotFoundError: No such profile under content_root
        ManifestError: Invalid server, manifest or prompt data
        DuplicateUriError: Two manifest entries share a uri
    """
    profile_dir = content_root / name
    server_file = profile_dir / "server.json"
    if not server_file.is_file():
        raise ProfileNotFoundError(name)

    server = _read_json(server_file)
    try:
        validate(instance=server, schema=SERVER_SCHEMA)
    except ValidationError as e:
        raise ManifestError(f"Invalid server.json for profile {name}: {e.message}") from e

    manifest_file = profile_dir / "manifest.json"
    if not manifest_file.is_file():
        raise ManifestError(f"Profile {name} has no manifest.json")
    descriptors = parse_manifest(
        _read_json(manifest_file),
        default_mime_type=server.get("defaultMimeType", "text/markdown"),
    )

    prompts_file = profile_dir / "prompts.json"
    prompts = PromptTable(parse_prompts(_read_json(prompts_file))) if prompts_file.is_file() else PromptTable()

    profile = ServerProfile(
        name=server["name"],
        version=server.get("version", "0.0.0"),
        description=server.get("description", ""),
        uri_scheme=server["uriScheme"],
        path=profile_dir,
        manifest=ManifestStore(descriptors),
        prompts=prompts,
    )
    logger.debug(
        f"Loaded profile {name}: {len(profile.manifest)} resources, {len(profile.prompts)} prompts"
    )
    return profile
