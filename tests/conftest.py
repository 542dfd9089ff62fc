"""
Shared pytest fixtures for Pattern Library tests

Builds throwaway content profiles on disk so registry, server and CLI tests
never depend on the bundled content.
"""

import json
import sys
from pathlib import Path
import pytest
from unittest.mock import Mock
from typing import Any, Dict, List

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ============================================================================
# Sample Data
# ============================================================================

SAMPLE_SERVER = {
    "name": "sample-server",
    "version": "2.1.0",
    "description": "Sample profile for tests",
    "uriScheme": "sample",
}

SAMPLE_MANIFEST: List[Dict[str, Any]] = [
    {
        "uri": "sample://guides/getting-started",
        "mimeType": "text/markdown",
        "name": "Getting Started",
        "description": "First steps with the sample server",
        "category": "guides",
        "contentKey": "getting-started",
    },
    {
        "uri": "sample://patterns/retry-loop",
        "mimeType": "text/plain",
        "name": "Retry Loop",
        "description": "Bounded retry with backoff",
        "category": "patterns",
        "contentKey": "retry-loop",
    },
    {
        "uri": "sample://guides/missing",
        "mimeType": "text/markdown",
        "name": "Missing Guide",
        "description": "Manifest entry without content",
        "category": "guides",
        "contentKey": "missing",
    },
]

SAMPLE_PROMPTS: List[Dict[str, Any]] = [
    {
        "name": "onboard_client",
        "description": "Complete client onboarding process",
        "arguments": [
            {"name": "client_name", "description": "Name of the client company", "required": True, "default": "client"},
            {"name": "project_type", "description": "Type of project", "required": True, "default": "web application"},
        ],
        "template": {
            "description": "Onboarding {client_name} for {project_type}",
            "descriptionDefaults": {"project_type": "project"},
            "messages": [
                {"role": "user", "text": "Complete the client onboarding process for {client_name} building a {project_type}."},
            ],
        },
    },
    {
        "name": "summarize",
        "description": "Summarize a resource",
        "template": {
            "description": "Summarize",
            "messages": [{"role": "user", "text": "Summarize sample://guides/getting-started."}],
        },
    },
]

SAMPLE_CONTENT = {
    ("guides", "getting-started.md"): "# Getting Started\n\nInstall and run.\n",
    ("patterns", "retry-loop.txt"): "for attempt in range(3): ...\n",
}


def write_profile(
    root: Path,
    name: str = "sample",
    server: Dict[str, Any] = SAMPLE_SERVER,
    manifest: Any = SAMPLE_MANIFEST,
    prompts: Any = SAMPLE_PROMPTS,
    content: Dict = SAMPLE_CONTENT,
) -> Path:
    """Write a profile directory under root and return its path."""
    profile_dir = root / name
    profile_dir.mkdir(parents=True)
    (profile_dir / "server.json").write_text(json.dumps(server))
    (profile_dir / "manifest.json").write_text(json.dumps(manifest))
    if prompts is not None:
        (profile_dir / "prompts.json").write_text(json.dumps(prompts))
    for (category, filename), text in content.items():
        path = profile_dir / "resources" / category / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return profile_dir


class CountingReader:
    """File reader that records every path it reads."""

    def __init__(self):
        self.calls: List[Path] = []

    def __call__(self, path: Path) -> str:
        self.calls.append(path)
        return path.read_text(encoding="utf-8")


# ============================================================================
# Base Fixtures
# ============================================================================

@pytest.fixture
def content_root(tmp_path):
    """Content root containing the 'sample' profile."""
    root = tmp_path / "content"
    write_profile(root)
    return root


@pytest.fixture
def resources_dir(content_root):
    return content_root / "sample" / "resources"


@pytest.fixture
def counting_reader():
    return CountingReader()


@pytest.fixture
def logger():
    """
    Standard mock logger for all tests.
    """
    from pattern_library.utils.logger import Logger
    return Mock(spec=Logger)


@pytest.fixture
def mock_config(content_root):
    """
    Standard configuration pointing at the sample content root.
    """
    from pattern_library.config.settings import Config

    return Config(
        environment="test",
        log_level="DEBUG",
        http_host="127.0.0.1",
        http_port=8000,
        profile="sample",
        content_root=content_root,
    )


@pytest.fixture
def sample_profile(content_root):
    from pattern_library.config import load_profile
    return load_profile("sample", content_root)


@pytest.fixture
def dispatcher(sample_profile):
    return sample_profile.create_dispatcher()


@pytest.fixture
def profile_factory(tmp_path):
    """
    Write extra profiles for a test.

    Usage:
        def test_something(profile_factory):
            root = profile_factory("broken", manifest=[...])
    """
    root = tmp_path / "factory"

    def _make(name: str = "sample", **overrides) -> Path:
        write_profile(root, name, **overrides)
        return root

    return _make
