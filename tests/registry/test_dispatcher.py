"""Tests for RegistryDispatcher."""

import pytest
from pattern_library.registry import (
    ContentLoader,
    LoadError,
    ManifestStore,
    PromptNotFoundError,
    RegistryDispatcher,
    ResourceNotFoundError,
)


class TestListResources:
    """Test list-resources."""

    def test_manifest_order(self, dispatcher):
        """Should list resources in manifest order without internal fields."""
        envelope = dispatcher.list_resources()

        assert [r["uri"] for r in envelope["resources"]] == [
            "sample://guides/getting-started",
            "sample://patterns/retry-loop",
            "sample://guides/missing",
        ]
        assert all("category" not in r and "contentKey" not in r for r in envelope["resources"])

    def test_filters(self, dispatcher):
        """Should narrow by category and query."""
        assert len(dispatcher.list_resources(category="guides")["resources"]) == 2
        assert [r["uri"] for r in dispatcher.list_resources(query="backoff")["resources"]] == [
            "sample://patterns/retry-loop",
        ]
        assert dispatcher.list_resources(category="patterns", query="guide")["resources"] == []

    def test_empty_manifest(self, tmp_path):
        """Should return an empty list for an empty manifest."""
        dispatcher = RegistryDispatcher(ManifestStore([]), ContentLoader(tmp_path))

        assert dispatcher.list_resources() == {"resources": []}
        assert dispatcher.list_prompts() == {"prompts": []}


class TestReadResource:
    """Test read-resource."""

    def test_known_uri(self, dispatcher):
        """Should return the loader's content in a content envelope."""
        envelope = dispatcher.read_resource("sample://guides/getting-started")

        entry = envelope["contents"][0]
        assert entry["uri"] == "sample://guides/getting-started"
        assert entry["mimeType"] == "text/markdown"
        assert entry["text"] == dispatcher.loader.load("guides", "getting-started")

    def test_unknown_uri(self, dispatcher):
        """Should raise ResourceNotFoundError."""
        with pytest.raises(ResourceNotFoundError):
            dispatcher.read_resource("sample://guides/unknown")

    def test_missing_content(self, dispatcher):
        """Should raise LoadError for a known uri with no content."""
        with pytest.raises(LoadError) as exc:
            dispatcher.read_resource("sample://guides/missing")

        assert exc.value.content_key == "missing"

    def test_idempotent_and_cached(self, sample_profile, counting_reader):
        """Should return identical content twice while reading the source once."""
        dispatcher = RegistryDispatcher(
            sample_profile.manifest,
            ContentLoader(sample_profile.resources_dir, reader=counting_reader),
            sample_profile.prompts,
        )

        first = dispatcher.read_resource("sample://patterns/retry-loop")
        second = dispatcher.read_resource("sample://patterns/retry-loop")

        assert first == second
        assert len(counting_reader.calls) == 1


class TestPrompts:
    """Test list-prompts and get-prompt."""

    def test_onboard_client_with_arguments(self, dispatcher):
        """Should embed the provided values in description and message."""
        envelope = dispatcher.get_prompt("onboard_client", {"client_name": "Acme", "project_type": "dashboard"})

        assert "Acme" in envelope["description"]
        assert len(envelope["messages"]) == 1
        text = envelope["messages"][0]["content"]["text"]
        assert "Acme" in text
        assert "dashboard" in text

    def test_onboard_client_without_arguments(self, dispatcher):
        """Should render defaults instead of failing on missing required arguments."""
        envelope = dispatcher.get_prompt("onboard_client", {})

        assert envelope["description"] == "Onboarding client for project"
        assert "client building a web application" in envelope["messages"][0]["content"]["text"]

    def test_arguments_none(self, dispatcher):
        """Should accept None for the arguments mapping."""
        assert dispatcher.get_prompt("summarize", None)["description"] == "Summarize"

    def test_unknown_prompt(self, dispatcher):
        """Should raise PromptNotFoundError."""
        with pytest.raises(PromptNotFoundError):
            dispatcher.get_prompt("nonexistent_prompt", {})

    def test_list_prompts_has_no_render(self, dispatcher):
        """Should never expose render functions in the listing."""
        prompts = dispatcher.list_prompts()["prompts"]

        assert [p["name"] for p in prompts] == ["onboard_client", "summarize"]
        assert prompts[1]["arguments"] == []
        for prompt in prompts:
            assert set(prompt) == {"name", "description", "arguments"}
            assert not any(callable(v) for v in prompt.values())


class TestVerify:
    """Test verify and server_info."""

    def test_verify_reports_failures(self, dispatcher):
        """Should load what it can and log each failure."""
        result = dispatcher.verify()

        assert len(result.contents) == 2
        assert [f.uri for f in result.failures] == ["sample://guides/missing"]

    def test_server_info(self, dispatcher):
        """Should summarize the profile."""
        info = dispatcher.server_info()

        assert info["name"] == "sample-server"
        assert info["version"] == "2.1.0"
        assert info["resourceCount"] == 3
        assert info["promptCount"] == 2
        assert info["categories"] == ["guides", "patterns"]
        assert info["prompts"] == ["onboard_client", "summarize"]
