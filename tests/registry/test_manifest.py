"""Tests for ManifestStore."""

import pytest
from pattern_library.mcp_types import ResourceDescriptor
from pattern_library.registry import DuplicateUriError, ManifestError, ResourceNotFoundError
from pattern_library.registry.manifest import ManifestStore, parse_manifest


def descriptor(uri, category="guides", key=None, name="Name", description="Desc"):
    return ResourceDescriptor(
        uri=uri,
        mimeType="text/markdown",
        name=name,
        description=description,
        category=category,
        contentKey=key or uri.rsplit("/", 1)[-1],
    )


class TestManifestStore:
    """Test ManifestStore."""

    def test_find_by_uri_returns_descriptor(self):
        """Should return exactly the stored descriptor for every uri."""
        items = [descriptor("x://a/one"), descriptor("x://a/two"), descriptor("x://b/three", "b")]
        store = ManifestStore(items)

        for item in items:
            assert store.find_by_uri(item.uri) is item

    def test_list_all_keeps_insertion_order(self):
        """Should list descriptors in the order supplied."""
        items = [descriptor("x://z/last"), descriptor("x://a/first"), descriptor("x://m/middle")]
        store = ManifestStore(items)

        assert [d.uri for d in store.list_all()] == ["x://z/last", "x://a/first", "x://m/middle"]

    def test_duplicate_uri_rejected(self):
        """Should raise DuplicateUriError when two entries share a uri."""
        with pytest.raises(DuplicateUriError) as exc:
            ManifestStore([descriptor("x://a/one"), descriptor("x://a/one", key="other")])

        assert exc.value.uri == "x://a/one"
        assert isinstance(exc.value, ManifestError)

    def test_unknown_uri(self):
        """Should raise ResourceNotFoundError for an unknown uri."""
        store = ManifestStore([descriptor("x://a/one")])

        with pytest.raises(ResourceNotFoundError) as exc:
            store.find_by_uri("x://a/nope")

        assert exc.value.uri == "x://a/nope"
        assert "not found" in exc.value.message.lower()

    def test_empty_store(self):
        """Should allow an empty manifest."""
        store = ManifestStore([])

        assert store.list_all() == ()
        assert len(store) == 0

    def test_categories_in_first_seen_order(self):
        """Should list distinct categories in order of first appearance."""
        store = ManifestStore([
            descriptor("x://b/1", "b"),
            descriptor("x://a/2", "a"),
            descriptor("x://b/3", "b"),
        ])

        assert store.categories() == ["b", "a"]
        assert [d.uri for d in store.by_category("b")] == ["x://b/1", "x://b/3"]

    def test_search(self):
        """Should match query case-insensitively across uri, name, description and category."""
        store = ManifestStore([
            descriptor("x://guides/setup", name="Setup Guide"),
            descriptor("x://patterns/retry", "patterns", description="Bounded RETRY loop"),
        ])

        assert [d.uri for d in store.search("retry")] == ["x://patterns/retry"]
        assert [d.uri for d in store.search("SETUP")] == ["x://guides/setup"]
        assert [d.uri for d in store.search("patterns")] == ["x://patterns/retry"]
        assert len(store.search("")) == 2
        assert store.search("nothing-matches") == []

    def test_search_ranks_matches(self):
        """Should rank key and name matches above description and category matches."""
        store = ManifestStore([
            descriptor("x://cache/lru", "cache", description="Eviction for a retry cache"),
            descriptor("x://guides/intro", description="Mentions retry once"),
            descriptor("x://patterns/backoff", "patterns", name="Retry with backoff"),
            descriptor("x://patterns/retry", "patterns", name="Loop"),
        ])

        assert [d.uri for d in store.search("retry")] == [
            "x://patterns/retry",
            "x://patterns/backoff",
            "x://cache/lru",
            "x://guides/intro",
        ]

    def test_search_within_category(self):
        """Should only search the given category's descriptors."""
        store = ManifestStore([
            descriptor("x://guides/retry"),
            descriptor("x://patterns/retry", "patterns"),
        ])

        assert [d.uri for d in store.search("retry", "patterns")] == ["x://patterns/retry"]
        assert [d.uri for d in store.search("", "guides")] == ["x://guides/retry"]


class TestParseManifest:
    """Test parse_manifest."""

    def test_parses_entries(self):
        """Should build descriptors and apply the default mime type."""
        result = parse_manifest([
            {"uri": "x://a/one", "name": "One", "category": "a", "contentKey": "one"},
        ], default_mime_type="text/plain")

        assert result[0].mimeType == "text/plain"
        assert result[0].description == ""
        assert result[0].contentKey == "one"

    def test_missing_field(self):
        """Should raise ManifestError when a required field is missing."""
        with pytest.raises(ManifestError) as exc:
            parse_manifest([{"uri": "x://a/one", "name": "One", "category": "a"}])

        assert "contentKey" in exc.value.message

    def test_not_a_list(self):
        """Should raise ManifestError for non-array manifests."""
        with pytest.raises(ManifestError):
            parse_manifest({"uri": "x://a/one"})
