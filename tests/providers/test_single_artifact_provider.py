"""
Tests for SingleArtifactFileProvider and EmbeddedResourceFileInfo.

Covers path translation, flat directory listing and lazy length.
"""

import io
import threading
from unittest.mock import MagicMock

import pytest

from resourcefs.artifacts import MemoryArtifact, ResourceArtifact
from resourcefs.core.constants import UNKNOWN_LAST_MODIFIED
from resourcefs.providers.base import NotFoundDirectoryContents, NotFoundFileInfo
from resourcefs.providers.change_tokens import NullChangeToken
from resourcefs.providers.embedded import EmbeddedResourceFileInfo, SingleArtifactFileProvider


class CountingArtifact(ResourceArtifact):
    """Artifact that counts how often streams are opened."""

    def __init__(self, resources):
        super().__init__("counting")
        self.resources = resources
        self.opens = 0

    def resource_names(self):
        return list(self.resources)

    def has_resource(self, key):
        return key in self.resources

    def open_resource(self, key):
        if key not in self.resources:
            raise FileNotFoundError(key)
        self.opens += 1
        return io.BytesIO(self.resources[key])


class TestConstruction:
    """Test provider construction."""

    def test_none_artifact_rejected(self):
        """Constructing without an artifact raises TypeError."""
        with pytest.raises(TypeError):
            SingleArtifactFileProvider(None)

    def test_base_namespace_defaults_to_empty(self, app_artifact):
        """No base namespace means every resource is visible."""
        provider = SingleArtifactFileProvider(app_artifact)

        assert provider.base_namespace == ""
        assert provider.get_file_info("App.Resources.strings.txt").exists

    def test_none_base_namespace_treated_as_empty(self, app_artifact):
        """None behaves like an empty base namespace."""
        provider = SingleArtifactFileProvider(app_artifact, None)

        assert provider.base_namespace == ""
        assert len(provider.get_directory_contents("")) == 3


class TestGetFileInfo:
    """Test file lookup."""

    @pytest.fixture
    def provider(self, app_artifact):
        return SingleArtifactFileProvider(app_artifact, "App.wwwroot")

    @pytest.mark.parametrize("subpath", ["", None])
    def test_empty_subpath_not_found(self, provider, subpath):
        """Empty or None subpath never resolves."""
        info = provider.get_file_info(subpath)

        assert isinstance(info, NotFoundFileInfo)
        assert not info.exists
        assert info.name == subpath

    def test_nested_path_translated_to_resource_key(self, provider):
        """Separators become namespace dots."""
        info = provider.get_file_info("css/site.css")

        assert info.exists
        assert isinstance(info, EmbeddedResourceFileInfo)
        assert info.resource_key == "App.wwwroot.css.site.css"

    def test_display_name_is_last_segment(self, provider):
        """The entry name is the final segment of the original subpath."""
        info = provider.get_file_info("css/site.css")

        assert info.name == "site.css"

    def test_leading_separator_is_transparent(self, provider):
        """Rooted and relative forms return equivalent results."""
        rooted = provider.get_file_info("/js/app.js")
        relative = provider.get_file_info("js/app.js")

        assert rooted.exists and relative.exists
        assert rooted.name == relative.name == "app.js"
        assert rooted.resource_key == relative.resource_key
        assert rooted.read_bytes() == relative.read_bytes()

    def test_only_one_leading_separator_stripped(self, provider):
        """A doubled leading separator does not resolve."""
        assert not provider.get_file_info("//js/app.js").exists

    def test_dotted_subpath_also_resolves(self, provider):
        """Flat keys can be addressed with dots directly."""
        info = provider.get_file_info("css.site.css")

        assert info.exists
        assert info.name == "css.site.css"

    def test_missing_file_carries_display_name(self, provider):
        """A missing file is a not-found entry named by its last segment."""
        info = provider.get_file_info("/css/missing.css")

        assert not info.exists
        assert info.name == "missing.css"

    def test_lookup_is_case_sensitive(self, provider):
        """Keys must match exactly."""
        assert not provider.get_file_info("CSS/site.css").exists

    def test_resource_outside_namespace_hidden(self, provider):
        """Resources outside the base namespace are invisible."""
        assert not provider.get_file_info("Resources/strings.txt").exists

    def test_existing_entry_metadata(self, provider):
        """Embedded entries have sentinel time and no physical path."""
        info = provider.get_file_info("js/app.js")

        assert info.exists
        assert not info.is_directory
        assert info.physical_path is None
        assert info.last_modified == UNKNOWN_LAST_MODIFIED
        assert info.length == len(b"main();")


class TestGetDirectoryContents:
    """Test flat directory listing."""

    def test_root_lists_resources_under_namespace(self, app_artifact):
        """Prefix is stripped from listed names."""
        provider = SingleArtifactFileProvider(app_artifact, "App.wwwroot")

        contents = provider.get_directory_contents("")

        assert contents.exists
        assert sorted(contents.names()) == ["css.site.css", "js.app.js"]
        for entry in contents:
            assert entry.exists
            assert not entry.is_directory

    def test_rooted_empty_path_lists_root(self, app_artifact):
        """"/" is the same as the root."""
        provider = SingleArtifactFileProvider(app_artifact, "App.wwwroot")

        assert sorted(provider.get_directory_contents("/").names()) == ["css.site.css", "js.app.js"]

    @pytest.mark.parametrize("subpath", ["css", "/css", "js/", "App"])
    def test_non_empty_subpath_not_found(self, app_artifact, subpath):
        """The namespace has no subdirectories."""
        provider = SingleArtifactFileProvider(app_artifact, "App.wwwroot")

        contents = provider.get_directory_contents(subpath)

        assert isinstance(contents, NotFoundDirectoryContents)
        assert not contents.exists
        assert list(contents) == []

    def test_none_subpath_not_found(self, app_artifact):
        """None is not a directory."""
        provider = SingleArtifactFileProvider(app_artifact, "App.wwwroot")

        assert not provider.get_directory_contents(None).exists

    def test_no_matches_still_exists(self, app_artifact):
        """An empty namespace is an existing, empty listing."""
        provider = SingleArtifactFileProvider(app_artifact, "Nothing.Here")

        contents = provider.get_directory_contents("")

        assert contents.exists
        assert len(contents) == 0

    def test_listing_entries_are_readable(self, app_artifact):
        """Listed entries are bound to the full resource key."""
        provider = SingleArtifactFileProvider(app_artifact, "App.wwwroot")

        by_name = {entry.name: entry for entry in provider.get_directory_contents("")}

        assert by_name["js.app.js"].read_bytes() == b"main();"

    def test_resources_enumerated_per_call(self):
        """Listings are not cached on the provider."""
        artifact = MagicMock(spec=ResourceArtifact)
        artifact.resource_names.side_effect = [["Ns.a.txt"], ["Ns.a.txt", "Ns.b.txt"]]
        provider = SingleArtifactFileProvider(artifact, "Ns")

        assert provider.get_directory_contents("").names() == ["a.txt"]
        assert provider.get_directory_contents("").names() == ["a.txt", "b.txt"]
        assert artifact.resource_names.call_count == 2

    def test_scenario_app_wwwroot(self):
        """Two web assets under App.wwwroot list as flat dotted names."""
        artifact = MemoryArtifact(
            {
                "App.wwwroot.css.site.css": b"a",
                "App.wwwroot.js.app.js": b"b",
            }
        )
        provider = SingleArtifactFileProvider(artifact, "App.wwwroot")

        names = sorted(provider.get_directory_contents("").names())

        assert names == ["css.site.css", "js.app.js"]


class TestWatch:
    """Test change tokens."""

    def test_watch_returns_null_token(self, app_artifact):
        """Embedded resources never change."""
        provider = SingleArtifactFileProvider(app_artifact)

        token = provider.watch("**/*")

        assert token is NullChangeToken.SINGLETON
        assert not token.has_changed


class TestEmbeddedResourceFileInfo:
    """Test lazy length and stream access."""

    def test_length_memoized(self):
        """Length is read once per entry instance."""
        artifact = CountingArtifact({"a.txt": b"12345"})
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        assert artifact.opens == 0
        assert info.length == 5
        assert info.length == 5
        assert artifact.opens == 1

    def test_length_per_instance(self):
        """Separate entries compute their own length."""
        artifact = CountingArtifact({"a.txt": b"12345"})
        first = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")
        second = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        assert first.length == second.length == 5
        assert artifact.opens == 2

    def test_streams_are_independent(self):
        """Opening twice yields two independent readable streams."""
        artifact = CountingArtifact({"a.txt": b"content"})
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        with info.open() as first, info.open() as second:
            assert first.read(3) == b"con"
            assert second.read() == b"content"
            assert first.read() == b"tent"

        assert info.length == len(b"content")
        assert info.length == len(b"content")

    def test_open_populates_length(self):
        """Length known from an opened stream isn't read again."""
        artifact = CountingArtifact({"a.txt": b"12345"})
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        with info.open() as stream:
            assert stream.read() == b"12345"
        assert artifact.opens == 1

        assert info.length == 5
        assert artifact.opens == 1

    def test_open_leaves_length_of_unseekable_stream(self):
        """Streams that can't seek leave length to be read on demand."""

        class ForwardOnly(io.BytesIO):
            def seekable(self):
                return False

        artifact = MagicMock(spec=ResourceArtifact)
        artifact.open_resource.return_value = ForwardOnly(b"12345")
        artifact.resource_length.return_value = 5
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        assert info.open().read() == b"12345"
        artifact.resource_length.assert_not_called()
        assert info.length == 5
        artifact.resource_length.assert_called_once_with("a.txt")

    def test_concurrent_length_access(self):
        """Racing first accesses agree on the value."""
        artifact = CountingArtifact({"a.txt": b"x" * 1000})
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")
        results = []

        threads = [threading.Thread(target=lambda: results.append(info.length)) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == [1000] * 8

    def test_io_errors_propagate(self):
        """Stream failures are not translated."""
        artifact = MagicMock(spec=ResourceArtifact)
        artifact.open_resource.side_effect = PermissionError("denied")
        artifact.resource_length.side_effect = PermissionError("denied")
        info = EmbeddedResourceFileInfo(artifact, "a.txt", "a.txt")

        with pytest.raises(PermissionError):
            info.open()
        with pytest.raises(PermissionError):
            info.length
        assert info.exists
