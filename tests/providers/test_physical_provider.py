"""Tests for PhysicalFileProvider and PhysicalFileInfo."""

import os
from datetime import timezone

import pytest

from resourcefs.core.constants import ErrorCode
from resourcefs.providers.base import NotFoundFileInfo, ProviderConfigurationError
from resourcefs.providers.change_tokens import PollingChangeToken
from resourcefs.providers.physical import PhysicalFileInfo, PhysicalFileProvider


class TestConstruction:
    """Test root validation."""

    def test_missing_root_rejected(self, temp_dir):
        """A root that doesn't exist fails at construction."""
        with pytest.raises(ProviderConfigurationError) as exc_info:
            PhysicalFileProvider(temp_dir / "missing")

        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_file_root_rejected(self, source_dir):
        """A root that is a file fails at construction."""
        with pytest.raises(ProviderConfigurationError):
            PhysicalFileProvider(source_dir / "index.html")

    def test_root_resolved(self, source_dir):
        """The root is stored as an absolute, resolved path."""
        provider = PhysicalFileProvider(str(source_dir))

        assert provider.root == str(source_dir.resolve())


class TestGetFileInfo:
    """Test file lookup on disk."""

    def test_existing_file(self, source_dir):
        """Existing files carry real metadata."""
        provider = PhysicalFileProvider(source_dir)

        info = provider.get_file_info("images/logo.png")

        assert isinstance(info, PhysicalFileInfo)
        assert info.exists
        assert info.name == "logo.png"
        assert info.length == 4
        assert not info.is_directory
        assert info.last_modified.tzinfo == timezone.utc
        assert info.physical_path == os.path.join(str(source_dir.resolve()), "images", "logo.png")

    def test_leading_separator(self, source_dir):
        """A leading separator is tolerated."""
        provider = PhysicalFileProvider(source_dir)

        assert provider.get_file_info("/index.html").exists

    def test_missing_file(self, source_dir):
        """Missing files are not-found entries, not errors."""
        info = PhysicalFileProvider(source_dir).get_file_info("nope.txt")

        assert isinstance(info, NotFoundFileInfo)
        assert info.name == "nope.txt"

    def test_directory_is_not_a_file(self, source_dir):
        """Directories don't resolve as files."""
        assert not PhysicalFileProvider(source_dir).get_file_info("images").exists

    def test_escaping_root_rejected(self, source_dir):
        """Paths outside the root are not found."""
        (source_dir.parent / "secret.txt").write_text("secret")
        provider = PhysicalFileProvider(source_dir)

        assert not provider.get_file_info("../secret.txt").exists
        assert not provider.get_directory_contents("..").exists

    def test_sibling_with_shared_prefix_rejected(self, source_dir):
        """A sibling whose name starts with the root's name is still outside."""
        sibling = source_dir.parent / (source_dir.name + "-other")
        sibling.mkdir()
        (sibling / "a.txt").write_text("a")
        provider = PhysicalFileProvider(source_dir)

        assert not provider.get_file_info(f"../{sibling.name}/a.txt").exists

    def test_filesystem_root(self, source_dir):
        """A provider rooted at the filesystem root serves absolute paths."""
        index = os.path.realpath(source_dir / "index.html")
        provider = PhysicalFileProvider(os.path.abspath(os.sep))

        info = provider.get_file_info(index)
        assert info.exists
        assert info.physical_path == index
        assert provider.get_directory_contents(os.path.dirname(index)).exists

    def test_open_reads_content(self, source_dir):
        """open() returns a binary stream over the file."""
        info = PhysicalFileProvider(source_dir).get_file_info("index.html")

        with info.open() as stream:
            assert stream.read() == b"<html></html>"


class TestGetDirectoryContents:
    """Test directory listing on disk."""

    def test_root_listing(self, source_dir):
        """Files and directories are listed."""
        contents = PhysicalFileProvider(source_dir).get_directory_contents("")

        assert contents.exists
        assert sorted(contents.names()) == ["css.site.css", "images", "index.html"]

    def test_directory_entries_flagged(self, source_dir):
        """Subdirectories are marked as directories and cannot be opened."""
        contents = PhysicalFileProvider(source_dir).get_directory_contents("/")
        images = next(entry for entry in contents if entry.name == "images")

        assert images.is_directory
        assert images.length == -1
        with pytest.raises(IsADirectoryError):
            images.open()

    def test_missing_directory(self, source_dir):
        """Missing directories are not found."""
        contents = PhysicalFileProvider(source_dir).get_directory_contents("nothing")

        assert not contents.exists
        assert len(contents) == 0

    def test_none_subpath(self, source_dir):
        """None is not a directory."""
        assert not PhysicalFileProvider(source_dir).get_directory_contents(None).exists


class TestWatch:
    """Test polling change tokens."""

    def test_watch_returns_polling_token(self, source_dir):
        """watch() returns a token scoped to the root."""
        token = PhysicalFileProvider(source_dir).watch("*.html")

        assert isinstance(token, PollingChangeToken)
        assert not token.has_changed

    def test_new_file_detected(self, source_dir):
        """Adding a matching file flips has_changed."""
        token = PhysicalFileProvider(source_dir).watch("*.txt")

        (source_dir / "new.txt").write_text("new")

        assert token.has_changed
