"""
Unit tests for blu.domain.validation.path_validator.PathValidator.
"""

import os
from pathlib import Path, PurePosixPath

import pytest

from blu.domain.validation.path_validator import (
    PathValidationError,
    PathValidator,
    validate_workspace_root,
)


class TestPathValidator:

    def test_validate_relative_path_valid(self):
        valid_cases = [
            "single.md",
            "a/b/c.txt",
            "a\\b\\c.txt",
            "src/app/__init__.py",
            ".github/workflows/ci.yml",
            "name with spaces.txt",
            "a..b",
        ]
        for p in valid_cases:
            assert PathValidator.validate_relative_path(p) == p

    def test_validate_relative_path_rejects_empty(self):
        for p in ["", "   "]:
            with pytest.raises(PathValidationError, match="cannot be empty"):
                PathValidator.validate_relative_path(p)

    def test_validate_relative_path_rejects_absolute_paths(self):
        invalid_cases = [
            "/etc/passwd",
            "\\windows\\system32",
            "C:\\temp\\file.txt",
            "C:/temp/file.txt",
            "C:file.txt",
            "\\\\server\\share\\file.txt",
        ]
        for p in invalid_cases:
            with pytest.raises(PathValidationError, match="Absolute paths"):
                PathValidator.validate_relative_path(p)

    def test_validate_relative_path_rejects_traversal(self):
        invalid_cases = [
            "..",
            "../file.txt",
            "a/../file.txt",
            "a\\..\\file.txt",
            "a/b/..",
        ]
        for p in invalid_cases:
            with pytest.raises(PathValidationError, match="Parent directory"):
                PathValidator.validate_relative_path(p)

    def test_validate_relative_path_accepts_dot_and_empty_segments(self):
        valid_cases = [
            "./file.txt",
            "a/./file.txt",
            "a//file.txt",
            ".\\src\\main.c",
        ]
        for p in valid_cases:
            assert PathValidator.validate_relative_path(p) == p

    def test_validate_relative_path_rejects_directory_names(self):
        for p in ["dir/", "dir\\", ".", "./", "a/."]:
            with pytest.raises(PathValidationError, match="must name a file"):
                PathValidator.validate_relative_path(p)

    def test_to_relative_collapses_dot_and_empty_segments(self):
        assert PathValidator.to_relative("./src/index.js") == PurePosixPath("src/index.js")
        assert PathValidator.to_relative("lib//util.js") == PurePosixPath("lib/util.js")
        assert PathValidator.to_relative("a/./b/c.txt") == PurePosixPath("a/b/c.txt")

    def test_validate_relative_path_rejects_nul(self):
        with pytest.raises(PathValidationError, match="NUL"):
            PathValidator.validate_relative_path("a\x00b")

    def test_to_relative_normalizes_separators(self):
        assert PathValidator.to_relative("a\\b\\c.txt") == PurePosixPath("a/b/c.txt")

    def test_validate_within_root(self, tmp_path):
        """Test path traversal prevention."""
        root = tmp_path / "root"
        root.mkdir()
        safe_file = root / "safe.txt"
        safe_file.touch()

        # Valid case
        validated = PathValidator.validate_within_root(safe_file, root)
        assert validated == safe_file.resolve()

        # Nonexistent targets are fine as long as they stay inside
        assert PathValidator.validate_within_root(root / "new" / "f.txt", root) == (
            root.resolve() / "new" / "f.txt"
        )

        # Invalid case (outside root)
        unsafe_file = tmp_path / "unsafe.txt"
        unsafe_file.touch()
        with pytest.raises(PathValidationError, match="Path traversal detected"):
            PathValidator.validate_within_root(unsafe_file, root)

        # Lexical escape
        with pytest.raises(PathValidationError):
            PathValidator.validate_within_root(root / ".." / "unsafe.txt", root)

    def test_validate_within_root_rejects_root_itself(self, tmp_path):
        with pytest.raises(PathValidationError):
            PathValidator.validate_within_root(tmp_path, tmp_path)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
    def test_validate_within_root_follows_symlinks(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        outside = tmp_path / "outside"
        outside.mkdir()
        try:
            (root / "link").symlink_to(outside, target_is_directory=True)
        except OSError:
            pytest.skip("cannot create symlinks here")

        with pytest.raises(PathValidationError):
            PathValidator.validate_within_root(root / "link" / "f.txt", root)

    def test_validate_directory(self, tmp_path):
        assert PathValidator.validate_directory(tmp_path) == tmp_path.resolve()

        with pytest.raises(PathValidationError, match="does not exist"):
            PathValidator.validate_directory(tmp_path / "missing")

        a_file = tmp_path / "f.txt"
        a_file.touch()
        with pytest.raises(PathValidationError, match="not a directory"):
            PathValidator.validate_directory(a_file)

    def test_validate_workspace_root(self, tmp_path):
        assert validate_workspace_root(str(tmp_path)) == Path(tmp_path).resolve()

    def test_path_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            PathValidator.validate_relative_path("../x")
