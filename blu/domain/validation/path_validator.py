"""
Path validation utilities for blu.

Provides shared security validation for:
- Workspace-relative path syntax (file-set keys)
- Path traversal prevention at write time
- Workspace root validation

Used by the response classifier and the file materializer.
"""

from pathlib import Path, PurePosixPath, PureWindowsPath

from blu.domain.errors import BluError


class PathValidationError(BluError, ValueError):
    """Raised when path validation fails."""
    pass


class PathValidator:
    """Validates workspace-relative paths and their resolved targets."""

    @classmethod
    def split_segments(cls, path: str) -> list[str]:
        """Split a relative path on either separator ('/' or '\\')."""
        return path.replace("\\", "/").split("/")

    @classmethod
    def is_absolute(cls, path: str) -> bool:
        """True for POSIX absolute paths, drive paths ("C:"), rooted and UNC Windows paths."""
        if PurePosixPath(path).is_absolute():
            return True
        win = PureWindowsPath(path)
        return bool(win.drive or win.root)

    @classmethod
    def validate_relative_path(cls, path: str) -> str:
        """
        Validate a workspace-relative file path.

        Args:
            path: Path as given by the model, using '/' or '\\' separators

        Returns:
            The path, unchanged

        Raises:
            PathValidationError: If the path is empty, absolute, contains a
                '..' segment, or does not name a file

        '.' and empty segments are harmless and collapse away, so
        "./src/app.py" and "src//app.py" both name "src/app.py".

        Examples:
            >>> PathValidator.validate_relative_path("src/app/main.py")
            'src/app/main.py'
            >>> PathValidator.validate_relative_path("../escape.txt")
            PathValidationError: Parent directory references not allowed
        """
        if not isinstance(path, str) or not path.strip():
            raise PathValidationError("Path cannot be empty")

        if "\x00" in path:
            raise PathValidationError(f"Invalid path: '{path}'. NUL characters not allowed.")

        if cls.is_absolute(path):
            raise PathValidationError(f"Invalid path: '{path}'. Absolute paths not allowed.")

        segments = cls.split_segments(path)
        if ".." in segments:
            raise PathValidationError(
                f"Invalid path: '{path}'. Parent directory references not allowed."
            )

        # "dir/" or "./" names a directory, never a file
        if segments[-1] in ("", "."):
            raise PathValidationError(f"Invalid path: '{path}'. Path must name a file.")

        return path

    @classmethod
    def to_relative(cls, path: str) -> PurePosixPath:
        """Validate path and return it normalized: '/' separators, no '.' or empty segments."""
        cls.validate_relative_path(path)
        return PurePosixPath(*(s for s in cls.split_segments(path) if s not in ("", ".")))

    @classmethod
    def validate_directory(cls, path: str | Path) -> Path:
        """
        Validate that path exists and is a directory.

        Args:
            path: Path to validate (relative paths resolve against the cwd)

        Returns:
            Resolved absolute Path object

        Raises:
            PathValidationError: If validation fails
        """
        path_obj = Path(path).resolve()

        if not path_obj.exists():
            raise PathValidationError(f"Path does not exist: {path_obj}")

        if not path_obj.is_dir():
            raise PathValidationError(f"Path is not a directory: {path_obj}")

        return path_obj

    @classmethod
    def validate_within_root(cls, file_path: Path, root: Path) -> Path:
        """
        Validate that file_path is within root directory (no path traversal).

        Symlinks are followed before the check, so a link inside root that
        points elsewhere is rejected too.

        Args:
            file_path: File path to validate
            root: Root directory that must contain file_path

        Returns:
            Validated, resolved file path

        Raises:
            PathValidationError: If file_path escapes root directory

        Examples:
            >>> root = Path("/home/user/project")
            >>> PathValidator.validate_within_root(
            ...     Path("/home/user/project/src/app.py"), root
            ... )
            Path('/home/user/project/src/app.py')

            >>> PathValidator.validate_within_root(
            ...     Path("/etc/passwd"), root
            ... )
            PathValidationError: Path traversal detected
        """
        file_resolved = file_path.resolve()
        root_resolved = root.resolve()

        if file_resolved == root_resolved or not file_resolved.is_relative_to(root_resolved):
            raise PathValidationError(
                f"Path traversal detected: {file_path} is not within {root}"
            )

        return file_resolved


def validate_workspace_root(path: str | Path) -> Path:
    """Validate the workspace root exists and is a directory."""
    return PathValidator.validate_directory(path)
