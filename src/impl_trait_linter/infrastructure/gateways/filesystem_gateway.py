"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from impl_trait_linter.domain.exceptions import SourceReadError
from impl_trait_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def glob_rust_files(self, path: str, excluded_dirs: frozenset[str]) -> list[str]:
        """Get all Rust files in path (recursive if directory), skipping excluded directory names."""
        path_obj = Path(path)
        if path_obj.is_dir():
            return sorted(
                str(p)
                for p in path_obj.glob("**/*.rs")
                if p.is_file() and not excluded_dirs.intersection(p.relative_to(path_obj).parts[:-1])
            )
        return [str(path_obj)] if path_obj.suffix == ".rs" and path_obj.is_file() else []

    def read_text(self, path: str) -> str:
        """Read a UTF-8 source file."""
        try:
            return Path(path).read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise SourceReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
        except OSError as exc:
            raise SourceReadError(path, exc.strerror or str(exc)) from exc
