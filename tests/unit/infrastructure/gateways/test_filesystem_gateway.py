"""Unit tests for FileSystemGateway."""

from pathlib import Path

import pytest

from impl_trait_linter.domain.constants import DEFAULT_EXCLUDED_DIRS
from impl_trait_linter.domain.exceptions import SourceReadError
from impl_trait_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


@pytest.fixture
def crate(tmp_path: Path) -> Path:
    (tmp_path / "src" / "bin").mkdir(parents=True)
    (tmp_path / "target" / "debug").mkdir(parents=True)
    (tmp_path / "src" / "lib.rs").write_text("pub fn f() {}\n")
    (tmp_path / "src" / "bin" / "main.rs").write_text("fn main() {}\n")
    (tmp_path / "src" / "notes.txt").write_text("not rust\n")
    (tmp_path / "target" / "debug" / "build.rs").write_text("fn main() {}\n")
    return tmp_path


class TestFileSystemGateway:
    def test_glob_skips_excluded_dirs(self, crate: Path) -> None:
        files = FileSystemGateway().glob_rust_files(str(crate), DEFAULT_EXCLUDED_DIRS)
        assert files == sorted([str(crate / "src" / "bin" / "main.rs"), str(crate / "src" / "lib.rs")])

    def test_glob_single_file(self, crate: Path) -> None:
        lib = str(crate / "src" / "lib.rs")
        assert FileSystemGateway().glob_rust_files(lib, DEFAULT_EXCLUDED_DIRS) == [lib]

    def test_glob_non_rust_file(self, crate: Path) -> None:
        notes = str(crate / "src" / "notes.txt")
        assert FileSystemGateway().glob_rust_files(notes, DEFAULT_EXCLUDED_DIRS) == []

    def test_excluded_name_at_root_is_not_applied(self, crate: Path) -> None:
        target = crate / "target"
        files = FileSystemGateway().glob_rust_files(str(target), DEFAULT_EXCLUDED_DIRS)
        assert files == [str(target / "debug" / "build.rs")]

    def test_read_text(self, crate: Path) -> None:
        assert FileSystemGateway().read_text(str(crate / "src" / "lib.rs")) == "pub fn f() {}\n"

    def test_read_invalid_utf8(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.rs"
        bad.write_bytes(b"fn f() {} // \xff\xfe\n")
        with pytest.raises(SourceReadError, match="not valid UTF-8"):
            FileSystemGateway().read_text(str(bad))

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError):
            FileSystemGateway().read_text(str(tmp_path / "missing.rs"))

    def test_is_directory_and_resolve(self, crate: Path) -> None:
        gateway = FileSystemGateway()
        assert gateway.is_directory(str(crate / "src"))
        assert not gateway.is_directory(str(crate / "src" / "lib.rs"))
        assert gateway.resolve_path(str(crate / "src" / ".." / "src")) == str((crate / "src").resolve())
