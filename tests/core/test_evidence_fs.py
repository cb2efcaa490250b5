from pathlib import Path

import pytest

from core.evidence_fs import MountedFS


def _populate(mount: Path) -> None:
    recent = mount / "AppData" / "Roaming" / "Microsoft" / "Windows" / "Recent"
    recent.mkdir(parents=True)
    (recent / "b.lnk").write_bytes(b"B")
    (recent / "A.LNK").write_bytes(b"A")
    (recent / "notes.txt").write_text("text", encoding="utf-8")
    (recent / "nested").mkdir()
    (recent / "nested" / "c.lnk").write_bytes(b"C")


def test_missing_mount_point_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        MountedFS(tmp_path / "absent")


def test_mounted_fs_open(tmp_path: Path) -> None:
    _populate(tmp_path)
    fs = MountedFS(tmp_path)

    with fs.open_for_read("AppData/Roaming/Microsoft/Windows/Recent/notes.txt") as handle:
        assert handle.read() == b"text"


def test_read_file(tmp_path: Path) -> None:
    _populate(tmp_path)
    fs = MountedFS(tmp_path)
    assert fs.read_file("AppData/Roaming/Microsoft/Windows/Recent/b.lnk") == b"B"


def test_open_missing_file_raises(tmp_path: Path) -> None:
    fs = MountedFS(tmp_path)
    with pytest.raises(FileNotFoundError):
        fs.read_file("Desktop/missing.lnk")


def test_mounted_fs_open_rejects_path_traversal(tmp_path: Path) -> None:
    mount = tmp_path / "mount"
    mount.mkdir()
    (tmp_path / "secret.txt").write_text("secret", encoding="utf-8")

    fs = MountedFS(mount)
    with pytest.raises(ValueError, match="Path traversal attempt"):
        fs.open_for_read("../secret.txt")


def test_walk_directory_missing_yields_nothing(tmp_path: Path) -> None:
    fs = MountedFS(tmp_path)
    assert list(fs.walk_directory("Desktop")) == []


def test_walk_directory_uses_forward_slashes(tmp_path: Path) -> None:
    _populate(tmp_path)
    fs = MountedFS(tmp_path)

    paths = set(fs.walk_directory("AppData/Roaming/Microsoft/Windows/Recent"))
    assert "AppData/Roaming/Microsoft/Windows/Recent/nested/c.lnk" in paths
    assert all("\\" not in path for path in paths)


def test_list_files_filters_suffix_case_insensitively(tmp_path: Path) -> None:
    _populate(tmp_path)
    fs = MountedFS(tmp_path)

    assert fs.list_files("AppData/Roaming/Microsoft/Windows/Recent", ".lnk") == [
        "AppData/Roaming/Microsoft/Windows/Recent/A.LNK",
        "AppData/Roaming/Microsoft/Windows/Recent/b.lnk",
        "AppData/Roaming/Microsoft/Windows/Recent/nested/c.lnk",
    ]


def test_source_name_is_mount_point(tmp_path: Path) -> None:
    assert MountedFS(tmp_path).source_name == str(tmp_path)
