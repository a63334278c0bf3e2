"""
Tests for ./applications discovery.
"""

from types import SimpleNamespace

from launchpad import fs_discovery
from launchpad.fs_discovery import FolderEntitySource, find_python_mains, guess_category, install_time_ms
from launchpad.models import Category, first_letter_of


def _make_app(root, name, scripts=("main.py",), category=None):
    folder = root / name
    folder.mkdir()
    for s in scripts:
        (folder / s).write_text("print('hi')\n", encoding="utf-8")
    if category is not None:
        (folder / "category.txt").write_text(category, encoding="utf-8")
    return folder


class TestFindPythonMains:
    def test_main_py_wins(self, temp_dir):
        folder = _make_app(temp_dir, "Tool", scripts=("main.py", "main_cli.py"))
        assert [p.name for p in find_python_mains(folder)] == ["main.py"]

    def test_several_main_scripts(self, temp_dir):
        folder = _make_app(temp_dir, "Tool", scripts=("main_gui.py", "main_cli.py", "helper.py"))
        assert [p.name for p in find_python_mains(folder)] == ["main_cli.py", "main_gui.py"]


class TestFolderEntitySource:
    """Scanning and enrichment."""

    def test_discovers_files_and_folders(self, temp_dir):
        (temp_dir / "Editor.exe").write_bytes(b"")
        (temp_dir / "Docs.url").write_text("[InternetShortcut]\nURL=https://example.com\n", encoding="utf-8")
        (temp_dir / "readme.txt").write_text("ignored", encoding="utf-8")
        (temp_dir / ".hidden.exe").write_bytes(b"")
        _make_app(temp_dir, "Pomodoro")

        targets = FolderEntitySource(temp_dir).query_installed_entities()
        by_id = {t.identifier: t for t in targets}

        assert set(by_id) == {"docs.url", "editor.exe", "pomodoro"}
        assert by_id["editor.exe"].kind == "exe"
        assert by_id["docs.url"].kind == "urlfile"
        assert by_id["pomodoro"].kind == "py"
        assert by_id["pomodoro"].first_letter == "P"
        assert by_id["pomodoro"].install_time_ms > 0

    def test_multi_entry_folder_yields_sub_targets(self, temp_dir):
        _make_app(temp_dir, "Suite", scripts=("main_a.py", "main_b.py"))

        targets = FolderEntitySource(temp_dir).query_installed_entities()

        assert [t.identifier for t in targets] == ["suite/main_a.py", "suite/main_b.py"]
        assert targets[0].container_id == "suite"
        assert targets[0].sub_target_id == "main_a.py"
        assert targets[0].display_name == "Suite (main_a)"

    def test_category_file_and_heuristic(self, temp_dir):
        _make_app(temp_dir, "Tunes", category="audio")
        _make_app(temp_dir, "ChessMaster")

        by_id = {t.identifier: t for t in FolderEntitySource(temp_dir).query_installed_entities()}
        assert by_id["tunes"].category == Category.AUDIO
        assert by_id["chessmaster"].category == Category.GAMES

    def test_bad_category_drops_only_that_entity(self, temp_dir):
        _make_app(temp_dir, "Broken", category="nonsense")
        _make_app(temp_dir, "Fine")

        ids = [t.identifier for t in FolderEntitySource(temp_dir).query_installed_entities()]
        assert ids == ["fine"]

    def test_missing_folder_is_created(self, temp_dir):
        apps = temp_dir / "applications"
        assert FolderEntitySource(apps).query_installed_entities() == []
        assert apps.is_dir()


def test_guess_category_defaults_to_other():
    assert guess_category("Xyzzy") == Category.OTHER


class _StatOnly:
    def __init__(self, **fields):
        self._stat = SimpleNamespace(**fields)

    def stat(self):
        return self._stat


class TestInstallTime:
    def test_birth_time_preferred(self):
        item = _StatOnly(st_birthtime=100.0, st_mtime=200.0, st_ctime=300.0)
        assert install_time_ms(item) == 100_000

    def test_metadata_change_does_not_look_like_install(self, monkeypatch):
        monkeypatch.setattr(fs_discovery, "_WINDOWS", False)
        item = _StatOnly(st_mtime=200.0, st_ctime=900.0)
        assert install_time_ms(item) == 200_000

    def test_windows_creation_time(self, monkeypatch):
        monkeypatch.setattr(fs_discovery, "_WINDOWS", True)
        item = _StatOnly(st_mtime=200.0, st_ctime=50.0)
        assert install_time_ms(item) == 50_000


class TestFirstLetter:
    def test_plain_and_blank(self):
        assert first_letter_of(" notes") == "N"
        assert first_letter_of("   ") == "#"

    def test_combining_mark_stays_with_base(self):
        assert first_letter_of("e\u0301clair") == "\u00c9"

    def test_emoji_sequence_is_one_letter(self):
        dev = "\U0001F469\u200d\U0001F4BB"
        assert first_letter_of(dev + " Dev") == dev
        assert first_letter_of("\U0001F44D\U0001F3FD Likes") == "\U0001F44D\U0001F3FD"
