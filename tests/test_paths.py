import os

import pytest

from clip_to_wsl.paths import PathResolver, clipboard_path, convert_to_drive_path, file_name, save_directory
from clip_to_wsl.settings import Settings, SettingsStore


@pytest.mark.parametrize("src,expected", [
    (r"C:\Users\test\file.png", "/mnt/c/Users/test/file.png"),
    (r"D:\Images\clipboard.png", "/mnt/d/Images/clipboard.png"),
    (r"c:\lower\case.png", "/mnt/c/lower/case.png"),
    ("E:/already/forward.png", "/mnt/e/already/forward.png"),
    ("C:", "/mnt/c"),
    (r"C:\Users\テスト\my file.png", "/mnt/c/Users/テスト/my file.png"),
])
def test_drive_rooted_paths(src, expected):
    assert convert_to_drive_path(src) == expected


@pytest.mark.parametrize("src,expected", [
    (r"relative\path\file.png", "relative/path/file.png"),
    ("/home/user/file.png", "/home/user/file.png"),
    ("file.png", "file.png"),
    ("", ""),
    ("C", "C"),
])
def test_paths_without_drive_only_normalize_separators(src, expected):
    assert convert_to_drive_path(src) == expected


def test_file_name_handles_both_separators():
    assert file_name(r"C:\a\b/c.png") == "c.png"
    assert file_name("plain.png") == "plain.png"


@pytest.fixture
def store(tmp_path):
    return SettingsStore(tmp_path)


def test_normal_mode_uses_save_path_and_drive_conversion(store):
    store.settings.save_path = r"C:\Users\test\Pictures"
    resolver = PathResolver(store)

    assert not resolver.is_project_mode_active()
    assert resolver.save_directory() == r"C:\Users\test\Pictures"
    assert resolver.clipboard_path(r"C:\Users\test\Pictures\img.png") == "/mnt/c/Users/test/Pictures/img.png"


def test_project_mode_resolves_relative_path(store):
    store.settings.project_mode_enabled = True
    store.settings.project_root_path = r"C:\Proj"
    store.settings.project_screenshots_dir = "screenshots"
    resolver = PathResolver(store)

    assert resolver.is_project_mode_active()
    assert resolver.save_directory() == os.path.join(r"C:\Proj", "screenshots")
    written = r"C:\Proj\screenshots\clipboard_20250111_123456.png"
    assert resolver.clipboard_path(written) == "screenshots/clipboard_20250111_123456.png"


def test_project_mode_nested_screenshots_dir_uses_forward_slashes():
    s = Settings(save_path="/unused", project_mode_enabled=True,
                 project_root_path="/work/proj", project_screenshots_dir=r"docs\images")

    assert save_directory(s) == os.path.join("/work/proj", r"docs\images")
    assert clipboard_path(s, "/anywhere/else/shot.png") == "docs/images/shot.png"


def test_project_mode_without_root_falls_back_to_normal(store):
    store.settings.save_path = r"C:\Save"
    store.settings.project_mode_enabled = True
    store.settings.project_root_path = ""
    resolver = PathResolver(store)

    assert not resolver.is_project_mode_active()
    assert resolver.save_directory() == r"C:\Save"
    assert resolver.clipboard_path(r"C:\Save\a.png") == "/mnt/c/Save/a.png"


def test_project_root_without_enable_flag_is_normal_mode(store):
    store.settings.project_root_path = r"C:\Proj"
    assert not PathResolver(store).is_project_mode_active()


def test_resolver_sees_settings_changes_immediately(store):
    resolver = PathResolver(store)
    assert not resolver.is_project_mode_active()

    store.update(project_mode_enabled=True, project_root_path="/proj")
    assert resolver.is_project_mode_active()

    store.update(project_mode_enabled=False)
    assert not resolver.is_project_mode_active()
    assert resolver.save_directory() == store.settings.save_path
