"""Unit tests for FileBrowser."""

import pytest
from rich.console import Console

from speech2text.ui.file_browser import FileBrowser

ALLOWED = [".mp4", ".mp3", ".wav"]


def names(browser):
    return [entry.name for entry in browser.entries]


def render_plain(browser):
    console = Console(width=100, record=True, color_system=None)
    console.print(browser.render())
    return console.export_text()


@pytest.mark.unit
class TestFileBrowser:
    """Test cases for FileBrowser."""

    def test_directories_first_then_files(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        assert names(browser) == [
            "Archive", "clips", "b_interview.wav", "Lecture.MP4", "notes.txt", "talk.mp3",
        ]

    def test_show_hidden(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED, show_hidden=True)
        assert ".hidden_dir" in names(browser)
        assert ".secret.mp3" in names(browser)

    def test_nothing_selected_initially(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        assert browser.current_selection() is None

    def test_select_allowed_file(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        for key in ["down", "down", "down"]:
            browser.handle_key(key)
        browser.handle_key("enter")
        assert browser.current_selection() == str(media_tree / "Lecture.MP4")

    def test_disallowed_file_not_selectable(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        browser.handle_key("end")
        browser.handle_key("up")
        assert browser.entries[browser.cursor].name == "notes.txt"

        browser.handle_key("enter")

        assert browser.current_selection() is None

    def test_open_directory_and_go_back(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        browser.handle_key("j")
        browser.handle_key("l")

        assert browser.directory == media_tree / "clips"
        assert names(browser) == ["nested.wav"]

        browser.handle_key("backspace")

        assert browser.directory == media_tree
        assert browser.entries[browser.cursor].name == "clips"

    def test_select_in_subdirectory(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        browser.handle_key("down")
        browser.handle_key("enter")
        browser.handle_key("enter")
        assert browser.current_selection() == str(media_tree / "clips" / "nested.wav")

    def test_cursor_clamped(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        browser.handle_key("up")
        assert browser.cursor == 0
        for _ in range(20):
            browser.handle_key("down")
        assert browser.cursor == len(browser.entries) - 1
        browser.handle_key("home")
        assert browser.cursor == 0

    def test_listing_scrolls_with_cursor(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED, height=2)
        browser.handle_key("end")
        assert browser.top == len(browser.entries) - 2
        browser.handle_key("g")
        assert browser.top == 0

    def test_missing_directory_reports_error(self, temp_data_dir):
        browser = FileBrowser(f"{temp_data_dir}/does-not-exist", ALLOWED)
        assert browser.entries == []
        assert browser.error is not None
        browser.handle_key("enter")
        browser.handle_key("down")
        assert browser.current_selection() is None

    def test_render_lists_entries(self, media_tree):
        browser = FileBrowser(str(media_tree), ALLOWED)
        output = render_plain(browser)
        assert str(media_tree) in output
        assert "> Archive/" in output
        assert "clips/" in output
        assert "talk.mp3" in output

    def test_render_empty_directory(self, media_tree):
        browser = FileBrowser(str(media_tree / "Archive"), ALLOWED)
        assert "(empty directory)" in render_plain(browser)
