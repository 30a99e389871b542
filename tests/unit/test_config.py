"""Unit tests for Speech2TextConfig."""

import os
from pathlib import Path

import pytest

from speech2text.config import DEFAULT_CONFIG, Speech2TextConfig


def write_config(directory, content):
    path = Path(directory) / "speech2text.yaml"
    path.write_text(content, encoding="utf-8")
    return str(path)


@pytest.mark.unit
class TestSpeech2TextConfig:
    """Test cases for Speech2TextConfig."""

    def test_defaults_without_file(self):
        config = Speech2TextConfig()
        assert config.config_file is None
        assert config.get('pipeline.model') == "base"
        assert config.get('ui.tick_interval_seconds') == 0.1
        assert config.get('logging.console_output') is False

    def test_defaults_not_shared_between_instances(self):
        config = Speech2TextConfig()
        config.set('pipeline.model', 'small')
        assert DEFAULT_CONFIG['pipeline']['model'] == "base"
        assert Speech2TextConfig().get('pipeline.model') == "base"

    def test_file_overrides_are_merged(self, temp_data_dir):
        path = write_config(temp_data_dir, "pipeline:\n  model: small\n  language: en\n")
        config = Speech2TextConfig(path)
        assert config.get('pipeline.model') == "small"
        assert config.get('pipeline.language') == "en"
        assert config.get('pipeline.package') == "openai-whisper"
        assert config.get('ui.show_hidden') is False

    def test_relative_paths_resolved_against_file(self, temp_data_dir):
        path = write_config(
            temp_data_dir,
            "logging:\n  file_path: logs/app.log\nui:\n  start_directory: media\n",
        )
        config = Speech2TextConfig(path)
        assert config.get('logging.file_path') == str(Path(temp_data_dir) / "logs/app.log")
        assert config.get('ui.start_directory') == str(Path(temp_data_dir) / "media")

    def test_missing_file(self, temp_data_dir):
        with pytest.raises(FileNotFoundError):
            Speech2TextConfig(os.path.join(temp_data_dir, "nope.yaml"))

    def test_empty_file(self, temp_data_dir):
        with pytest.raises(ValueError, match="empty"):
            Speech2TextConfig(write_config(temp_data_dir, ""))

    def test_invalid_yaml(self, temp_data_dir):
        with pytest.raises(ValueError, match="Invalid YAML"):
            Speech2TextConfig(write_config(temp_data_dir, "ui: [unclosed\n"))

    def test_non_mapping(self, temp_data_dir):
        with pytest.raises(ValueError, match="mapping"):
            Speech2TextConfig(write_config(temp_data_dir, "- a\n- b\n"))

    def test_get_missing_key_returns_default(self):
        config = Speech2TextConfig()
        assert config.get('does.not.exist', 42) == 42
        assert config.get('pipeline.ffmpeg_path', 'ffmpeg') == 'ffmpeg'

    def test_set_creates_nested_keys(self):
        config = Speech2TextConfig()
        config.set('extra.nested.value', 3)
        assert config.get('extra.nested.value') == 3

    def test_start_directory_defaults_to_cwd(self):
        assert Speech2TextConfig().get_start_directory() == str(Path(os.getcwd()).absolute())

    def test_allowed_extensions_normalised(self, temp_data_dir):
        path = write_config(temp_data_dir, "ui:\n  allowed_extensions: [MP4, .WAV, ogg]\n")
        assert Speech2TextConfig(path).get_allowed_extensions() == [".mp4", ".wav", ".ogg"]

    def test_default_allowed_extensions(self):
        assert Speech2TextConfig().get_allowed_extensions() == [
            ".mp4", ".avi", ".mov", ".mkv", ".webm", ".mp3", ".wav", ".m4a", ".flac",
        ]
