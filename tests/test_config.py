"""Tests for config loading."""

import pytest

from freelanly.config import AppConfig, ExportConfig, StorageConfig, load_config


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.llm.max_tokens == 800
        assert config.llm.temperature == 0.7
        assert config.llm.max_attempts == 1
        assert config.cover_letter.max_projects == 3
        assert config.cover_letter.max_words == 300
        assert config.profile.fetch_enabled is False

    def test_export_geometry_defaults(self):
        export = ExportConfig()
        assert (export.left_margin, export.top_margin, export.page_bound) == (20, 20, 270)
        assert (export.heading_size, export.body_size) == (16, 12)
        assert (export.heading_step, export.body_step, export.blank_step) == (10, 7, 5)

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config == AppConfig()

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "cover_letter:\n  max_words: 250\nprofile:\n  fetch_enabled: true\n"
            "storage:\n  db_path: ~/elsewhere.db\n"
        )
        config = load_config(yaml_path)
        assert config.cover_letter.max_words == 250
        assert config.profile.fetch_enabled is True
        # Defaults for unspecified
        assert config.cover_letter.max_projects == 3
        assert config.export.page_bound == 270

    def test_empty_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_unknown_key_rejected(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("llm:\n  modle: typo\n")
        with pytest.raises(TypeError):
            load_config(yaml_path)

    def test_llm_attempts_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("llm:\n  max_attempts: 3\n")
        assert load_config(yaml_path).llm.max_attempts == 3

        yaml_path.write_text("llm:\n  max_retries: 2\n")
        with pytest.raises(TypeError):
            load_config(yaml_path)

    def test_storage_resolved_paths(self):
        storage = StorageConfig(db_path="~/test.db", usage_db_path="~/usage.db")
        assert "~" not in str(storage.resolved_db_path)
        assert "~" not in str(storage.resolved_usage_db_path)

    def test_frozen_config(self):
        config = AppConfig()
        with pytest.raises(AttributeError):
            config.llm.model = "changed"
