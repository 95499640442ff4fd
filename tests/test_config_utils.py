# tests/test_config_utils.py
"""
Tests for config_utils.py - Configuration loading with YAML support
"""
import pytest
import yaml

from quarjar.config_utils import (
    DEFAULT_BASE_URL,
    ConfigLoader,
    QuarjarConfig,
    create_config_template,
    get_api_key,
    get_config,
    make_client,
    require_course_id,
)
from quarjar.errors import ConfigurationError
from quarjar.skilljar_client import SkilljarClient


class TestQuarjarConfig:
    """Tests for QuarjarConfig dataclass"""

    def test_default_values(self):
        config = QuarjarConfig()

        assert config.api_key is None
        assert config.base_url == DEFAULT_BASE_URL
        assert config.course_id is None
        assert config.timeout == (10, 30)
        assert config.upload_timeout == (10, 120)

    def test_source_defaults(self):
        assert QuarjarConfig().source_of("api_key") == "default"


class TestConfigLoader:
    """Tests for multi-source loading"""

    def test_project_yaml(self, tmp_path):
        (tmp_path / "quarjar.yaml").write_text(
            "course_id: abc123\nbase_url: https://sj.test/\n", encoding="utf-8"
        )

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.course_id == "abc123"
        assert config.base_url == "https://sj.test"
        assert config.source_of("course_id") == "quarjar.yaml"
        assert config.project_root == tmp_path

    def test_project_overrides_global(self, tmp_path):
        global_yaml = tmp_path / "global.yaml"
        global_yaml.write_text("api_key: global-key\ncourse_id: g1\n")
        project = tmp_path / "proj"
        project.mkdir()
        (project / "quarjar.yaml").write_text("course_id: p1\n")

        config = ConfigLoader(project, global_config=global_yaml).load()

        assert config.api_key == "global-key"
        assert config.source_of("api_key") == "global"
        assert config.course_id == "p1"

    def test_env_overrides_files(self, tmp_path, monkeypatch):
        (tmp_path / "quarjar.yaml").write_text("api_key: file-key\ncourse_id: p1\n")
        monkeypatch.setenv("SKILLJAR_API_KEY", "env-key")
        monkeypatch.setenv("SKILLJAR_COURSE_ID", "e1")
        monkeypatch.setenv("SKILLJAR_BASE_URL", "https://env.test/")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.api_key == "env-key"
        assert config.course_id == "e1"
        assert config.base_url == "https://env.test"
        assert config.source_of("api_key") == "env:SKILLJAR_API_KEY"

    def test_numeric_course_id(self, tmp_path):
        (tmp_path / "quarjar.yaml").write_text("course_id: 12345\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.course_id == "12345"

    def test_nested_timeout(self, tmp_path):
        (tmp_path / "quarjar.yaml").write_text("timeout:\n  connect: 5\n  upload: 300\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.timeout == (5.0, 30.0)
        assert config.upload_timeout == (5.0, 300.0)

    def test_unknown_keys_kept_as_extra(self, tmp_path):
        (tmp_path / "quarjar.yaml").write_text("course_id: a\nlesson_prefix: W1\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.extra == {"lesson_prefix": "W1"}

    def test_malformed_yaml_is_skipped(self, tmp_path, caplog):
        (tmp_path / "quarjar.yaml").write_text("course_id: [unclosed\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.course_id is None
        assert "Failed to parse" in caplog.text

    def test_non_mapping_is_skipped(self, tmp_path, caplog):
        (tmp_path / "quarjar.yaml").write_text("- just\n- a list\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.course_id is None
        assert "expected a mapping" in caplog.text


class TestPublicApi:
    def test_get_config_uses_override_path(self, tmp_path, monkeypatch):
        global_yaml = tmp_path / "custom.yaml"
        global_yaml.write_text("api_key: from-override\n")
        monkeypatch.setenv("QUARJAR_CONFIG", str(global_yaml))

        assert get_config(tmp_path).api_key == "from-override"

    def test_get_api_key_missing(self, tmp_path):
        with pytest.raises(ConfigurationError, match="api_key is required"):
            get_api_key(QuarjarConfig(project_root=tmp_path))

    def test_get_api_key(self):
        assert get_api_key(QuarjarConfig(api_key="k")) == "k"

    def test_make_client(self):
        client = make_client(QuarjarConfig(api_key="k", base_url="https://sj.test"))

        assert isinstance(client, SkilljarClient)
        assert client.base_url == "https://sj.test"

    def test_make_client_without_key(self):
        with pytest.raises(ConfigurationError):
            make_client(QuarjarConfig())

    def test_require_course_id_prefers_explicit(self):
        assert require_course_id("x", QuarjarConfig(course_id="y")) == "x"

    def test_require_course_id_falls_back(self):
        assert require_course_id(None, QuarjarConfig(course_id="y")) == "y"

    def test_require_course_id_missing(self):
        with pytest.raises(ConfigurationError, match="Course ID not configured"):
            require_course_id(None, QuarjarConfig())


class TestConfigTemplate:
    @pytest.mark.parametrize("include_comments", [True, False])
    def test_template_is_valid_yaml(self, include_comments):
        data = yaml.safe_load(create_config_template(include_comments))

        assert data["course_id"] == "REPLACE_WITH_YOUR_COURSE_ID"
        assert data["timeout"] == {"connect": 10, "read": 30, "upload": 120}
        assert "api_key" not in data


class TestInvalidTimeouts:
    """Bad timeout values are reported and the defaults kept"""

    def test_non_numeric_timeout(self, tmp_path, caplog):
        (tmp_path / "quarjar.yaml").write_text("course_id: a\ntimeout:\n  read: thirty\n  upload: 300\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.timeout == (10, 30)
        assert config.upload_timeout == (10, 120)
        assert config.course_id == "a"
        assert config.source_of("timeout") == "default"
        assert "Ignoring timeout settings" in caplog.text

    def test_null_timeout_value(self, tmp_path, caplog):
        (tmp_path / "quarjar.yaml").write_text("timeout:\n  connect: null\n")

        config = ConfigLoader(tmp_path, global_config=tmp_path / "none.yaml").load()

        assert config.timeout == (10, 30)
        assert "Ignoring timeout settings" in caplog.text
