"""
配置系统单元测试

测试配置模式验证和 YAML 加载器。
"""

from pathlib import Path

import pytest
from pydantic import ValidationError
from ruamel.yaml import YAML

from sitestage.config.loader import (
    ConfigError,
    ConfigLoader,
    ConfigValidationError,
    load_config,
    save_config,
    validate_config,
)
from sitestage.config.schema import DEFAULT_ASSET_DIRS, SiteConfig


def write_yaml(path: Path, data) -> Path:
    yaml = YAML(typ='safe')
    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f)
    return path


class TestSiteConfig:
    """SiteConfig 测试"""

    def test_defaults(self):
        config = SiteConfig()
        assert config.source_dir == Path("src")
        assert config.dist_dir == Path("dist")
        assert config.asset_dirs == DEFAULT_ASSET_DIRS
        assert config.html_files == ["index.html"]
        assert config.config.version == 1

    def test_defaults_not_shared(self):
        first = SiteConfig()
        first.asset_dirs.append("media")
        assert SiteConfig().asset_dirs == DEFAULT_ASSET_DIRS

    def test_names_deduplicated_in_order(self):
        config = SiteConfig(asset_dirs=["js", "css", "js", "css/"])
        assert config.asset_dirs == ["js", "css"]

    @pytest.mark.parametrize("name", ["../escape", "/abs", "", "a/../b"])
    def test_unsafe_names_rejected(self, name):
        with pytest.raises(ValidationError):
            SiteConfig(asset_dirs=[name])
        with pytest.raises(ValidationError):
            SiteConfig(html_files=[name])

    def test_same_source_and_dist_rejected(self):
        with pytest.raises(ValidationError):
            SiteConfig(source_dir="site", dist_dir="site")

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            SiteConfig.from_dict({"minify": True})

    def test_unsupported_version(self):
        with pytest.raises(ValidationError):
            SiteConfig.from_dict({"config": {"version": 2}})

    def test_to_dict(self):
        data = SiteConfig(source_dir="web", asset_dirs=["css"]).to_dict()
        assert data["source_dir"] == "web"
        assert data["dist_dir"] == "dist"
        assert data["asset_dirs"] == ["css"]
        assert data["config"] == {"version": 1}


class TestConfigLoader:
    """ConfigLoader 测试"""

    def test_load_resolves_relative_paths(self, tmp_path):
        path = write_yaml(tmp_path / "site.yaml", {
            "source_dir": "web",
            "dist_dir": "public",
            "asset_dirs": ["css", "images"],
            "html_files": ["index.html", "404.html"],
        })

        config = load_config(path)

        assert config.source_dir == tmp_path / "web"
        assert config.dist_dir == tmp_path / "public"
        assert config.asset_dirs == ["css", "images"]
        assert config.html_files == ["index.html", "404.html"]

    def test_absolute_paths_kept(self, tmp_path):
        target = tmp_path / "elsewhere"
        path = write_yaml(tmp_path / "site.yml", {"dist_dir": str(target)})
        assert load_config(path).dist_dir == target

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="不存在"):
            load_config(tmp_path / "nope.yaml")

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text("{}")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("")
        with pytest.raises(ConfigError, match="为空"):
            load_config(path)

    def test_non_mapping_root(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("asset_dirs: [css\n")
        with pytest.raises(ConfigError, match="YAML"):
            load_config(path)

    def test_validation_error_details(self, tmp_path):
        path = write_yaml(tmp_path / "site.yaml", {"asset_dirs": ["../up"]})

        with pytest.raises(ConfigValidationError) as exc_info:
            load_config(path)

        formatted = exc_info.value.format_errors()
        assert "asset_dirs" in formatted
        assert "asset_dirs" in exc_info.value.format_errors_json()

    def test_load_from_dict_does_not_mutate_input(self, tmp_path):
        data = {"source_dir": "web"}
        ConfigLoader().load_from_dict(data, base_path=tmp_path)
        assert data == {"source_dir": "web"}

    def test_validate_config(self, tmp_path):
        good = write_yaml(tmp_path / "good.yaml", {"asset_dirs": ["css"]})
        bad = write_yaml(tmp_path / "bad.yaml", {"unknown": 1})

        assert validate_config(good) == []
        errors = validate_config(bad)
        assert errors
        assert validate_config(tmp_path / "missing.yaml")[0]["type"] == "config_error"

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "out" / "site.yaml"
        save_config(SiteConfig(asset_dirs=["css", "js"]), path)

        reloaded = load_config(path)

        assert reloaded.asset_dirs == ["css", "js"]
        assert reloaded.source_dir == tmp_path / "out" / "src"
