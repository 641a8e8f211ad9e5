"""
配置 Schema 定义

使用 Pydantic 定义站点构建配置模型，支持验证和类型检查。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.paths import is_safe_name


DEFAULT_SOURCE_DIR = "src"
DEFAULT_DIST_DIR = "dist"
DEFAULT_ASSET_DIRS = ["css", "js", "images", "fonts", "assets"]
DEFAULT_HTML_FILES = ["index.html"]


def _dedupe_names(values: List[str], field_name: str) -> List[str]:
    """校验并去重名称列表，保留首次出现的顺序"""
    cleaned: List[str] = []
    for value in values:
        value = value.strip().replace("\\", "/").rstrip("/")
        if not is_safe_name(value):
            raise ValueError(f"{field_name} 中的名称无效（必须是相对路径且不含 ..）: '{value}'")
        if value not in cleaned:
            cleaned.append(value)
    return cleaned


class ConfigModel(BaseModel):
    """配置元信息模型"""
    version: int = Field(1, description="配置 schema 版本", ge=1)

    @field_validator('version')
    @classmethod
    def validate_config_version(cls, v: int) -> int:
        """验证配置版本"""
        SUPPORTED_VERSIONS = [1]
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(f"不支持的配置版本 {v}，支持的版本: {SUPPORTED_VERSIONS}")
        return v


class SiteConfig(BaseModel):
    """站点构建主配置模型

    描述源目录、输出目录，以及需要复制的 HTML 入口文件和静态资源子目录。
    """

    config: ConfigModel = Field(default_factory=ConfigModel, description="配置元信息")

    source_dir: Path = Field(Path(DEFAULT_SOURCE_DIR), description="源目录")
    dist_dir: Path = Field(Path(DEFAULT_DIST_DIR), description="输出目录（每次构建前清空）")
    asset_dirs: List[str] = Field(
        default_factory=lambda: list(DEFAULT_ASSET_DIRS),
        description="按顺序复制的静态资源子目录",
    )
    html_files: List[str] = Field(
        default_factory=lambda: list(DEFAULT_HTML_FILES),
        description="按顺序复制的 HTML 入口文件",
    )

    model_config = {
        "extra": "forbid",
        "validate_assignment": True,
        "str_strip_whitespace": True,
    }

    @field_validator('asset_dirs')
    @classmethod
    def validate_asset_dirs(cls, v: List[str]) -> List[str]:
        return _dedupe_names(v, "asset_dirs")

    @field_validator('html_files')
    @classmethod
    def validate_html_files(cls, v: List[str]) -> List[str]:
        return _dedupe_names(v, "html_files")

    @model_validator(mode='after')
    def validate_dirs_distinct(self) -> 'SiteConfig':
        """源目录和输出目录不能相同"""
        if Path(self.source_dir) == Path(self.dist_dir):
            raise ValueError("source_dir 和 dist_dir 不能是同一个目录")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        data = self.model_dump(exclude_none=True)

        def convert_values(obj):
            if isinstance(obj, dict):
                return {k: convert_values(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert_values(item) for item in obj]
            elif isinstance(obj, Path):
                return obj.as_posix()
            else:
                return obj

        return convert_values(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SiteConfig':
        """从字典创建配置实例"""
        return cls.model_validate(data)
