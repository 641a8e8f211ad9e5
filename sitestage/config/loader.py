"""
配置加载器

负责从 YAML 文件加载站点构建配置并进行验证。
"""

import copy
import os
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .schema import SiteConfig


class ConfigError(Exception):
    """配置错误基类"""
    pass


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def __init__(self, message: str, errors: List[Dict[str, Any]]):
        super().__init__(message)
        self.errors = errors

    def format_errors(self) -> str:
        """格式化错误信息为人类可读的格式"""
        formatted = []
        for error in self.errors:
            loc = " -> ".join(str(item) for item in error.get('loc', []))
            msg = error.get('msg', '未知错误')
            input_val = error.get('input', '')

            if loc:
                formatted.append(f"字段 '{loc}': {msg}")
                if input_val:
                    formatted.append(f"  输入值: {input_val}")
            else:
                formatted.append(f"根级别: {msg}")

        return "\n".join(formatted)

    def format_errors_json(self) -> str:
        """格式化错误信息为 JSON 格式"""
        return json.dumps(self.errors, ensure_ascii=False, indent=2, default=str)


class ConfigLoader:
    """配置加载器"""

    PATH_FIELDS = ('source_dir', 'dist_dir')

    def __init__(self):
        self.yaml = YAML(typ='safe')
        self.yaml.default_flow_style = False
        self.yaml.width = 4096

    def load_from_file(self, config_path: Union[str, Path]) -> SiteConfig:
        """从文件加载配置

        相对路径以配置文件所在目录为基准解析。

        Args:
            config_path: 配置文件路径

        Returns:
            SiteConfig: 验证后的配置实例

        Raises:
            ConfigError: 配置加载或验证错误
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"配置文件不存在: {config_path}")

        if not config_path.is_file():
            raise ConfigError(f"配置路径不是文件: {config_path}")

        if config_path.suffix.lower() not in ['.yaml', '.yml']:
            raise ConfigError(f"配置文件必须是 .yaml 或 .yml 格式: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                raw_data = self.yaml.load(f)
        except YAMLError as e:
            raise ConfigError(f"YAML 解析错误: {e}")
        except OSError as e:
            raise ConfigError(f"文件读取错误: {e}")

        if raw_data is None:
            raise ConfigError("配置文件为空")

        if not isinstance(raw_data, dict):
            raise ConfigError("配置文件根级别必须是对象/字典格式")

        return self.load_from_dict(raw_data, base_path=Path(os.path.abspath(config_path.parent)))

    def load_from_dict(self, data: Dict[str, Any], base_path: Optional[Path] = None) -> SiteConfig:
        """从字典加载配置

        Args:
            data: 配置数据字典
            base_path: 相对路径的基准路径

        Returns:
            SiteConfig: 验证后的配置实例

        Raises:
            ConfigValidationError: 配置验证错误
        """
        if base_path:
            data = copy.deepcopy(data)
            self._resolve_relative_paths(data, Path(base_path))

        try:
            config = SiteConfig.from_dict(data)
        except ValidationError as e:
            raise ConfigValidationError("配置验证失败", list(e.errors()))

        return config

    def save_to_file(self, config: SiteConfig, output_path: Union[str, Path]) -> None:
        """保存配置到文件

        Raises:
            ConfigError: 保存错误
        """
        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8') as f:
                self.yaml.dump(config.to_dict(), f)
        except OSError as e:
            raise ConfigError(f"保存配置文件失败: {e}")

    def validate_file(self, config_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """验证配置文件并返回错误列表

        Returns:
            List[Dict]: 错误列表，空列表表示验证通过
        """
        try:
            self.load_from_file(config_path)
            return []
        except ConfigValidationError as e:
            return e.errors
        except ConfigError as e:
            return [{
                'loc': [],
                'msg': str(e),
                'type': 'config_error'
            }]

    def _resolve_relative_paths(self, data: Dict[str, Any], base_path: Path) -> None:
        """把 source_dir / dist_dir 中的相对路径解析为绝对路径"""
        for key in self.PATH_FIELDS:
            value = data.get(key)
            if isinstance(value, str) and value:
                if not Path(value).is_absolute():
                    data[key] = os.path.abspath(base_path / value)


# 全局加载器实例
config_loader = ConfigLoader()


def load_config(config_path: Union[str, Path]) -> SiteConfig:
    """便捷函数：加载配置文件"""
    return config_loader.load_from_file(config_path)


def validate_config(config_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """便捷函数：验证配置文件"""
    return config_loader.validate_file(config_path)


def save_config(config: SiteConfig, output_path: Union[str, Path]) -> None:
    """便捷函数：保存配置文件"""
    config_loader.save_to_file(config, output_path)
