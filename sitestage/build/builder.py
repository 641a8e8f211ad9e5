"""
构建器主类

负责整个构建流程的协调，使用管道模式组织构建步骤。
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config.schema import SiteConfig
from .build_context import BuildConfig, BuildContext, BuildStats
from .build_pipeline import BuildPipeline


@dataclass
class BuildResult:
    """构建结果"""
    exit_code: int
    stats: BuildStats
    build_time_ms: int
    aborted: bool = False
    html_count: int = 0
    asset_count: int = 0
    source_dir: Optional[Path] = None
    dist_dir: Optional[Path] = None

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @classmethod
    def from_context(cls, context: BuildContext) -> 'BuildResult':
        return cls(
            exit_code=context.exit_code(),
            stats=context.stats,
            build_time_ms=context.elapsed_ms(),
            aborted=context.aborted,
            html_count=context.html_count,
            asset_count=context.asset_count,
            source_dir=context.source_dir,
            dist_dir=context.dist_dir,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'exitCode': self.exit_code,
            'buildTimeMs': self.build_time_ms,
            'aborted': self.aborted,
            'htmlFilesCopied': self.html_count,
            'assetFilesCopied': self.asset_count,
            'sourceDir': str(self.source_dir) if self.source_dir else None,
            'distDir': str(self.dist_dir) if self.dist_dir else None,
        }
        data.update(self.stats.to_dict())
        return data

    def write_report(self, report_path: Union[str, Path]) -> Path:
        """把构建台账写成 JSON 报告"""
        report_path = Path(report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(
            json.dumps(self.to_dict(), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
        return report_path


class Builder:
    """站点构建器

    使用管道模式协调构建步骤，提供统一的构建接口。
    """

    def __init__(self):
        self.pipeline = BuildPipeline()

    def build(self, config: Union[BuildConfig, SiteConfig, None] = None) -> BuildResult:
        """执行一次完整的清理重建

        Args:
            config: 构建配置；传入 SiteConfig 时相对路径以当前工作目录解析，
                省略时使用默认配置

        Returns:
            BuildResult: 构建结果，exit_code 为 0 或 1
        """
        if config is None:
            config = SiteConfig()
        if isinstance(config, SiteConfig):
            config = BuildConfig.from_site_config(config)

        context = self.pipeline.execute(config)
        return BuildResult.from_context(context)

    def get_pipeline(self) -> BuildPipeline:
        """获取构建管道，用于自定义构建流程"""
        return self.pipeline


def build(config: Union[BuildConfig, SiteConfig, None] = None) -> int:
    """便捷函数：执行构建并返回退出码"""
    return Builder().build(config).exit_code
