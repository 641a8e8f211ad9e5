"""构建服务模块

提供静态站点构建的核心功能。
"""

from .builder import Builder, BuildResult, build
from .build_context import (
    BuildConfig,
    BuildContext,
    BuildStats,
    FileRecord,
    ErrorRecord,
    DirectoryCreateError,
    FileCopyError,
    DirectoryCopyError,
    CleanError,
    Outcome,
    OperationResult,
)
from .build_pipeline import BuildPipeline
from .operations import (
    ensure_directory,
    copy_file,
    copy_tree,
    clean_output_root,
)
from .summary import log_build_summary

__all__ = [
    # 主构建器
    "Builder",
    "BuildResult",
    "BuildPipeline",
    "build",

    # 上下文与台账
    "BuildConfig",
    "BuildContext",
    "BuildStats",
    "FileRecord",
    "ErrorRecord",
    "DirectoryCreateError",
    "FileCopyError",
    "DirectoryCopyError",
    "CleanError",
    "Outcome",
    "OperationResult",

    # 文件系统操作
    "ensure_directory",
    "copy_file",
    "copy_tree",
    "clean_output_root",

    "log_build_summary",
]
