"""通用工具模块"""

from .logging import (
    configure_logging,
    get_stage_logger,
    StageLogger,
    LogStage,
    OutputLevel,
)

from .paths import (
    expand_path,
    is_relative_to,
    relative_posix,
    format_size,
    is_safe_name,
)

__all__ = [
    # 日志相关
    "configure_logging",
    "get_stage_logger",
    "StageLogger",
    "LogStage",
    "OutputLevel",

    # 路径相关
    "expand_path",
    "is_relative_to",
    "relative_posix",
    "format_size",
    "is_safe_name",
]
