"""
构建摘要模块

在构建结束时输出台账内容。只读取 BuildContext，不修改它。
"""

import json

from ..utils import logging as log
from ..utils.logging import LogStage
from ..utils.paths import format_size
from .build_context import BuildContext

RULE_WIDTH = 60
PATH_COLUMN_WIDTH = 40
SIZE_COLUMN_WIDTH = 10


def format_file_row(path: str, formatted_size: str) -> str:
    """文件表的一行：路径左对齐，大小右对齐"""
    return f"  {path.ljust(PATH_COLUMN_WIDTH)} {formatted_size.rjust(SIZE_COLUMN_WIDTH)}"


def log_build_summary(context: BuildContext) -> None:
    """输出构建摘要"""
    stats = context.stats
    build_time_seconds = context.elapsed_ms() / 1000

    log.print()
    log.print("=" * RULE_WIDTH)
    log.info("构建摘要", stage=LogStage.SUMMARY)
    log.print("=" * RULE_WIDTH)

    log.info(f"构建耗时: {build_time_seconds:.2f}s")
    log.info(f"处理文件数: {stats.files_processed}")
    log.info(f"总大小: {format_size(stats.total_size)}")
    log.info(f"创建目录数: {len(stats.directories)}")

    if stats.warnings:
        log.print()
        log.print("-" * RULE_WIDTH)
        log.warning(f"警告: {len(stats.warnings)}")
        for index, message in enumerate(stats.warnings, start=1):
            log.print(f"  {index}. {message}")

    if stats.errors:
        log.print()
        log.print("-" * RULE_WIDTH)
        log.error(f"错误: {len(stats.errors)}")
        for index, record in enumerate(stats.errors, start=1):
            detail = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)
            log.print(f"  {index}. {detail}")

    if stats.files:
        log.print()
        log.print("-" * RULE_WIDTH)
        log.info(f"输出目录中的文件: {context.dist_dir.name}/")
        log.print("-" * RULE_WIDTH)
        for record in stats.files:
            log.print(format_file_row(record.path, record.formatted_size))

    log.print("=" * RULE_WIDTH)
    log.print()
