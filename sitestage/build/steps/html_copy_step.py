"""
HTML 复制步骤模块

把配置的 HTML 入口文件从源目录顶层复制到输出目录。
"""

from ...utils.logging import get_stage_logger, LogStage
from sitestage.build.build_context import BuildContext, OperationResult
from sitestage.build.operations import copy_file
from .build_step import BuildStep


logger = get_stage_logger(LogStage.HTML)


class HtmlCopyStep(BuildStep):
    """HTML 复制步骤"""

    def __init__(self):
        super().__init__("html", "复制 HTML 文件")

    def execute(self, context: BuildContext) -> OperationResult:
        logger.info("正在复制 HTML 文件...")
        copied = 0
        issues_before = context.stats.issue_count

        for html_file in context.config.html_files:
            source_path = context.source_dir / html_file
            dest_path = context.dist_dir / html_file

            if not source_path.exists():
                logger.warning(f"未找到 HTML 文件: {html_file}")
                context.stats.record_warning(f"未找到 HTML 文件: {html_file}")
                continue

            if copy_file(context, source_path, dest_path):
                copied += 1

        context.html_count = copied
        if copied == 0:
            logger.warning("没有复制任何 HTML 文件")

        return self._finish(context, issues_before, copied)
