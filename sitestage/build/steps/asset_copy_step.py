"""
静态资源复制步骤模块

逐个复制配置的静态资源子目录。缺失的子目录只记警告。
"""

from ...utils.logging import get_stage_logger, LogStage
from sitestage.build.build_context import BuildContext, OperationResult
from sitestage.build.operations import copy_tree
from .build_step import BuildStep


logger = get_stage_logger(LogStage.ASSETS)


class AssetCopyStep(BuildStep):
    """静态资源复制步骤"""

    def __init__(self):
        super().__init__("assets", "复制静态资源")

    def execute(self, context: BuildContext) -> OperationResult:
        logger.info("正在复制静态资源...")
        total = 0
        issues_before = context.stats.issue_count

        for asset_dir in context.config.asset_dirs:
            logger.info(f"处理资源目录: {asset_dir}")
            copied = copy_tree(context, context.source_dir / asset_dir, context.dist_dir / asset_dir)
            if copied > 0:
                logger.success(f"已从 {asset_dir}/ 复制 {copied} 个文件")
            total += copied

        context.asset_count = total
        logger.info(f"静态资源文件总数: {total}")
        return self._finish(context, issues_before, total)
