"""
清理步骤模块

删除上一次构建留下的输出目录，并重新创建空的输出根目录。
"""

from ...utils.logging import get_stage_logger, LogStage
from sitestage.build.build_context import BuildContext, OperationResult
from sitestage.build.operations import clean_output_root, ensure_directory
from .build_step import BuildStep


logger = get_stage_logger(LogStage.CLEAN)


class CleanStep(BuildStep):
    """清理输出目录步骤"""

    def __init__(self):
        super().__init__("clean", "清理输出目录")

    def execute(self, context: BuildContext) -> OperationResult:
        if not clean_output_root(context):
            logger.error(f"无法清理输出目录，构建中止: {context.dist_dir}")
            return OperationResult.failure("清理输出目录失败")
        return OperationResult.success()


class OutputRootStep(BuildStep):
    """创建输出根目录步骤"""

    def __init__(self):
        super().__init__("output_root", "创建输出根目录")

    def execute(self, context: BuildContext) -> OperationResult:
        result = ensure_directory(context, context.dist_dir)
        if result.fatal:
            logger.error(f"无法创建输出目录，构建中止: {context.dist_dir}")
        return result
