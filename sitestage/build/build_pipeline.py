"""
构建管道模块

使用管道模式协调构建步骤的执行：清理 -> 创建输出根目录 -> 复制 HTML -> 复制静态资源，
之后输出摘要并由台账推导退出码。
"""

import dataclasses
import time
from typing import List, Optional

from ..utils.logging import info, success, warning, error, LogStage
from .build_context import BuildConfig, BuildContext
from .steps.build_step import BuildStep
from .steps.clean_step import CleanStep, OutputRootStep
from .steps.html_copy_step import HtmlCopyStep
from .steps.asset_copy_step import AssetCopyStep
from .summary import log_build_summary


class BuildPipeline:
    """构建管道，负责协调构建步骤的执行"""

    def __init__(self):
        self._steps: List[BuildStep] = []
        self._init_default_steps()

    def _init_default_steps(self):
        """初始化默认的构建步骤"""
        self._steps = [
            CleanStep(),
            OutputRootStep(),
            HtmlCopyStep(),
            AssetCopyStep(),
        ]

    def add_step(self, step: BuildStep, position: Optional[int] = None):
        """添加构建步骤"""
        if position is None:
            self._steps.append(step)
        else:
            self._steps.insert(position, step)

    def remove_step(self, step_name: str):
        """移除构建步骤"""
        self._steps = [step for step in self._steps if step.name != step_name]

    def get_steps(self) -> List[BuildStep]:
        """获取所有构建步骤"""
        return self._steps.copy()

    def execute(self, config: BuildConfig) -> BuildContext:
        """执行构建管道

        任何步骤返回 FATAL 时立即停止后续步骤。意外异常在这里捕获并记录，
        不会传给调用方。无论是否中止，摘要都会输出。

        Args:
            config: 构建配置

        Returns:
            BuildContext: 构建上下文，exit_code() 给出最终状态
        """
        # 计时以管道开始执行为准
        config = dataclasses.replace(config, start_time=time.time())
        context = BuildContext(config=config)

        try:
            info("开始构建...", stage=LogStage.INIT)
            info(f"源目录: {config.source_dir}")
            info(f"输出目录: {config.dist_dir}")

            for step in self._steps:
                info(f"执行步骤: {step.description}", stage=LogStage.INIT)
                result = step.execute(context)
                if result.fatal:
                    context.aborted = True
                    error(f"步骤 '{step.name}' 失败，构建中止: {result.message}", stage=LogStage.INIT)
                    break
                if not result.ok:
                    warning(f"步骤 '{step.name}' 完成，存在已记录的问题: {result.message}", stage=LogStage.INIT)

        except Exception as e:
            context.aborted = True
            error(f"构建过程失败: {e}", stage=LogStage.INIT, exc=e)

        context.end_time = time.time()
        self._report(context)
        return context

    def _report(self, context: BuildContext) -> None:
        try:
            log_build_summary(context)
        except Exception as e:
            context.aborted = True
            error(f"输出构建摘要失败: {e}", stage=LogStage.SUMMARY, exc=e)

        if context.stats.has_errors:
            error("构建完成，但存在错误", stage=LogStage.DONE)
        elif context.aborted:
            error("构建失败", stage=LogStage.DONE)
        elif context.stats.files_processed == 0:
            warning("构建完成，但没有处理任何文件", stage=LogStage.DONE)
        else:
            success("构建成功完成!", stage=LogStage.DONE)
