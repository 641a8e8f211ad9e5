"""
构建步骤基类模块

定义构建步骤的抽象接口。
"""

from abc import ABC, abstractmethod

from sitestage.build.build_context import BuildContext, OperationResult


class BuildStep(ABC):
    """构建步骤抽象基类

    execute 返回 OperationResult；结果为 FATAL 时管道停止执行后续步骤，
    RECORDED 表示问题已记入台账、构建继续。
    """

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description

    @abstractmethod
    def execute(self, context: BuildContext) -> OperationResult:
        """执行构建步骤"""
        pass

    def _finish(self, context: BuildContext, issues_before: int, value=None) -> OperationResult:
        """本步骤新增了警告或错误时返回 RECORDED，否则返回 OK"""
        added = context.stats.issue_count - issues_before
        if added:
            return OperationResult.recorded(f"{self.description}: 记录了 {added} 个问题", value)
        return OperationResult.success(value)
