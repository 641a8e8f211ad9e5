"""构建步骤"""

from .build_step import BuildStep
from .clean_step import CleanStep, OutputRootStep
from .html_copy_step import HtmlCopyStep
from .asset_copy_step import AssetCopyStep

__all__ = [
    "BuildStep",
    "CleanStep",
    "OutputRootStep",
    "HtmlCopyStep",
    "AssetCopyStep",
]
