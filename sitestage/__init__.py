"""
sitestage - 静态站点构建工具

把源目录中的 HTML 入口文件和静态资源目录完整复制到干净的输出目录，
并记录每个文件的统计信息和构建警告/错误。
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .config.schema import SiteConfig
from .build.builder import Builder, BuildResult

__all__ = ["SiteConfig", "Builder", "BuildResult", "__version__"]
