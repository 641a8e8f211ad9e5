"""
构建上下文模块

定义构建过程中的共享数据结构：不可变的构建配置、构建台账（统计、警告、错误）
和操作结果类型。每次构建创建一个 BuildContext，显式传给所有操作。
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..config.schema import SiteConfig
from ..utils.paths import expand_path, format_size


@dataclass(frozen=True)
class BuildConfig:
    """构建配置（构建开始时创建一次，之后不可变）

    所有路径在任何 I/O 之前解析为绝对路径。
    """
    source_dir: Path
    dist_dir: Path
    asset_dirs: tuple = ()
    html_files: tuple = ()
    start_time: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, 'source_dir', expand_path(self.source_dir))
        object.__setattr__(self, 'dist_dir', expand_path(self.dist_dir))
        object.__setattr__(self, 'asset_dirs', tuple(self.asset_dirs))
        object.__setattr__(self, 'html_files', tuple(self.html_files))

    @classmethod
    def from_site_config(cls, config: SiteConfig, base_dir: Union[str, Path, None] = None) -> 'BuildConfig':
        """由站点配置创建构建配置

        Args:
            config: 站点配置
            base_dir: 相对路径的基准目录，默认为当前工作目录
        """
        return cls(
            source_dir=expand_path(config.source_dir, base_dir),
            dist_dir=expand_path(config.dist_dir, base_dir),
            asset_dirs=tuple(config.asset_dirs),
            html_files=tuple(config.html_files),
        )


@dataclass(frozen=True)
class FileRecord:
    """已复制文件记录"""
    path: str  # 相对输出根目录的路径（正斜杠）
    size: int
    formatted_size: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'size': self.size,
            'formattedSize': self.formatted_size,
        }


class ErrorRecord(ABC):
    """错误记录基类，各子类对应一种失败的操作"""

    kind = "error"
    message: str

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """转换为台账中的错误字典"""
        pass


@dataclass(frozen=True)
class DirectoryCreateError(ErrorRecord):
    """目录创建失败"""
    path: Path
    message: str
    kind = "directory_create"

    def to_dict(self) -> Dict[str, Any]:
        return {'path': str(self.path), 'error': self.message}


@dataclass(frozen=True)
class FileCopyError(ErrorRecord):
    """文件复制失败"""
    source: Path
    destination: Path
    message: str
    kind = "file_copy"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': str(self.source),
            'destination': str(self.destination),
            'error': self.message,
        }


@dataclass(frozen=True)
class DirectoryCopyError(ErrorRecord):
    """目录复制失败"""
    directory: Path
    message: str
    kind = "directory_copy"

    def to_dict(self) -> Dict[str, Any]:
        return {'directory': str(self.directory), 'error': self.message}


@dataclass(frozen=True)
class CleanError(ErrorRecord):
    """清理输出目录失败"""
    message: str
    operation: str = "clean"
    kind = "clean"

    def to_dict(self) -> Dict[str, Any]:
        return {'operation': self.operation, 'error': self.message}


@dataclass
class BuildStats:
    """构建台账

    只追加。files_processed 与 total_size 只通过 record_file 修改，
    保证 files_processed == len(files) 且 total_size == sum(f.size)。
    """
    files_processed: int = 0
    total_size: int = 0
    errors: List[ErrorRecord] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    directories: List[Path] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)

    def record_file(self, relative_path: str, size: int) -> FileRecord:
        """记录一个成功复制的文件"""
        record = FileRecord(path=relative_path, size=size, formatted_size=format_size(size))
        self.files.append(record)
        self.files_processed += 1
        self.total_size += size
        return record

    def record_error(self, record: ErrorRecord) -> None:
        self.errors.append(record)

    def record_warning(self, message: str) -> None:
        self.warnings.append(message)

    def record_directory(self, path: Path) -> None:
        self.directories.append(path)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def issue_count(self) -> int:
        """已记录的警告与错误总数"""
        return len(self.warnings) + len(self.errors)

    def to_dict(self) -> Dict[str, Any]:
        """转换为可 JSON 序列化的字典"""
        return {
            'filesProcessed': self.files_processed,
            'totalSize': self.total_size,
            'totalSizeFormatted': format_size(self.total_size),
            'directories': [str(d) for d in self.directories],
            'warnings': list(self.warnings),
            'errors': [dict(e.to_dict(), kind=e.kind) for e in self.errors],
            'files': [f.to_dict() for f in self.files],
        }


class Outcome(str, Enum):
    """单个操作的结果分类"""
    OK = "ok"              # 成功
    RECORDED = "recorded"  # 失败已记入台账，调用方继续
    FATAL = "fatal"        # 失败已记入台账，调用方必须中止


@dataclass(frozen=True)
class OperationResult:
    """操作结果"""
    outcome: Outcome
    value: Any = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def fatal(self) -> bool:
        return self.outcome is Outcome.FATAL

    @classmethod
    def success(cls, value: Any = None) -> 'OperationResult':
        return cls(Outcome.OK, value)

    @classmethod
    def recorded(cls, message: str, value: Any = None) -> 'OperationResult':
        return cls(Outcome.RECORDED, value, message)

    @classmethod
    def failure(cls, message: str, value: Any = None) -> 'OperationResult':
        return cls(Outcome.FATAL, value, message)


@dataclass
class BuildContext:
    """构建上下文，包含一次构建的配置和台账"""
    config: BuildConfig
    stats: BuildStats = field(default_factory=BuildStats)

    # 构建过程中生成的数据
    html_count: int = 0
    asset_count: int = 0
    aborted: bool = False
    end_time: Optional[float] = None

    @property
    def source_dir(self) -> Path:
        return self.config.source_dir

    @property
    def dist_dir(self) -> Path:
        return self.config.dist_dir

    def elapsed_ms(self) -> int:
        """自构建开始经过的毫秒数"""
        end = self.end_time if self.end_time is not None else time.time()
        return int(round((end - self.config.start_time) * 1000))

    def exit_code(self) -> int:
        """由台账推导退出码：有错误或未处理任何文件为 1，否则为 0"""
        if self.aborted or self.stats.has_errors:
            return 1
        if self.stats.files_processed == 0:
            return 1
        return 0
