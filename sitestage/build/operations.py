"""
文件系统操作模块

构建引擎的底层操作：确保目录存在、复制单个文件、递归复制目录树、清理输出目录。
所有操作把失败记入 BuildContext 的台账，不向调用方抛出 OSError。
"""

import os
import shutil
import stat
import sys
from pathlib import Path
from typing import Optional, Union

from ..utils.logging import info, success, warning, error
from ..utils.paths import format_size, is_relative_to, relative_posix
from .build_context import (
    BuildContext,
    CleanError,
    DirectoryCopyError,
    DirectoryCreateError,
    FileCopyError,
    OperationResult,
)

DIRECTORY_MODE = 0o755
FILE_MODE = 0o644

PathLike = Union[str, Path]


def ensure_directory(context: BuildContext, path: PathLike) -> OperationResult:
    """确保目录存在（幂等）

    路径已存在（任何类型）时不做任何事。否则连同缺失的上级目录一起创建，
    并记入 stats.directories。

    Returns:
        OperationResult: 成功为 OK；创建失败时错误已记入台账，结果为 FATAL
    """
    path = Path(path)
    if os.path.lexists(path):
        return OperationResult.success(path)

    try:
        path.mkdir(mode=DIRECTORY_MODE, parents=True)
    except OSError as e:
        error(f"创建目录失败: {path}", exc=e)
        context.stats.record_error(DirectoryCreateError(path=path, message=str(e)))
        return OperationResult.failure(f"创建目录失败: {path}: {e}")

    context.stats.record_directory(path)
    info(f"已创建目录: {relative_posix(path, Path.cwd())}")
    return OperationResult.success(path)


def _record_copy_failure(
    context: BuildContext,
    source: Path,
    destination: Path,
    message: str,
    exc: Optional[BaseException] = None,
) -> bool:
    error(f"复制文件失败: {source} -> {destination}", exc=exc)
    context.stats.record_error(FileCopyError(source=source, destination=destination, message=message))
    return False


def copy_file(context: BuildContext, source: PathLike, destination: PathLike) -> bool:
    """复制单个文件并记录统计信息

    先确保目标父目录存在，再整体读取源文件写入目标，最后以目标文件的 stat 结果作为大小。
    任何失败都记为 FileCopyError 并返回 False，由调用方决定是否继续。

    Args:
        context: 构建上下文
        source: 源文件路径
        destination: 目标文件路径

    Returns:
        bool: 是否复制成功
    """
    source = Path(source)
    destination = Path(destination)

    parent = ensure_directory(context, destination.parent)
    if parent.fatal:
        return _record_copy_failure(context, source, destination, parent.message or "无法创建目标目录")

    try:
        content = source.read_bytes()
        destination.write_bytes(content)
        os.chmod(destination, FILE_MODE)
        size = destination.stat().st_size
    except OSError as e:
        return _record_copy_failure(context, source, destination, str(e), e)

    record = context.stats.record_file(relative_posix(Path(os.path.abspath(destination)), context.dist_dir), size)
    success(f"已复制: {record.path} ({format_size(size)})")
    return True


def copy_tree(context: BuildContext, source_dir: PathLike, dest_dir: PathLike) -> int:
    """递归复制目录树

    源目录不存在只记警告并返回 0。目录按名称排序遍历；普通文件逐个复制，
    子目录递归，其他条目（符号链接、设备、套接字等）跳过并记警告。
    目录级别的失败记为 DirectoryCopyError，返回已复制的数量，不影响兄弟目录。

    Args:
        context: 构建上下文
        source_dir: 源目录
        dest_dir: 目标目录

    Returns:
        int: 成功复制的文件数
    """
    source_dir = Path(source_dir)
    dest_dir = Path(dest_dir)
    copied = 0

    if not source_dir.exists():
        warning(f"源目录不存在: {source_dir}")
        context.stats.record_warning(f"目录不存在: {source_dir}")
        return 0

    result = ensure_directory(context, dest_dir)
    if result.fatal:
        return _record_tree_failure(context, source_dir, result.message or "无法创建目标目录", copied)

    try:
        with os.scandir(source_dir) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        for entry in entries:
            source_path = source_dir / entry.name
            dest_path = dest_dir / entry.name

            if entry.is_dir(follow_symlinks=False):
                copied += copy_tree(context, source_path, dest_path)
            elif entry.is_file(follow_symlinks=False):
                if copy_file(context, source_path, dest_path):
                    copied += 1
            else:
                warning(f"跳过非文件/非目录条目: {source_path}")
                context.stats.record_warning(f"已跳过: {source_path}")
    except OSError as e:
        return _record_tree_failure(context, source_dir, str(e), copied, e)

    return copied


def _record_tree_failure(
    context: BuildContext,
    source_dir: Path,
    message: str,
    copied: int,
    exc: Optional[BaseException] = None,
) -> int:
    error(f"复制目录失败: {source_dir}", exc=exc)
    context.stats.record_error(DirectoryCopyError(directory=source_dir, message=message))
    return copied


def _unsafe_clean_reason(context: BuildContext) -> Optional[str]:
    """输出目录不能是文件系统根，也不能包含源目录"""
    dist_dir = context.dist_dir
    if dist_dir.parent == dist_dir:
        return f"拒绝清理文件系统根目录: {dist_dir}"
    if is_relative_to(context.source_dir, dist_dir):
        return f"拒绝清理包含源目录的输出目录: {dist_dir}"
    return None


def _on_remove_error(func, path, exc) -> None:
    """rmtree 错误处理：已消失的条目忽略，权限问题修正后重试一次"""
    if isinstance(exc, FileNotFoundError):
        return
    if isinstance(exc, PermissionError) and func in (os.unlink, os.remove, os.rmdir):
        parent = os.path.dirname(path)
        try:
            os.chmod(parent, stat.S_IRWXU)
            if not os.path.islink(path):
                os.chmod(path, stat.S_IRWXU)
        except OSError:
            raise exc
        func(path)
        return
    raise exc


def _force_rmtree(path: Path) -> None:
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_on_remove_error)
    else:
        shutil.rmtree(path, onerror=lambda func, p, exc_info: _on_remove_error(func, p, exc_info[1]))


def clean_output_root(context: BuildContext) -> bool:
    """清理输出目录

    输出目录不存在时直接成功。存在时递归删除（force 语义）。

    Returns:
        bool: 是否清理成功；失败时 CleanError 已记入台账
    """
    dist_dir = context.dist_dir

    reason = _unsafe_clean_reason(context)
    if reason:
        error(reason)
        context.stats.record_error(CleanError(message=reason))
        return False

    if not os.path.lexists(dist_dir):
        return True

    try:
        info("正在清理输出目录...")
        if dist_dir.is_symlink() or not dist_dir.is_dir():
            dist_dir.unlink()
        else:
            _force_rmtree(dist_dir)
    except OSError as e:
        error("清理输出目录失败", exc=e)
        context.stats.record_error(CleanError(message=str(e)))
        return False

    success("输出目录已清理")
    return True
