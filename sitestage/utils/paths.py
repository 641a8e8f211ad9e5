"""
路径工具

提供路径处理和大小格式化相关的工具函数。
"""

import math
import os
from pathlib import Path
from typing import Union


SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def expand_path(path: Union[str, Path], base: Union[str, Path, None] = None) -> Path:
    """扩展路径（处理环境变量和用户目录）并转为绝对路径

    只做词法上的规范化，不跟随符号链接，输出目录本身是链接时仍指向链接。

    Args:
        path: 原始路径
        base: 相对路径的基准目录，默认为当前工作目录

    Returns:
        Path: 绝对路径
    """
    if isinstance(path, str):
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)

    path = Path(path)
    if not path.is_absolute() and base is not None:
        path = Path(base) / path

    return Path(os.path.abspath(path))


def is_relative_to(path: Path, base: Path) -> bool:
    """判断 path 是否位于 base 之下（含 base 本身）"""
    try:
        path.relative_to(base)
    except ValueError:
        return False
    return True


def relative_posix(path: Path, base: Path) -> str:
    """返回 path 相对 base 的正斜杠路径，无法计算时返回原路径"""
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


def format_size(size_bytes: int) -> str:
    """格式化文件大小

    单位取 floor(log1024(size))，最大到 GB，数值保留两位小数并去掉多余的零。
    例如 1536 -> "1.5 KB"。

    Args:
        size_bytes: 字节数

    Returns:
        str: 格式化的大小字符串

    Raises:
        ValueError: 字节数为负
    """
    if size_bytes < 0:
        raise ValueError(f"字节数不能为负: {size_bytes}")
    if size_bytes == 0:
        return "0 Bytes"

    unit_index = int(math.floor(math.log(size_bytes, 1024)))
    # log 的浮点误差可能让 1024**n 落到下一档之下
    if 1024 ** (unit_index + 1) <= size_bytes:
        unit_index += 1
    elif 1024 ** unit_index > size_bytes:
        unit_index -= 1
    unit_index = max(0, min(unit_index, len(SIZE_UNITS) - 1))

    value = round(size_bytes / (1024 ** unit_index), 2)
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[unit_index]}"


def is_safe_name(name: str) -> bool:
    """检查配置中的相对名称是否安全（非空、非绝对路径、不含 ..）

    Args:
        name: 文件名或子目录名

    Returns:
        bool: 是否安全
    """
    if not name or not name.strip():
        return False

    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or Path(name).is_absolute():
        return False
    if len(normalized) >= 2 and normalized[1] == ":":
        return False

    return ".." not in normalized.split("/")
