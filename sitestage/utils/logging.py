"""
日志工具 - 统一输出门面

提供带 ISO-8601 时间戳的统一输出接口，封装底层的 Rich Console。
ERROR 级别写入标准错误，其余级别写入标准输出。
"""

import sys
import threading
import traceback
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union, Any

from rich.console import Console
from rich.text import Text


class OutputLevel:
    """输出级别常量"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARN"
    ERROR = "ERROR"


class LogStage:
    """日志阶段标记"""
    INIT = "INIT"
    CLEAN = "CLEAN"
    HTML = "HTML"
    ASSETS = "ASSETS"
    SUMMARY = "SUMMARY"
    DONE = "DONE"


_LEVEL_ORDER = {
    OutputLevel.DEBUG: 0,
    OutputLevel.INFO: 1,
    OutputLevel.SUCCESS: 1,
    OutputLevel.WARNING: 2,
    OutputLevel.ERROR: 3,
}

_LEVEL_STYLES = {
    OutputLevel.DEBUG: "dim",
    OutputLevel.INFO: "default",
    OutputLevel.SUCCESS: "green",
    OutputLevel.WARNING: "yellow",
    OutputLevel.ERROR: "red bold",
}


class HighPerformanceOutputFacade:
    """输出门面

    统一封装所有输出操作。每一行都带时间戳和级别标记，
    输出失败时回退到标准流，永远不会把异常抛给调用方。
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._file_handle = None  # type: Optional[Any]
        self._log_level = OutputLevel.INFO

        # file 留空时 Rich 每次写入都取当前的 sys.stdout / sys.stderr
        self._console = Console(
            soft_wrap=True,
            markup=False,
            emoji=False,
            highlight=False,
            log_time=False,
            log_path=False,
        )
        self._error_console = Console(
            stderr=True,
            soft_wrap=True,
            markup=False,
            emoji=False,
            highlight=False,
        )

    @staticmethod
    def _get_timestamp() -> str:
        """获取 ISO-8601 时间戳（UTC，毫秒精度）"""
        now = datetime.now(timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def _should_output(self, level: str) -> bool:
        """判断是否应该输出该级别的消息"""
        current_level = _LEVEL_ORDER.get(self._log_level, 1)
        msg_level = _LEVEL_ORDER.get(level, 1)
        return msg_level >= current_level

    def _format_message(self, message: str, level: str, stage: Optional[str] = None) -> str:
        """格式化消息"""
        if level == OutputLevel.SUCCESS:
            message = f"✓ {message}"
        prefix = f"[{self._get_timestamp()}] [{level}]"
        if stage:
            prefix = f"{prefix} [{stage}]"
        return f"{prefix} {message}"

    @staticmethod
    def _format_exception(exc: Optional[BaseException]) -> str:
        if exc is None:
            return ""
        return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()

    def _emit(self, level: str, message: str, stage: Optional[str] = None,
              exc: Optional[BaseException] = None):
        if not self._should_output(level):
            return

        line = self._format_message(message, level, stage)
        trace = self._format_exception(exc) if level == OutputLevel.ERROR else ""

        with self._lock:
            console = self._error_console if level == OutputLevel.ERROR else self._console
            stream = sys.stderr if level == OutputLevel.ERROR else sys.stdout
            try:
                console.print(Text(line, style=_LEVEL_STYLES.get(level, "default")))
                if trace:
                    console.print(Text(trace, style="dim"))
            except Exception:
                # Rich 输出失败时回退到标准流
                try:
                    stream.write(line + "\n")
                    if trace:
                        stream.write(trace + "\n")
                    stream.flush()
                except Exception:
                    pass

            self._write_to_file(line, trace)

    def set_level(self, level: str):
        """设置输出级别"""
        with self._lock:
            if level in _LEVEL_ORDER:
                self._log_level = level

    def get_level(self) -> str:
        return self._log_level

    def set_log_file(self, file_path: Union[str, Path]):
        """设置日志文件（追加模式）"""
        with self._lock:
            self._close_file()
            try:
                log_path = Path(file_path)
                log_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_handle = open(log_path, "a", encoding="utf-8")
            except OSError as e:
                self.warning(f"无法打开日志文件 {file_path}: {e}")

    def _write_to_file(self, line: str, trace: str = ""):
        if not self._file_handle:
            return
        try:
            self._file_handle.write(line + "\n")
            if trace:
                self._file_handle.write(trace + "\n")
            self._file_handle.flush()
        except Exception:
            pass  # 文件写入失败不应该影响构建

    def _close_file(self):
        if self._file_handle:
            try:
                self._file_handle.close()
            except OSError:
                pass
            self._file_handle = None

    def debug(self, message: str, stage: Optional[str] = None):
        self._emit(OutputLevel.DEBUG, message, stage)

    def info(self, message: str, stage: Optional[str] = None):
        self._emit(OutputLevel.INFO, message, stage)

    def success(self, message: str, stage: Optional[str] = None):
        self._emit(OutputLevel.SUCCESS, message, stage)

    def warning(self, message: str, stage: Optional[str] = None):
        self._emit(OutputLevel.WARNING, message, stage)

    def error(self, message: str, stage: Optional[str] = None,
              exc: Optional[BaseException] = None):
        self._emit(OutputLevel.ERROR, message, stage, exc)

    def raw_print(self, text: str = ""):
        """原样输出一行（不带时间戳），用于摘要中的分隔线和表格"""
        with self._lock:
            try:
                self._console.print(Text(text))
            except Exception:
                try:
                    sys.stdout.write(text + "\n")
                    sys.stdout.flush()
                except Exception:
                    pass
            self._write_to_file(text)

    def close(self):
        """关闭输出门面"""
        with self._lock:
            self._close_file()


# 全局输出门面实例
_output_facade: Optional[HighPerformanceOutputFacade] = None


def get_output_facade() -> HighPerformanceOutputFacade:
    """获取全局输出门面实例"""
    global _output_facade
    if _output_facade is None:
        _output_facade = HighPerformanceOutputFacade()
    return _output_facade


def debug(message: str, stage: Optional[str] = None):
    """调试信息输出"""
    get_output_facade().debug(message, stage)


def info(message: str, stage: Optional[str] = None):
    """普通信息输出"""
    get_output_facade().info(message, stage)


def success(message: str, stage: Optional[str] = None):
    """成功信息输出（带 ✓ 前缀）"""
    get_output_facade().success(message, stage)


def warning(message: str, stage: Optional[str] = None):
    """警告信息输出"""
    get_output_facade().warning(message, stage)


def error(message: str, stage: Optional[str] = None, exc: Optional[BaseException] = None):
    """错误信息输出，附带异常时输出完整堆栈"""
    get_output_facade().error(message, stage, exc)


def print(text: str = ""):
    """统一的 print 函数替代"""
    get_output_facade().raw_print(text)


def set_log_level(level: str):
    """设置全局日志级别"""
    get_output_facade().set_level(level)


def set_log_file(file_path: Union[str, Path]):
    """设置全局日志文件"""
    get_output_facade().set_log_file(file_path)


def close_logger():
    """关闭日志系统"""
    global _output_facade
    if _output_facade:
        _output_facade.close()
        _output_facade = None


class StageLogger:
    """阶段日志器，自动带上阶段标记"""

    def __init__(self, stage: str):
        self.stage = stage

    def debug(self, message: str):
        debug(message, self.stage)

    def info(self, message: str):
        info(message, self.stage)

    def success(self, message: str):
        success(message, self.stage)

    def warning(self, message: str):
        warning(message, self.stage)

    def error(self, message: str, exc: Optional[BaseException] = None):
        error(message, self.stage, exc)


def get_stage_logger(stage: str) -> StageLogger:
    """获取阶段日志器"""
    return StageLogger(stage)


def configure_logging(level: str = OutputLevel.INFO, log_file: Optional[Union[str, Path]] = None):
    """配置日志系统"""
    set_log_level(level)
    if log_file:
        set_log_file(log_file)


import atexit
atexit.register(close_logger)
