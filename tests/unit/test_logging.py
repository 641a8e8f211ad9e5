"""
日志门面单元测试

测试输出格式、级别过滤、错误流和日志文件。
"""

import re

import pytest

from sitestage.utils import logging as log
from sitestage.utils.logging import LogStage, OutputLevel, get_stage_logger


ISO_LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z\] \[(\w+)\]")


@pytest.fixture(autouse=True)
def fresh_facade():
    """每个测试使用新的输出门面"""
    log.close_logger()
    yield
    log.close_logger()


class TestOutputFormat:
    """输出格式测试"""

    def test_info_goes_to_stdout_with_timestamp(self, capsys):
        log.info("hello")
        out, err = capsys.readouterr()
        line = out.strip()
        match = ISO_LINE.match(line)
        assert match is not None
        assert match.group(1) == "INFO"
        assert line.endswith("hello")
        assert err == ""

    def test_success_has_check_mark(self, capsys):
        log.success("done")
        out, _ = capsys.readouterr()
        assert "[SUCCESS] ✓ done" in out

    def test_warning_tag(self, capsys):
        log.warning("careful")
        out, _ = capsys.readouterr()
        assert "[WARN] careful" in out

    def test_error_goes_to_stderr_with_trace(self, capsys):
        try:
            raise ValueError("boom")
        except ValueError as e:
            log.error("failed", exc=e)
        out, err = capsys.readouterr()
        assert out == ""
        assert "[ERROR] failed" in err
        assert "Traceback" in err
        assert "ValueError: boom" in err

    def test_stage_tag(self, capsys):
        get_stage_logger(LogStage.HTML).info("copying")
        out, _ = capsys.readouterr()
        assert "[INFO] [HTML] copying" in out

    def test_markup_is_not_interpreted(self, capsys):
        log.info("[bold]literal[/bold] path")
        out, _ = capsys.readouterr()
        assert "[bold]literal[/bold] path" in out


class TestLevels:
    """级别过滤测试"""

    def test_debug_hidden_by_default(self, capsys):
        log.debug("hidden")
        out, _ = capsys.readouterr()
        assert out == ""

    def test_debug_shown_when_enabled(self, capsys):
        log.set_log_level(OutputLevel.DEBUG)
        log.debug("visible")
        out, _ = capsys.readouterr()
        assert "[DEBUG] visible" in out

    def test_error_level_hides_info(self, capsys):
        log.set_log_level(OutputLevel.ERROR)
        log.info("quiet")
        log.warning("quiet too")
        out, _ = capsys.readouterr()
        assert out == ""

    def test_unknown_level_ignored(self):
        log.set_log_level("VERBOSE")
        assert log.get_output_facade().get_level() == OutputLevel.INFO


class TestLogFile:
    """日志文件测试"""

    def test_lines_appended_to_file(self, tmp_path, capsys):
        log_path = tmp_path / "logs" / "build.log"
        log.configure_logging(OutputLevel.INFO, log_file=log_path)
        log.info("first")
        log.error("second")
        log.print("raw line")
        log.close_logger()

        content = log_path.read_text(encoding="utf-8")
        assert "[INFO] first" in content
        assert "[ERROR] second" in content
        assert "raw line" in content
