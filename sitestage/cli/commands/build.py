"""
Build 命令实现

执行一次完整的站点清理重建。
"""

import traceback
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ...build.build_context import BuildConfig
from ...build.builder import Builder
from ...config import SiteConfig, load_config, config_loader, ConfigError, ConfigValidationError
from ...utils.logging import set_log_level, set_log_file, OutputLevel


console = Console()


def _apply_overrides(
    site_config: SiteConfig,
    source: Optional[str],
    dist: Optional[str],
    assets: Optional[List[str]],
    html: Optional[List[str]],
) -> SiteConfig:
    """命令行参数覆盖配置文件中的值，相对路径以当前目录为基准"""
    overrides = {}
    if source:
        overrides['source_dir'] = source
    if dist:
        overrides['dist_dir'] = dist
    if assets:
        overrides['asset_dirs'] = list(assets)
    if html:
        overrides['html_files'] = list(html)

    if not overrides:
        return site_config

    data = site_config.to_dict()
    data.update(overrides)
    return config_loader.load_from_dict(data, base_path=Path.cwd())


def build_command(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="配置文件路径（省略时使用默认配置）"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="源目录"),
    dist: Optional[str] = typer.Option(None, "--dist", "-d", help="输出目录"),
    asset: Optional[List[str]] = typer.Option(None, "--asset", "-a", help="静态资源子目录（可重复）"),
    html: Optional[List[str]] = typer.Option(None, "--html", help="HTML 入口文件（可重复）"),
    report: Optional[str] = typer.Option(None, "--report", help="把构建台账写成 JSON 报告"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="日志输出文件"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出详细调试日志 (DEBUG 级别)"),
) -> None:
    """构建静态站点

    清空输出目录，复制 HTML 入口文件和静态资源目录，输出构建摘要。
    构建无错误且至少处理了一个文件时退出码为 0，否则为 1。

    示例:
        sitestage build
        sitestage build -c site.yaml
        sitestage build -s src -d dist -a css -a js --html index.html
    """
    set_log_level(OutputLevel.DEBUG if verbose else OutputLevel.INFO)

    if log_file:
        set_log_file(log_file)

    try:
        if config:
            console.print(f"[cyan]正在加载配置文件[/cyan]: {config}")
            site_config = load_config(Path(config))
        else:
            site_config = SiteConfig()

        site_config = _apply_overrides(site_config, source, dist, asset, html)
        build_config = BuildConfig.from_site_config(site_config)

    except ConfigValidationError as e:
        console.print("[red]配置验证失败:[/red]")
        console.print(e.format_errors(), markup=False)
        raise typer.Exit(1)
    except ConfigError as e:
        console.print(f"[red]配置错误[/red]: {e}")
        raise typer.Exit(1)

    try:
        result = Builder().build(build_config)
    except Exception as e:
        console.print(f"[red]✗ 构建过程中发生意外错误[/red]: {e}")
        if log_file:
            console.print(f"[yellow]详细错误信息:[/yellow]\n{traceback.format_exc()}", markup=False)
        raise typer.Exit(1)

    if report:
        try:
            report_path = result.write_report(report)
            console.print(f"[blue]构建报告[/blue]: {report_path}")
        except OSError as e:
            console.print(f"[yellow]无法写入构建报告 {report}: {e}[/yellow]")

    if not result.success:
        if log_file:
            console.print(f"[yellow]请检查日志文件 {log_file} 获取详细信息。[/yellow]")
        raise typer.Exit(result.exit_code)
