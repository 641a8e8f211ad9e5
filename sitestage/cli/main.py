"""
sitestage CLI 主入口

提供命令行接口，支持 build/validate/example 等命令。
"""

from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from .commands import build, validate


app = typer.Typer(
    name="sitestage",
    help="sitestage - 静态站点构建工具",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """显示版本信息"""
    if value:
        console.print(f"sitestage v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="显示版本信息"
    ),
) -> None:
    """sitestage - 静态站点构建工具

    使用 --help 查看可用命令的详细信息。
    """
    pass


app.command("build", help="构建静态站点")(build.build_command)
app.command("validate", help="验证配置文件")(validate.validate_command)


@app.command("example")
def example_command(
    output: str = typer.Option(
        "site.yaml",
        "--output", "-o",
        help="输出配置文件路径"
    )
) -> None:
    """生成默认配置文件"""
    from ..config import SiteConfig, save_config, ConfigError

    try:
        save_config(SiteConfig(), output)
    except ConfigError as e:
        console.print(f"[red]生成示例配置失败: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"✓ 示例配置文件已生成: [green]{output}[/green]")
    console.print("请根据需要修改配置文件，然后运行:")
    console.print(f"  [cyan]sitestage build -c {output}[/cyan]")


if __name__ == "__main__":
    app()
