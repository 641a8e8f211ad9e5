"""
Validate 命令实现

验证配置文件的命令。
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ...config import load_config, validate_config


console = Console()


def validate_command(
    config: str = typer.Option(..., "--config", "-c", help="配置文件路径"),
    json_output: bool = typer.Option(False, "--json", help="输出 JSON 格式的错误信息"),
) -> None:
    """验证配置文件

    示例:
        sitestage validate -c site.yaml
        sitestage validate -c site.yaml --json
    """
    config_path = Path(config)

    errors = validate_config(config_path)

    if not errors:
        if json_output:
            console.print_json(json.dumps({"file": str(config_path), "errors": [], "error_count": 0}))
            return
        site_config = load_config(config_path)
        console.print("[green]✓ 配置文件验证通过[/green]")

        table = Table(title="构建配置")
        table.add_column("项目", style="cyan")
        table.add_column("值", style="green")
        table.add_row("源目录", str(site_config.source_dir))
        table.add_row("输出目录", str(site_config.dist_dir))
        table.add_row("静态资源目录", ", ".join(site_config.asset_dirs) or "-")
        table.add_row("HTML 文件", ", ".join(site_config.html_files) or "-")
        console.print(table)
        return

    if json_output:
        error_data = {
            "file": str(config_path),
            "errors": errors,
            "error_count": len(errors),
        }
        console.print_json(json.dumps(error_data, ensure_ascii=False, default=str))
    else:
        console.print(f"[red]✗ 配置文件验证失败[/red] ({len(errors)} 个错误):")
        for error in errors:
            loc = " -> ".join(str(item) for item in error.get('loc', []))
            msg = error.get('msg', '未知错误')
            if loc:
                console.print(f"  • 字段 '{loc}': {msg}", markup=False)
            else:
                console.print(f"  • {msg}", markup=False)

    raise typer.Exit(1)
