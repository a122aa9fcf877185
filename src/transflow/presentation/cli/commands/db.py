# src/transflow/presentation/cli/commands/db.py
"""
数据库管理命令：迁移、直接建表与状态检查。
"""

from __future__ import annotations

import typer
from rich.console import Console

from transflow.core.exceptions import DatabaseError
from transflow.management.db_service import DbService

from .._shared_options import FORCE_OPTION
from .._state import CLISharedState

app = typer.Typer(help="数据库管理命令 (迁移、建表、检查)。", no_args_is_help=True)
console = Console()


@app.command("migrate")
def db_migrate(ctx: typer.Context, force: FORCE_OPTION = False) -> None:
    """运行数据库迁移，将 Schema 升级到最新版本。"""
    state: CLISharedState = ctx.obj
    try:
        DbService(state.config, console=console).run_migrations(force=force)
    except DatabaseError as e:
        console.print(f"[bold red]❌ 迁移命令执行失败: {e}[/bold red]")
        raise typer.Exit(code=1)


@app.command("init")
def db_init(ctx: typer.Context) -> None:
    """不经过迁移，按 ORM 模型直接建表（适合开发与测试）。"""
    state: CLISharedState = ctx.obj
    try:
        tables = DbService(state.config, console=console).create_tables()
    except DatabaseError as e:
        console.print(f"[bold red]❌ 建表失败: {e}[/bold red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✅ 已就绪的表: {', '.join(tables)}[/green]")


@app.command("status")
def db_status(ctx: typer.Context) -> None:
    """检查数据库连接与迁移版本。"""
    state: CLISharedState = ctx.obj
    if not DbService(state.config, console=console).check_status():
        raise typer.Exit(code=1)
