# src/transflow/presentation/cli/commands/documents.py
"""文档查询命令。"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from transflow.core.types import DocumentStatus

from .._state import CLISharedState
from .._utils import get_coordinator, run_async

app = typer.Typer(help="查看文档。", no_args_is_help=True)
console = Console()


@app.command("list")
def documents_list(
    ctx: typer.Context,
    status: Annotated[
        Optional[DocumentStatus],
        typer.Option("--status", "-s", case_sensitive=False, help="按状态过滤。"),
    ] = None,
) -> None:
    """列出文档及其当前状态。"""
    state: CLISharedState = ctx.obj

    async def _run():
        async with get_coordinator(state) as coordinator:
            return await coordinator.list_documents(status=status)

    docs = run_async(_run())
    if not docs:
        console.print("[yellow]没有符合条件的文档。[/yellow]")
        return

    table = Table(title="文档")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("标题")
    table.add_column("语言")
    table.add_column("状态", style="cyan")
    for doc in docs:
        table.add_row(
            doc.id, doc.title, f"{doc.source_lang} → {doc.target_lang}", doc.status.value
        )
    console.print(table)
