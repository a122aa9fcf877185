# src/transflow/presentation/cli/main.py
import os
from typing import Literal

import typer
from rich.console import Console

from transflow.bootstrap import create_app_config, create_container

from ._state import CLISharedState
from .commands import db, documents, serve, users

app = typer.Typer(
    name="transflow",
    help="Transflow 翻译工作流命令行管理工具。",
    add_completion=False,
    no_args_is_help=True,
)

app.add_typer(db.app, name="db")
app.add_typer(users.app, name="users")
app.add_typer(documents.app, name="documents")
app.command("serve")(serve.serve)

console = Console()


@app.callback()
def main(ctx: typer.Context) -> None:
    """
    主回调函数：加载配置、装配 DI 容器，并在命令结束后关闭资源。
    """
    try:
        env_mode_str = os.getenv("TRANSFLOW_ENV", "dev").lower()
        if env_mode_str not in ("prod", "dev", "test"):
            env_mode_str = "dev"
        env_mode: Literal["prod", "dev", "test"] = env_mode_str  # type: ignore[assignment]

        config = create_app_config(env_mode=env_mode)
        container = create_container(config)
        ctx.obj = CLISharedState(config, container)
        ctx.call_on_close(container.shutdown_resources)
    except Exception as e:
        console.print(f"[bold red]❌ 启动失败：无法加载配置或初始化容器: {e}[/bold red]")
        raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
