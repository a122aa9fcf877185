# src/transflow/presentation/cli/commands/serve.py
"""启动 HTTP API 服务。"""

from __future__ import annotations

from typing import Annotated, Optional

import typer
import uvicorn

from transflow.presentation.api import create_app

from .._state import CLISharedState


def serve(
    ctx: typer.Context,
    host: Annotated[Optional[str], typer.Option(help="监听地址，默认取配置。")] = None,
    port: Annotated[Optional[int], typer.Option(help="监听端口，默认取配置。")] = None,
) -> None:
    """使用 uvicorn 运行 Transflow API。"""
    state: CLISharedState = ctx.obj
    app = create_app(state.container)
    uvicorn.run(
        app,
        host=host or state.config.api.host,
        port=port or state.config.api.port,
        log_config=None,
    )
