# src/transflow/management/db_service.py
"""
数据库管理服务：迁移、直接建表与状态检查。
这是所有数据库运维操作的核心逻辑封装，CLI 只负责参数解析与退出码。
"""

from __future__ import annotations

from pathlib import Path

import structlog
from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory
from alembic.util import CommandError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlalchemy import Engine, create_engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError

from transflow.config import TransflowConfig
from transflow.core.exceptions import DatabaseError
from transflow.infrastructure.db import _schema  # noqa: F401  注册所有模型
from transflow.infrastructure.db.base import metadata

from .config_utils import convert_async_to_sync_url, mask_db_url, render_url

logger = structlog.get_logger(__name__)

# alembic.ini 位于仓库根目录（src/transflow/management 向上三级）
DEFAULT_ALEMBIC_INI = Path(__file__).resolve().parents[3] / "alembic.ini"


class DbService:
    """封装数据库迁移、建表和状态检查。"""

    def __init__(
        self,
        config: TransflowConfig,
        alembic_ini_path: str | Path | None = None,
        console: Console | None = None,
    ):
        self.config = config
        self.alembic_ini_path = Path(alembic_ini_path or DEFAULT_ALEMBIC_INI)
        self.sync_url = convert_async_to_sync_url(config.database.url)
        self.console = console or Console()

    def _create_sync_engine(self) -> Engine:
        return create_engine(render_url(self.sync_url))

    def _get_alembic_cfg(self) -> AlembicConfig:
        cfg = AlembicConfig(str(self.alembic_ini_path))
        # 保留应用自己的日志配置，不让 alembic.ini 覆盖
        cfg.attributes["skip_logging"] = True
        cfg.set_main_option(
            "script_location", str(self.alembic_ini_path.parent / "alembic")
        )
        # ConfigParser 插值要求转义 '%'
        cfg.set_main_option("sqlalchemy.url", render_url(self.sync_url).replace("%", "%%"))
        return cfg

    def create_tables(self) -> list[str]:
        """按 ORM 元数据直接建表（幂等），返回当前存在的表名。"""
        engine = self._create_sync_engine()
        try:
            metadata.create_all(engine)
            tables = sorted(inspect(engine).get_table_names())
        except SQLAlchemyError as e:
            raise DatabaseError(f"建表失败: {e}") from e
        finally:
            engine.dispose()
        logger.info("ORM 建表完成", url=mask_db_url(self.sync_url), tables=tables)
        return tables

    def run_migrations(self, force: bool = False) -> None:
        """
        运行 Alembic 迁移到 head。

        Args:
            force: 标准迁移失败时，退回到 ORM `create_all` 兜底。

        Raises:
            DatabaseError: 迁移失败且未启用兜底。
        """
        self.console.print(Panel("数据库迁移 (upgrade head)", border_style="cyan"))
        try:
            command.upgrade(self._get_alembic_cfg(), "head")
        except (CommandError, SQLAlchemyError) as e:
            logger.error("Alembic 迁移失败", error=str(e))
            if not force:
                raise DatabaseError(f"迁移失败: {e}") from e
            self.console.print("[yellow]标准迁移失败，使用 ORM 建表兜底...[/yellow]")
            self.create_tables()
            return
        self.console.print("[bold green]迁移成功。[/bold green]")

    def check_status(self) -> bool:
        """检查连接与迁移版本一致性，打印结果表；全部正常时返回 True。"""
        table = Table(show_header=False, box=None)
        table.add_column(style="cyan", width=24)
        table.add_column()
        table.add_row("数据库", mask_db_url(self.sync_url))

        healthy = True
        db_version = "[无法访问]"
        engine = self._create_sync_engine()
        try:
            with engine.connect() as conn:
                table.add_row("连接", "[green]成功[/green]")
                if inspect(conn).has_table("alembic_version"):
                    db_version = (
                        conn.execute(text("SELECT version_num FROM alembic_version"))
                    ).scalar_one_or_none() or "[空]"
                else:
                    db_version = "[表不存在]"
        except SQLAlchemyError as e:
            table.add_row("连接", f"[red]失败: {e}[/red]")
            healthy = False
        finally:
            engine.dispose()

        try:
            script = ScriptDirectory.from_config(self._get_alembic_cfg())
            head_version = script.get_current_head() or "[无]"
        except CommandError:
            head_version = "[无法获取]"

        table.add_row("数据库 Alembic 版本", db_version)
        table.add_row("代码 Alembic Head", head_version)
        if db_version != head_version:
            table.add_row("版本一致性", "[yellow]不一致或未迁移[/yellow]")
            healthy = False
        else:
            table.add_row("版本一致性", "[green]一致[/green]")

        self.console.print(Panel(table, title="数据库状态", border_style="cyan"))
        return healthy
