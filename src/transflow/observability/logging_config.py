# src/transflow/observability/logging_config.py
"""
集中配置日志系统：structlog 经由 ProcessorFormatter 桥接到标准 logging。

两种输出：
- console：开发环境，Rich 面板渲染，本地时间；
- json   ：生产环境，结构化 JSON，时间戳为 ISO-8601 UTC。
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Literal

import structlog
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from structlog.typing import Processor

APP_LOGGER_NAME = "transflow"

_NOISY_LOGGERS = (
    "asyncio",
    "httpcore",
    "httpx",
    "uvicorn.access",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
)


class PanelRenderer:
    """
    structlog 最终渲染器：每条日志渲染为一个 Rich 面板。

    标题是定宽级别标签加 logger 名称，正文是事件消息，键值对以两列表格附在下方，
    超长值去掉引号以便折行。
    """

    _LEVEL_STYLES: dict[str, tuple[str, str]] = {
        "debug": ("cyan", "DEBUG   "),
        "info": ("green", "INFO    "),
        "warning": ("yellow", "WARNING "),
        "error": ("bold red", "ERROR   "),
        "critical": ("magenta", "CRITICAL"),
    }

    def __init__(
        self,
        *,
        kv_truncate_at: int = 256,
        kv_key_width: int = 15,
        show_timestamp: bool = True,
        show_logger_name: bool = True,
        console: Console | None = None,
    ) -> None:
        self._console = console or Console()
        self._kv_truncate_at = kv_truncate_at
        self._kv_key_width = kv_key_width
        self._show_timestamp = show_timestamp
        self._show_logger_name = show_logger_name

    def __call__(
        self, logger: Any, name: str, event_dict: MutableMapping[str, Any]
    ) -> str:
        event = str(event_dict.pop("event", "")).strip()
        if not event:
            return ""
        timestamp = event_dict.pop("timestamp", "")
        level = str(event_dict.pop("level", "info")).lower()
        logger_name = event_dict.pop("logger", "")
        event_dict.pop("_record", None)
        event_dict.pop("_from_structlog", None)

        style, label = self._LEVEL_STYLES.get(level, ("dim", level.upper()))
        title = f"[{style}]{label}[/]"
        if self._show_logger_name and logger_name:
            title += f" [cyan dim]({logger_name})[/]"

        body: list[Any] = [Text(event)]
        if event_dict:
            table = Table(show_header=False, show_edge=False, box=None, padding=(0, 1))
            table.add_column(style="dim", justify="right", width=self._kv_key_width)
            table.add_column(style="bright_white", overflow="fold")
            for key, value in sorted(event_dict.items()):
                table.add_row(f"{key} :", Text(self._format_value(value)))
            body.append(table)

        subtitle = (
            Text(str(timestamp), style="dim")
            if self._show_timestamp and timestamp
            else None
        )
        with self._console.capture() as capture:
            self._console.print(
                Panel(
                    Group(*body),
                    title=Text.from_markup(title),
                    title_align="left",
                    subtitle=subtitle,
                    subtitle_align="right",
                    border_style=style,
                    expand=False,
                )
            )
        return capture.get().rstrip()

    def _format_value(self, value: Any) -> str:
        text = repr(value)
        if len(text) > self._kv_truncate_at or "\\n" in text:
            if text[:1] in ("'", '"') and text[-1:] == text[:1]:
                text = text[1:-1]
        return text


def setup_logging(
    *,
    log_level: str = "INFO",
    log_format: Literal["json", "console"] = "console",
    root_level: str | None = None,
    service: str | None = None,
    silence_noisy_libs: bool = True,
) -> None:
    """
    配置全局 structlog 日志系统。

    Args:
        log_level: `transflow` 命名空间下 logger 的最低级别。
        log_format: 'console'（Rich 面板）或 'json'（结构化输出）。
        root_level: 根 logger 级别；默认 WARNING，压低第三方噪声。
        service: 通过 contextvars 绑定到每条日志的服务名。
        silence_noisy_libs: 是否下调常见第三方 logger 的级别。
    """
    timestamper = (
        structlog.processors.TimeStamper(fmt="iso", utc=True)
        if log_format == "json"
        else structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)
    )
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        timestamper,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer: Processor = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if log_format == "json"
        else PanelRenderer()
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            timestamper,
        ],
    )
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    if root_logger.hasHandlers():
        root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel((root_level or "WARNING").upper())

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(log_level.upper())
    app_logger.propagate = True

    structlog.contextvars.clear_contextvars()
    if service:
        structlog.contextvars.bind_contextvars(service=service)

    if silence_noisy_libs:
        for noisy in _NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.get_logger(f"{APP_LOGGER_NAME}.logging_config").debug(
        "日志系统已配置完成。",
        log_format=log_format,
        app_log_level=log_level.upper(),
        service=service,
    )
