"""日志配置模块：统一控制台/文件输出格式，并为每条日志附带请求 ID。"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Optional

from .config import get_settings

# 业务日志可通过 ``extra={...}`` 携带的资源上下文字段，JSON 输出时一并落盘
ASSET_CONTEXT_FIELDS = ("category", "asset_name", "size")


class _TZFormatter(logging.Formatter):
    """Formatter that renders timestamps in Settings.timezone."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: D401
        dt = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(_TZFormatter):
    """ANSI 彩色格式化器：按日志级别着色，非终端输出时自动关闭。"""

    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(
        self,
        fmt: str,
        datefmt: Optional[str] = None,
        style: str = "%",
        use_colors: Optional[bool] = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{message}{self.RESET}" if color else message


class JsonFormatter(_TZFormatter):
    """Structured JSON formatter; asset context fields are copied when present."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "logger": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        for field in ASSET_CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Injects request_id from contextvars into every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.request_id = _request_id_ctx.get()
        return True


def setup_logging() -> None:
    """初始化日志系统：控制台彩色输出 + 按天滚动的文件日志。"""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)

    console_formatter = "json" if settings.log_json else "standard"
    file_formatter = "json" if settings.log_json else "plain"
    handlers = ["console", "file"]
    line_format = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "()": "iconhub.packages.assets.core.logger.ColorFormatter",
                    "format": line_format,
                },
                "plain": {
                    "()": "iconhub.packages.assets.core.logger._TZFormatter",
                    "format": line_format,
                },
                "json": {
                    "()": "iconhub.packages.assets.core.logger.JsonFormatter",
                },
            },
            "filters": {
                "request_id": {"()": "iconhub.packages.assets.core.logger.RequestIdFilter"},
            },
            "handlers": {
                "console": {
                    "level": settings.log_level,
                    "class": "logging.StreamHandler",
                    "formatter": console_formatter,
                    "filters": ["request_id"],
                },
                "file": {
                    "level": settings.log_level,
                    "class": "logging.handlers.TimedRotatingFileHandler",
                    "formatter": file_formatter,
                    "filename": str(settings.log_file_path),
                    "when": "midnight",
                    "backupCount": 14,
                    "encoding": "utf-8",
                    "delay": True,
                    "filters": ["request_id"],
                },
            },
            "loggers": {
                name: {"handlers": handlers, "level": settings.log_level, "propagate": False}
                for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "iconhub")
            },
            "root": {"handlers": handlers, "level": settings.log_level},
        }
    )


logger = logging.getLogger("iconhub")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()
