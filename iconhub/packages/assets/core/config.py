"""配置模块：负责加载和缓存基于环境变量的应用设置。"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# 探测项目根目录并加载环境文件，支持通过 ENV_FILE/ENVIRONMENT 定制优先级。
def _detect_base_dir() -> Path:
    """向上遍历目录树，寻找包含 `iconhub` 目录的项目根路径。"""
    current = Path(__file__).resolve()
    for candidate in current.parents:
        if (candidate / "iconhub").is_dir():
            return candidate
    return current.parent


BASE_DIR = _detect_base_dir()


def _as_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _load_environment() -> None:
    env_file_override = os.getenv("ENV_FILE")
    if env_file_override:
        candidate = BASE_DIR / env_file_override
        if candidate.exists():
            load_dotenv(candidate, override=True, encoding="utf-8")
        return

    base_env = BASE_DIR / ".env"
    if base_env.exists():
        load_dotenv(base_env, override=False, encoding="utf-8")

    environment = os.getenv("ENVIRONMENT")
    if environment is None and _as_bool(os.getenv("DEBUG")):
        environment = "development"

    if environment:
        if environment.startswith(".env"):
            candidate_name = environment
        else:
            candidate_name = f".env.{environment}"
        candidate_path = BASE_DIR / candidate_name
        if candidate_path.exists():
            load_dotenv(candidate_path, override=True, encoding="utf-8")


_load_environment()


def _split_csv(raw: Optional[str]) -> list[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


class Settings(BaseSettings):
    """
    图标资源服务的全部配置项，每个字段都可以通过环境变量重写。
    存储根目录、公开挂载点以及上传限制集中在此，避免在代码中散落魔法字符串。
    """

    project_name: str = Field(default="IconHub API", alias="PROJECT_NAME")
    api_v1_str: str = Field(default="/api/v1", alias="API_V1_STR")
    debug: bool = Field(default=False, alias="DEBUG")

    # 资源存储
    storage_root: str = Field(default="uploads", alias="STORAGE_ROOT")
    public_mount: str = Field(default="/uploads", alias="PUBLIC_MOUNT")
    static_max_age: int = Field(default=300, alias="STATIC_MAX_AGE")

    # 上传限制
    max_upload_size: int = Field(default=25 * 1024 * 1024, alias="MAX_UPLOAD_SIZE")
    max_upload_files: int = Field(default=200, alias="MAX_UPLOAD_FILES")
    allowed_extensions_raw: str = Field(default=".svg,.png", alias="ALLOWED_EXTENSIONS")
    allowed_mime_types_raw: str = Field(default="image/svg+xml,image/png", alias="ALLOWED_MIME_TYPES")

    cors_origins_raw: str = Field(default="*", alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    app_port: int = Field(default=8000, alias="APP_PORT")
    timezone: str = Field(default="UTC", alias="TIMEZONE")

    model_config = SettingsConfigDict(extra='ignore')

    def _resolve_path(self, raw: str) -> Path:
        path = Path(raw)
        if not path.is_absolute():
            path = BASE_DIR / path
        return path

    @property
    def storage_directory(self) -> Path:
        """返回资源存储根目录的绝对路径，支持相对路径配置。"""
        return self._resolve_path(self.storage_root).resolve()

    @property
    def public_mount_path(self) -> str:
        """公开挂载点，始终以 '/' 开头且不以 '/' 结尾。"""
        mount = "/" + (self.public_mount or "").strip().strip("/")
        return mount.rstrip("/") or "/uploads"

    @property
    def log_directory(self) -> Path:
        """返回日志目录的绝对路径，支持相对路径配置。"""
        return self._resolve_path(self.log_dir)

    @property
    def log_file_path(self) -> Path:
        """组合日志目录与文件名，得到完整的日志文件路径。"""
        return self.log_directory / self.log_file_name

    @property
    def timezone_info(self) -> ZoneInfo:
        """返回当前配置对应的时区信息，无法解析时回退到 UTC。"""
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError:
            return ZoneInfo("UTC")

    # -------------------
    # 上传白名单帮助方法
    # -------------------
    @property
    def allowed_extensions(self) -> frozenset[str]:
        items = (ext.lower() for ext in _split_csv(self.allowed_extensions_raw))
        return frozenset(ext if ext.startswith(".") else f".{ext}" for ext in items)

    @property
    def allowed_mime_types(self) -> frozenset[str]:
        return frozenset(item.lower() for item in _split_csv(self.allowed_mime_types_raw))

    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.cors_origins_raw) or ["*"]


@lru_cache
def get_settings() -> Settings:
    """返回单例化的配置对象，避免重复解析环境变量造成性能浪费。"""
    return Settings()
