"""测试夹具：为 pytest 提供隔离的存储根目录与客户端。"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

# 必须在导入应用之前设置，避免日志与资源落到项目目录
_SESSION_DIR = tempfile.mkdtemp(prefix="iconhub_test_")
os.environ["STORAGE_ROOT"] = os.path.join(_SESSION_DIR, "uploads")
os.environ["LOG_DIR"] = os.path.join(_SESSION_DIR, "log")

import pytest
from fastapi.testclient import TestClient

from iconhub.main import app
from iconhub.packages.assets.core.dependencies import get_asset_service
from iconhub.packages.assets.services.asset_service import AssetService


@pytest.fixture(scope="session", autouse=True)
def cleanup_session_dir() -> Generator[None, None, None]:
    """会话结束后清理临时目录。"""
    yield
    shutil.rmtree(_SESSION_DIR, ignore_errors=True)


@pytest.fixture()
def store_root(tmp_path: Path) -> Path:
    """每个用例独立的存储根目录（尚未创建，验证惰性创建行为）。"""
    return tmp_path / "uploads"


@pytest.fixture()
def asset_service(store_root: Path) -> AssetService:
    return AssetService(store_root, max_upload_size=1024, max_upload_files=5)


@pytest.fixture()
def client(asset_service: AssetService) -> Generator[TestClient, None, None]:
    """构建 FastAPI TestClient，并注入指向临时目录的资源服务。"""
    app.dependency_overrides[get_asset_service] = lambda: asset_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
