"""图标资源业务包：按分类存储 SVG/PNG 图标并提供列表、上传与删除。"""

from iconhub.packages.types import AppPackage

from .api.v1 import api_router, public_router
from .core.config import get_settings
from .core.exceptions import (
    AssetError,
    asset_error_handler,
    generic_exception_handler,
    http_exception_handler,
)
from .core.logger import logger, setup_logging
from .core.responses import create_response


def init_storage():
    """启动时幂等地创建存储根目录。"""
    root = get_settings().storage_directory
    root.mkdir(parents=True, exist_ok=True)
    return root


package = AppPackage(
    name="assets",
    api_router=api_router,
    public_router=public_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_storage=init_storage,
    create_response=create_response,
    http_exception_handler=http_exception_handler,
    generic_exception_handler=generic_exception_handler,
    domain_exception=AssetError,
    domain_exception_handler=asset_error_handler,
)

__all__ = ["package", "api_router", "public_router", "get_settings"]
