"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from iconhub.packages.assets.core.config import get_settings
from iconhub.packages.assets.services.asset_service import AssetService


def get_asset_service() -> AssetService:
    """按当前配置构建资源服务；服务本身无状态，每次请求重新创建即可。"""
    return AssetService.from_settings(get_settings())
