"""分类路由：列出存储根目录下已存在的分类。"""

from fastapi import APIRouter, Depends

from iconhub.packages.assets.api.v1.schemas.assets import CategoryListResponse
from iconhub.packages.assets.core.dependencies import get_asset_service
from iconhub.packages.assets.core.responses import create_response
from iconhub.packages.assets.services.asset_service import AssetService

router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(service: AssetService = Depends(get_asset_service)):
    """按目录读取顺序返回分类名，不包含 default。"""
    return create_response("获取分类列表成功", service.list_categories())
