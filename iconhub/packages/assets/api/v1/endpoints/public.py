"""公开资源访问：URL 结构与磁盘布局一一对应，``<mount>/[<category>/]<name>``。"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from iconhub.packages.assets.core.config import get_settings
from iconhub.packages.assets.core.dependencies import get_asset_service
from iconhub.packages.assets.services.asset_service import AssetService

router = APIRouter(tags=["public"], include_in_schema=False)


def _asset_response(content: bytes, media_type: str) -> Response:
    max_age = get_settings().static_max_age
    return Response(content=content, media_type=media_type, headers={"Cache-Control": f"public, max-age={max_age}"})


@router.get("/{file_name}")
def serve_root_asset(file_name: str, service: AssetService = Depends(get_asset_service)):
    return _asset_response(*service.read_asset(file_name))


@router.get("/{category}/{file_name}")
def serve_category_asset(category: str, file_name: str, service: AssetService = Depends(get_asset_service)):
    return _asset_response(*service.read_asset(file_name, category))
