"""图标资源路由：列表、上传、删除与 SVG 文本预览。

分类通过查询参数 ``category`` 传入；未提供或为 "default" 时指向存储根目录。
领域异常由全局 ``AssetError`` 处理器统一映射为状态码，这里不做捕获。
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from starlette.concurrency import run_in_threadpool

from iconhub.packages.assets.api.v1.schemas.assets import (
    AssetDeleteResponse,
    AssetListResponse,
    AssetUploadResponse,
    SvgPreviewResponse,
)
from iconhub.packages.assets.core.dependencies import get_asset_service
from iconhub.packages.assets.core.logger import logger
from iconhub.packages.assets.core.responses import create_response
from iconhub.packages.assets.services.asset_service import AssetService, UploadItem

router = APIRouter(tags=["assets"])


@router.get("/assets", response_model=AssetListResponse)
def list_assets(
    category: Optional[str] = Query(None, description="分类名；default 或缺省时返回根目录及全部分类"),
    service: AssetService = Depends(get_asset_service),
):
    items = service.list_assets(category)
    return create_response("获取资源列表成功", [item.to_dict() for item in items])


@router.post("/assets", response_model=AssetUploadResponse)
async def upload_assets(
    category: Optional[str] = Query(None, description="目标分类，缺省为根目录"),
    files: list[UploadFile] = File(...),
    service: AssetService = Depends(get_asset_service),
):
    items: list[UploadItem] = []
    for position, up in enumerate(files):
        try:
            # 多读 1 字节即可判定是否超限，无需把超大文件整个读入内存
            if position < service.max_upload_files:
                data = await up.read(service.max_upload_size + 1)
            else:
                data = b""
        finally:
            await up.close()
        items.append(UploadItem(filename=up.filename, content_type=up.content_type, data=data))

    logger.info("assets.upload category=%s files=%s", category, len(items))
    outcome = await run_in_threadpool(service.upload_assets, category, items)
    msg = "文件上传成功" if not outcome.rejected else "部分文件未通过校验"
    return create_response(msg, outcome.to_dict())


@router.delete("/assets/{file_name}", response_model=AssetDeleteResponse)
def delete_asset(
    file_name: str,
    category: Optional[str] = Query(None, description="指定分类时只在该分类中删除，否则先根目录后各分类查找"),
    service: AssetService = Depends(get_asset_service),
):
    outcome = service.delete_asset(file_name, category)
    return create_response("文件删除成功", outcome.to_dict())


@router.get("/assets/{file_name}/svg", response_model=SvgPreviewResponse)
def preview_svg(
    file_name: str,
    category: Optional[str] = Query(None),
    service: AssetService = Depends(get_asset_service),
):
    text, category_found = service.read_svg(file_name, category)
    return create_response(
        "获取 SVG 内容成功",
        {"name": file_name, "category": category_found, "svgText": text},
    )
