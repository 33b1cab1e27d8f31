"""图标资源 - 列表/上传/删除 请求与响应模型。"""

from typing import Optional

from pydantic import BaseModel

from iconhub.packages.assets.api.v1.schemas.common import ResponseEnvelope


class AssetItem(BaseModel):
    name: str
    url: str
    type: str  # image/svg+xml | image/png | application/octet-stream
    size: int
    category: str


class UploadRejection(BaseModel):
    name: Optional[str] = None
    error: str  # INVALID_NAME / TYPE_NOT_ALLOWED / SIZE_EXCEEDED / COUNT_EXCEEDED
    message: str


class UploadResult(BaseModel):
    accepted: list[AssetItem]
    rejected: list[UploadRejection]


class DeleteResult(BaseModel):
    ok: bool
    deletedName: str
    categoryFound: str


class SvgPreview(BaseModel):
    name: str
    category: Optional[str] = None
    svgText: str


AssetListResponse = ResponseEnvelope[list[AssetItem]]
AssetUploadResponse = ResponseEnvelope[UploadResult]
AssetDeleteResponse = ResponseEnvelope[DeleteResult]
SvgPreviewResponse = ResponseEnvelope[SvgPreview]
CategoryListResponse = ResponseEnvelope[list[str]]
