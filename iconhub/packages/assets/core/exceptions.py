"""异常处理模块：定义资源存储的领域异常、统一的业务异常与响应格式。"""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from .constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_PAYLOAD_TOO_LARGE,
)
from .enums import AssetErrorKind
from .logger import get_request_id, logger

ERROR_MESSAGES = {
    AssetErrorKind.INVALID_NAME: "名称无效",
    AssetErrorKind.TYPE_NOT_ALLOWED: "文件类型不允许",
    AssetErrorKind.SIZE_EXCEEDED: "文件大小超出限制",
    AssetErrorKind.COUNT_EXCEEDED: "单次上传文件数量超出限制",
    AssetErrorKind.NOT_FOUND: "文件不存在",
    AssetErrorKind.UPLOAD_FAILED: "上传失败：服务器错误",
    AssetErrorKind.DELETE_FAILED: "删除失败：服务器错误",
}

ERROR_STATUS_CODES = {
    AssetErrorKind.INVALID_NAME: HTTP_STATUS_BAD_REQUEST,
    AssetErrorKind.TYPE_NOT_ALLOWED: HTTP_STATUS_BAD_REQUEST,
    AssetErrorKind.SIZE_EXCEEDED: HTTP_STATUS_PAYLOAD_TOO_LARGE,
    AssetErrorKind.COUNT_EXCEEDED: HTTP_STATUS_BAD_REQUEST,
    AssetErrorKind.NOT_FOUND: HTTP_STATUS_NOT_FOUND,
    AssetErrorKind.UPLOAD_FAILED: HTTP_STATUS_INTERNAL_SERVER_ERROR,
    AssetErrorKind.DELETE_FAILED: HTTP_STATUS_INTERNAL_SERVER_ERROR,
}


class AssetError(Exception):
    """资源存储核心抛出的领域异常，不关心传输层状态码。"""

    def __init__(self, kind: AssetErrorKind, msg: Optional[str] = None, *, name: Optional[str] = None) -> None:
        self.kind = kind
        self.msg = msg or ERROR_MESSAGES[kind]
        self.name = name
        super().__init__(f"{kind.value}: {self.msg}")

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "error": self.kind.value, "message": self.msg}


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data

    @classmethod
    def from_asset_error(cls, exc: AssetError) -> "AppException":
        """按错误类别映射 HTTP 状态码，错误类别放在 ``data.error`` 中供前端识别。"""
        return cls(exc.msg, ERROR_STATUS_CODES[exc.kind], exc.to_dict())


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构，并带上请求 ID 便于排查日志。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    payload = {
        "msg": "服务器内部错误",
        "data": {"requestId": get_request_id()},
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)


async def asset_error_handler(request: Request, exc: AssetError) -> JSONResponse:  # pragma: no cover - framework glue
    """将资源存储的领域异常映射为带状态码的统一响应。"""
    return await http_exception_handler(request, AppException.from_asset_error(exc))
