"""枚举定义：资源存储的错误类别与上传结果状态。"""

from enum import Enum


class AssetErrorKind(str, Enum):
    """资源存储核心可能产生的错误类别，由 HTTP 层映射为状态码。"""

    INVALID_NAME = "INVALID_NAME"
    TYPE_NOT_ALLOWED = "TYPE_NOT_ALLOWED"
    SIZE_EXCEEDED = "SIZE_EXCEEDED"
    COUNT_EXCEEDED = "COUNT_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    UPLOAD_FAILED = "UPLOAD_FAILED"
    DELETE_FAILED = "DELETE_FAILED"
