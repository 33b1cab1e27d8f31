"""资源清单：把 (category, name, size) 转换为对外可见的资源描述。

纯函数，不访问文件系统。URL 与磁盘布局一一对应：
``<mount>/<name>``（default 分类）或 ``<mount>/<category>/<name>``。
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Optional
from urllib.parse import quote

from iconhub.packages.assets.core.constants import (
    DEFAULT_CATEGORY,
    EXTENSION_MIME_TYPES,
    MIME_OCTET_STREAM,
)
from iconhub.packages.assets.services.category_resolver import is_default_category

# 与浏览器 encodeURIComponent 保留的字符集一致
_URI_COMPONENT_SAFE = "!~*'()"


@dataclass(frozen=True)
class AssetDescriptor:
    name: str
    url: str
    type: str
    size: int
    category: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def extension_of(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:].lower() if dot >= 0 else ""


def infer_type(name: str) -> str:
    """只看扩展名推断 MIME 类型，从不嗅探内容。"""
    return EXTENSION_MIME_TYPES.get(extension_of(name or ""), MIME_OCTET_STREAM)


def coerce_size(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def public_url(mount: str, category: Optional[str], name: str) -> str:
    encoded = quote(name, safe=_URI_COMPONENT_SAFE)
    if is_default_category(category):
        return f"{mount}/{encoded}"
    return f"{mount}/{quote(category, safe=_URI_COMPONENT_SAFE)}/{encoded}"


def to_descriptor(mount: str, category: Optional[str], name: str, size: Any) -> AssetDescriptor:
    return AssetDescriptor(
        name=name,
        url=public_url(mount, category, name),
        type=infer_type(name),
        size=coerce_size(size),
        category=DEFAULT_CATEGORY if is_default_category(category) else category,
    )
