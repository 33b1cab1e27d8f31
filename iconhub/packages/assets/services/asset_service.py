"""资源服务：组合分类解析、目录存储、跨分类定位与清单构建，对外提供列表/上传/删除等操作。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from iconhub.packages.assets.core.config import Settings
from iconhub.packages.assets.core.constants import GENERIC_MIME_TYPES, MIME_SVG
from iconhub.packages.assets.core.enums import AssetErrorKind
from iconhub.packages.assets.core.exceptions import AssetError
from iconhub.packages.assets.core.logger import logger
from iconhub.packages.assets.services.asset_store import AssetStore
from iconhub.packages.assets.services.category_index import CategoryIndex
from iconhub.packages.assets.services.category_resolver import CategoryResolver, is_default_category
from iconhub.packages.assets.services.locator import CrossCategoryLocator
from iconhub.packages.assets.services.manifest import (
    AssetDescriptor,
    extension_of,
    infer_type,
    to_descriptor,
)
from iconhub.packages.assets.utils.path_utils import is_reserved_name, sanitize_segment


@dataclass
class UploadItem:
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class UploadOutcome:
    accepted: List[AssetDescriptor] = field(default_factory=list)
    rejected: List[AssetError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "accepted": [item.to_dict() for item in self.accepted],
            "rejected": [err.to_dict() for err in self.rejected],
        }


@dataclass(frozen=True)
class DeleteOutcome:
    deleted_name: str
    category_found: str
    ok: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "deletedName": self.deleted_name, "categoryFound": self.category_found}


class AssetService:
    def __init__(
        self,
        root: Path | str,
        *,
        mount: str = "/uploads",
        max_upload_size: int = 25 * 1024 * 1024,
        max_upload_files: int = 200,
        allowed_extensions: Iterable[str] = (".svg", ".png"),
        allowed_mime_types: Iterable[str] = ("image/svg+xml", "image/png"),
    ) -> None:
        self.resolver = CategoryResolver(root)
        self.index = CategoryIndex(root)
        self.locator = CrossCategoryLocator(self.resolver, self.index)
        self.mount = mount
        self.max_upload_size = max_upload_size
        self.max_upload_files = max_upload_files
        self.allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)
        self.allowed_mime_types = frozenset(mime.lower() for mime in allowed_mime_types)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AssetService":
        return cls(
            settings.storage_directory,
            mount=settings.public_mount_path,
            max_upload_size=settings.max_upload_size,
            max_upload_files=settings.max_upload_files,
            allowed_extensions=settings.allowed_extensions,
            allowed_mime_types=settings.allowed_mime_types,
        )

    @property
    def root(self) -> Path:
        return self.resolver.root

    def ensure_root(self) -> Path:
        return self.resolver.root_dir().ensure_exists()

    # ----------------------------
    # 查询
    # ----------------------------
    def list_assets(self, category: Optional[str] = None) -> List[AssetDescriptor]:
        """列出资源：指定分类时只列该分类；default/未指定时列出根目录及全部子分类。

        无法清洗出有效名称的分类（如 ".."）不对应任何目录，返回空列表。
        """
        self.ensure_root()
        if is_default_category(category):
            directories = [self.resolver.root_dir()]
            directories.extend(self.resolver.resolve(name) for name in self.index.list_categories())
        elif not sanitize_segment(category):
            return []
        else:
            directories = [self.resolver.resolve(category)]

        out: list[AssetDescriptor] = []
        for directory in directories:
            for name, size in AssetStore(directory).list():
                out.append(to_descriptor(self.mount, directory.name, name, size))
        return out

    def list_categories(self) -> List[str]:
        return self.index.list_categories()

    def read_asset(self, file_name: str, category: Optional[str] = None) -> Tuple[bytes, str]:
        """按 URL 对应的确切位置读取，不做跨分类回退。"""
        store = AssetStore(self.resolver.resolve(category))
        return store.get(file_name), infer_type(sanitize_segment(file_name))

    def read_svg(self, file_name: str, category: Optional[str] = None) -> Tuple[str, str]:
        """返回 ``(svg 文本, 所在分类)``；未指定分类时按跨分类顺序查找。"""
        safe_name = sanitize_segment(file_name)
        if safe_name and infer_type(safe_name) != MIME_SVG:
            raise AssetError(AssetErrorKind.TYPE_NOT_ALLOWED, "仅支持预览 SVG 文件", name=safe_name)
        directory = self.locator.locate(file_name, category)
        text = AssetStore(directory).get(safe_name).decode("utf-8", errors="replace")
        return text, directory.name

    # ----------------------------
    # 变更
    # ----------------------------
    def validate_upload(self, item: UploadItem, position: int) -> str:
        """在任何写入之前校验单个上传项，返回清洗后的文件名。"""
        safe_name = sanitize_segment(item.filename)
        if not safe_name or is_reserved_name(safe_name):
            raise AssetError(AssetErrorKind.INVALID_NAME, name=item.filename)
        if position >= self.max_upload_files:
            raise AssetError(AssetErrorKind.COUNT_EXCEEDED, name=safe_name)
        if extension_of(safe_name) not in self.allowed_extensions:
            raise AssetError(AssetErrorKind.TYPE_NOT_ALLOWED, name=safe_name)
        declared = (item.content_type or "").split(";", 1)[0].strip().lower()
        if declared not in GENERIC_MIME_TYPES and declared not in self.allowed_mime_types:
            raise AssetError(AssetErrorKind.TYPE_NOT_ALLOWED, name=safe_name)
        if item.size > self.max_upload_size:
            raise AssetError(AssetErrorKind.SIZE_EXCEEDED, name=safe_name)
        return safe_name

    def upload_assets(self, category: Optional[str], items: Iterable[UploadItem]) -> UploadOutcome:
        """先整批校验再逐个写入；校验失败的项单独记录，不影响同批其它文件。"""
        directory = self.resolver.resolve(category)
        store = AssetStore(directory)

        outcome = UploadOutcome()
        pending: list[tuple[str, bytes]] = []
        for position, item in enumerate(items):
            try:
                pending.append((self.validate_upload(item, position), item.data))
            except AssetError as exc:
                logger.info("Upload rejected: %s (%s)", exc.name, exc.kind.value)
                outcome.rejected.append(exc)

        self.ensure_root()
        for safe_name, data in pending:
            size = store.put(safe_name, data)
            logger.info(
                "Asset stored: %s/%s (%s bytes)",
                directory.name,
                safe_name,
                size,
                extra={"category": directory.name, "asset_name": safe_name, "size": size},
            )
            outcome.accepted.append(to_descriptor(self.mount, directory.name, safe_name, size))
        return outcome

    def delete_asset(self, file_name: str, category: Optional[str] = None) -> DeleteOutcome:
        try:
            directory = self.locator.locate(file_name, category)
        except OSError as exc:
            logger.exception("Asset lookup failed before delete: %s", file_name)
            raise AssetError(AssetErrorKind.DELETE_FAILED, name=sanitize_segment(file_name)) from exc
        safe_name = sanitize_segment(file_name)
        AssetStore(directory).delete(safe_name)
        logger.info(
            "Asset deleted: %s/%s",
            directory.name,
            safe_name,
            extra={"category": directory.name, "asset_name": safe_name},
        )
        return DeleteOutcome(deleted_name=safe_name, category_found=directory.name)
