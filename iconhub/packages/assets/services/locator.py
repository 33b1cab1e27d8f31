"""跨分类定位：按固定优先级查找某个文件名所在的分类目录。

指定了非 default 分类时只查该分类，不做回退；
否则先查根目录，再按 ``CategoryIndex`` 的枚举顺序逐个查子分类，返回第一个命中。
因此根目录中的资源总是优先于子分类中的同名文件。
"不存在"以外的 I/O 错误原样抛出，由调用方映射为具体的错误类别。
"""

from __future__ import annotations

from typing import Iterator, Optional

from iconhub.packages.assets.core.enums import AssetErrorKind
from iconhub.packages.assets.core.exceptions import AssetError
from iconhub.packages.assets.services.asset_store import AssetStore
from iconhub.packages.assets.services.category_index import CategoryIndex
from iconhub.packages.assets.services.category_resolver import (
    CategoryDir,
    CategoryResolver,
    is_default_category,
)
from iconhub.packages.assets.utils.path_utils import require_segment


class CrossCategoryLocator:
    def __init__(self, resolver: CategoryResolver, index: CategoryIndex) -> None:
        self.resolver = resolver
        self.index = index

    def candidates(self, category: Optional[str] = None) -> Iterator[CategoryDir]:
        if not is_default_category(category):
            yield self.resolver.resolve(category)
            return
        yield self.resolver.root_dir()
        for name in self.index.list_categories():
            yield self.resolver.resolve(name)

    def locate(self, file_name: str, category: Optional[str] = None) -> CategoryDir:
        safe_name = require_segment(file_name)
        for directory in self.candidates(category):
            if AssetStore(directory).exists(safe_name):
                return directory
        raise AssetError(AssetErrorKind.NOT_FOUND, name=safe_name)
