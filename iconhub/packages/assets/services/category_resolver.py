"""分类解析：把分类标识映射为具体的存储目录句柄。

- 未提供、空字符串或 "default" => 存储根目录；
- 其它值 => 根目录下的同名直接子目录（仅取最后一段路径，防止越权）。

解析本身不访问文件系统，目录创建由调用方显式调用 ``ensure_exists``。
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from iconhub.packages.assets.core.constants import DEFAULT_CATEGORY
from iconhub.packages.assets.utils.path_utils import require_segment


@dataclass(frozen=True)
class CategoryDir:
    """一个已解析的分类目录。"""

    name: str
    path: Path

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_CATEGORY

    def is_linked(self) -> bool:
        """子分类目录本身是符号链接时返回 True；这类目录可能指向根目录之外，不可使用。"""
        if self.is_default:
            return False
        try:
            return stat.S_ISLNK(self.path.lstat().st_mode)
        except (FileNotFoundError, NotADirectoryError):
            return False

    def file_path(self, name: Optional[str]) -> Path:
        return self.path / require_segment(name)

    def ensure_exists(self) -> Path:
        # "不存在则创建"，并发重复调用安全
        self.path.mkdir(parents=True, exist_ok=True)
        return self.path


def is_default_category(category: Optional[str]) -> bool:
    return not category or category == DEFAULT_CATEGORY


class CategoryResolver:
    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def root_dir(self) -> CategoryDir:
        return CategoryDir(DEFAULT_CATEGORY, self.root)

    def resolve(self, category: Optional[str] = None) -> CategoryDir:
        if is_default_category(category):
            return self.root_dir()
        name = require_segment(category)
        if name == DEFAULT_CATEGORY:
            return self.root_dir()
        return CategoryDir(name, self.root / name)
