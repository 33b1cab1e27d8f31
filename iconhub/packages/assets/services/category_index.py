"""分类索引：以存储根目录下的直接子目录作为已知分类集合。"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from iconhub.packages.assets.core.constants import DEFAULT_CATEGORY
from iconhub.packages.assets.core.logger import logger
from iconhub.packages.assets.utils.path_utils import sanitize_segment


class CategoryIndex:
    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def list_categories(self) -> List[str]:
        """按目录读取顺序返回分类名，不排序；根目录下的文件属于 default 分类，不计入。

        根目录不存在或不可读时返回空列表，从不抛出异常。
        """
        names: list[str] = []
        try:
            with os.scandir(self.root) as entries:
                for entry in entries:
                    # 名为 default 或无法通过清洗的子目录无法被寻址，忽略
                    if entry.name == DEFAULT_CATEGORY or sanitize_segment(entry.name) != entry.name:
                        continue
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            names.append(entry.name)
                    except OSError:
                        continue
        except FileNotFoundError:
            return []
        except OSError:
            logger.warning("Unable to enumerate categories under %s", self.root, exc_info=True)
            return []
        return names
