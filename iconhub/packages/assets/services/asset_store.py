"""单个分类目录内的文件读写：列表、写入、读取与删除。

文件系统是唯一的事实来源，这里不做任何缓存；每次调用都重新读取目录。
写入先落到同目录下的临时文件，再通过 ``os.replace`` 原子替换，读者不会看到写了一半的文件。
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import List, Tuple

from iconhub.packages.assets.core.constants import TEMP_FILE_PREFIX
from iconhub.packages.assets.core.enums import AssetErrorKind
from iconhub.packages.assets.core.exceptions import AssetError
from iconhub.packages.assets.core.logger import logger
from iconhub.packages.assets.services.category_resolver import CategoryDir
from iconhub.packages.assets.utils.path_utils import is_reserved_name

# 新文件权限，与常规 open() 在默认 umask 下的结果保持一致
_FILE_MODE = 0o644


def is_regular_file(path: Path) -> bool:
    """不跟随符号链接地判断 ``path`` 是否为普通文件；路径不存在时为 False，其它 I/O 错误向上抛出。"""
    try:
        return stat.S_ISREG(path.lstat().st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False


class AssetStore:
    def __init__(self, directory: CategoryDir) -> None:
        self.directory = directory

    @property
    def category(self) -> str:
        return self.directory.name

    def list(self) -> List[Tuple[str, int]]:
        """返回目录下普通文件的 ``(name, size)``，按目录读取顺序；目录不存在时返回空列表。"""
        if self.directory.is_linked():
            logger.warning("Ignoring symlinked category directory: %s", self.category)
            return []
        items: list[tuple[str, int]] = []
        try:
            with os.scandir(self.directory.path) as entries:
                for entry in entries:
                    if is_reserved_name(entry.name):
                        continue
                    try:
                        if not entry.is_file(follow_symlinks=False):
                            continue
                        size = entry.stat(follow_symlinks=False).st_size
                    except FileNotFoundError:
                        # 读取目录与 stat 之间被删除
                        continue
                    items.append((entry.name, int(size)))
        except (FileNotFoundError, NotADirectoryError):
            return []
        return items

    def _target(self, name: str) -> Path:
        target = self.directory.file_path(name)
        if is_reserved_name(target.name):
            raise AssetError(AssetErrorKind.INVALID_NAME, name=name)
        return target

    def exists(self, name: str) -> bool:
        target = self._target(name)
        return not self.directory.is_linked() and is_regular_file(target)

    def put(self, name: str, data: bytes) -> int:
        """写入文件并返回落盘后的真实大小；同名文件直接覆盖。"""
        dest = self._target(name)
        safe_name = dest.name

        tmp_path = None
        try:
            if self.directory.is_linked():
                raise AssetError(AssetErrorKind.INVALID_NAME, "分类目录不可用", name=self.category)
            self.directory.ensure_exists()
            fd, tmp_path = tempfile.mkstemp(prefix=TEMP_FILE_PREFIX, dir=self.directory.path)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.chmod(tmp_path, _FILE_MODE)
            os.replace(tmp_path, dest)
            tmp_path = None
            size = dest.stat().st_size
        except OSError as exc:
            logger.exception("Asset write failed: %s/%s", self.category, safe_name)
            raise AssetError(AssetErrorKind.UPLOAD_FAILED, name=safe_name) from exc
        finally:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    logger.warning("Failed to remove temporary upload file %s", tmp_path)
        return int(size)

    def get(self, name: str) -> bytes:
        target = self._target(name)
        if self.directory.is_linked() or not is_regular_file(target):
            raise AssetError(AssetErrorKind.NOT_FOUND, name=target.name)
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise AssetError(AssetErrorKind.NOT_FOUND, name=target.name) from exc

    def delete(self, name: str) -> None:
        target = self._target(name)
        try:
            if self.directory.is_linked() or not is_regular_file(target):
                raise AssetError(AssetErrorKind.NOT_FOUND, name=target.name)
            target.unlink()
        except FileNotFoundError as exc:
            raise AssetError(AssetErrorKind.NOT_FOUND, name=target.name) from exc
        except OSError as exc:
            logger.exception("Asset delete failed: %s/%s", self.category, target.name)
            raise AssetError(AssetErrorKind.DELETE_FAILED, name=target.name) from exc
