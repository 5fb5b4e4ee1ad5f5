import logging
from typing import Dict, Optional

from locality_split_sorter.splits import AuthorityKey
from .base import LocalityHandle, LocalityHandleFactory

logger = logging.getLogger("ClientCache")


class ClientCache:
    """按 (scheme, authority) 缓存本地性查询句柄。

    - 首次请求某个 authority 时调用 factory.connect 建立句柄，之后复用；
    - 建立失败返回 None，且不缓存失败结果，下次请求会重试；
    - 无淘汰、无过期，生命周期与所属的 SplitPrioritizer 相同；
    - 非线程安全，不能在并发排序之间共享。
    """

    def __init__(self, factory: LocalityHandleFactory):
        self._factory = factory
        self._handles: Dict[AuthorityKey, LocalityHandle] = {}
        self.stats = {
            "created": 0,
            "reused": 0,
            "failures": 0,
        }

    def get_or_create(self, key: AuthorityKey) -> Optional[LocalityHandle]:
        handle = self._handles.get(key)
        if handle is not None:
            self.stats["reused"] += 1
            return handle

        try:
            handle = self._factory.connect(key)
        except Exception as e:
            self.stats["failures"] += 1
            logger.warning("建立本地性查询句柄失败: %s (%s)", key, e)
            return None

        if handle is None:
            self.stats["failures"] += 1
            logger.warning("后端未返回句柄: %s", key)
            return None

        self._handles[key] = handle
        self.stats["created"] += 1
        logger.debug("已建立本地性查询句柄: %s", key)
        return handle

    def close(self) -> None:
        """关闭并清空所有已缓存的句柄"""
        for key, handle in self._handles.items():
            try:
                handle.close()
            except Exception as e:
                logger.warning("关闭句柄失败: %s (%s)", key, e)
        self._handles.clear()

    def __len__(self) -> int:
        return len(self._handles)
