import logging
from typing import Dict, Iterable, Mapping, Optional, Set

from locality_split_sorter.exceptions import LookupFailure
from locality_split_sorter.splits import AuthorityKey, Path
from .base import LocalityHandle, LocalityHandleFactory, TierStatus

logger = logging.getLogger("StaticLocalityOracle")


def _to_status(entry) -> TierStatus:
    """支持 {"memory": m, "cache": c} 或 [m, c] 两种写法"""
    if isinstance(entry, TierStatus):
        return entry
    if isinstance(entry, Mapping):
        return TierStatus(entry["memory"], entry["cache"])
    if hasattr(entry, "memory") and hasattr(entry, "cache"):
        # load_config_from_json 得到的 SimpleNamespace
        return TierStatus(entry.memory, entry.cache)
    memory, cache = entry
    return TierStatus(memory, cache)


class StaticLocalityHandle(LocalityHandle):
    def __init__(self, table: Dict[Path, TierStatus], key: AuthorityKey):
        self._table = table
        self._key = key

    def get_status(self, path: Path) -> TierStatus:
        status = self._table.get(path)
        if status is None:
            raise LookupFailure(path, "静态表中没有该路径")
        return status


class StaticLocalityHandleFactory(LocalityHandleFactory):
    """基于内存表的本地性后端，用于离线演练与测试。

    percentages: {uri: {"memory": m, "cache": c}}
    unreachable_authorities: 这些 authority 的 connect 会失败
    """

    def __init__(
        self,
        percentages: Optional[Mapping] = None,
        unreachable_authorities: Iterable[str] = (),
    ):
        self._table: Dict[Path, TierStatus] = {}
        for uri, entry in (percentages or {}).items():
            self._table[Path.parse(uri)] = _to_status(entry)
        self._unreachable: Set[str] = set(unreachable_authorities)
        self.connect_count = 0

    def check_available(self) -> None:
        return None

    def connect(self, key: AuthorityKey) -> StaticLocalityHandle:
        self.connect_count += 1
        if key.authority in self._unreachable:
            raise ConnectionError(f"authority 不可达: {key}")
        logger.debug("静态后端建立句柄: %s", key)
        return StaticLocalityHandle(self._table, key)
