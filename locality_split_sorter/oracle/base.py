import abc
from dataclasses import dataclass
from enum import Enum

from locality_split_sorter.splits import AuthorityKey, Path


class Tier(Enum):
    MEMORY = "memory"
    CACHE = "cache"


# 非快速层 scheme 的路径视为完全本地
FULLY_LOCAL = 100
# 查询失败时的得分
LOOKUP_FAILED = 0


@dataclass(frozen=True)
class TierStatus:
    """一次本地性查询的结果：内存层 / 缓存层驻留百分比 [0, 100]"""

    in_memory_percentage: int
    in_cache_percentage: int

    def percentage(self, tier: Tier) -> int:
        if tier is Tier.MEMORY:
            return self.in_memory_percentage
        return self.in_cache_percentage


FULLY_LOCAL_STATUS = TierStatus(FULLY_LOCAL, FULLY_LOCAL)
LOOKUP_FAILED_STATUS = TierStatus(LOOKUP_FAILED, LOOKUP_FAILED)


class LocalityHandle(abc.ABC):
    """某个 (scheme, authority) 上的本地性查询句柄"""

    @abc.abstractmethod
    def get_status(self, path: Path) -> TierStatus:
        """返回路径的层级驻留百分比，失败时抛出 LookupFailure 或底层异常"""
        pass

    def close(self) -> None:
        """释放底层连接（默认无操作）"""
        return None


class LocalityHandleFactory(abc.ABC):
    """本地性查询后端：负责校验 API 可用性并按 authority 创建句柄"""

    @abc.abstractmethod
    def check_available(self) -> None:
        """校验后端 API 是否可用，不可用时抛出 ConfigurationError"""
        pass

    @abc.abstractmethod
    def connect(self, key: AuthorityKey) -> LocalityHandle:
        """为指定 authority 建立句柄（代价较高，由 ClientCache 缓存）"""
        pass
