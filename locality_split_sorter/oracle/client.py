import logging
from typing import Optional

from locality_split_sorter.exceptions import ConfigurationError, LookupFailure
from locality_split_sorter.splits import AuthorityKey, Path
from .base import (
    FULLY_LOCAL_STATUS,
    LOOKUP_FAILED_STATUS,
    LocalityHandleFactory,
    TierStatus,
)
from .client_cache import ClientCache

logger = logging.getLogger("LocalityOracleClient")


def _check_percentage(path: Path, name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise LookupFailure(path, f"{name} 不是整数: {value!r}")
    if value < 0 or value > 100:
        raise LookupFailure(path, f"{name} 超出 [0, 100]: {value}")
    return value


class LocalityOracleClient:
    """本地性查询适配器：返回路径在内存层 / 缓存层的驻留百分比。

    构造时对后端做一次可用性校验，不可用直接抛出 ConfigurationError。
    查询阶段的任何错误都不会向上抛出，统一记为 (0, 0)。
    """

    def __init__(
        self,
        factory: LocalityHandleFactory,
        fast_tier_scheme: str = "alluxio",
        client_cache: Optional[ClientCache] = None,
    ):
        if not isinstance(factory, LocalityHandleFactory):
            raise ConfigurationError(
                f"本地性查询后端必须实现 LocalityHandleFactory: {type(factory).__name__}"
            )
        if not fast_tier_scheme:
            raise ConfigurationError("fast_tier_scheme 不能为空")

        try:
            factory.check_available()
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"本地性查询后端不可用: {e}") from e

        self.factory = factory
        self.fast_tier_scheme = fast_tier_scheme
        self.client_cache = client_cache if client_cache is not None else ClientCache(factory)
        self.stats = {
            "oracle_queries": 0,
            "short_circuits": 0,
            "lookup_failures": 0,
        }

    def is_fast_tier(self, path: Path) -> bool:
        return path.scheme == self.fast_tier_scheme

    def query(self, path: Path) -> TierStatus:
        if not self.is_fast_tier(path):
            self.stats["short_circuits"] += 1
            return FULLY_LOCAL_STATUS

        self.stats["oracle_queries"] += 1
        try:
            handle = self.client_cache.get_or_create(AuthorityKey.of(path))
            if handle is None:
                raise LookupFailure(path, "没有可用的查询句柄")
            status = handle.get_status(path)
            if not isinstance(status, TierStatus):
                raise LookupFailure(path, f"返回类型错误: {type(status).__name__}")
            return TierStatus(
                _check_percentage(path, "in_memory_percentage", status.in_memory_percentage),
                _check_percentage(path, "in_cache_percentage", status.in_cache_percentage),
            )
        except Exception as e:
            self.stats["lookup_failures"] += 1
            logger.warning("本地性查询失败，按 0 计分: %s (%s)", path, e)
            return LOOKUP_FAILED_STATUS

    def close(self) -> None:
        self.client_cache.close()
