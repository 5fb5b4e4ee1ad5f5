import logging
from collections.abc import MutableSequence
from functools import cmp_to_key
from typing import List, Sequence

from locality_split_sorter.cache import PercentageCache
from locality_split_sorter.config_loader import DEFAULT_SPLIT_SORT_CONFIG, get_setting
from locality_split_sorter.exceptions import ComparisonError, ConfigurationError
from locality_split_sorter.oracle import (
    ClientCache,
    LocalityHandleFactory,
    LocalityOracleClient,
    create_handle_factory,
)
from locality_split_sorter.splits import Split
from .comparator import FastTierPlacement, SortOptions, compare_splits

logger = logging.getLogger("SplitPrioritizer")


class SplitPrioritizer:
    """按数据本地性对 split 排序，优先调度数据已在内存 / 缓存层的 split。

    每个实例独占一个 ClientCache 和一个 PercentageCache，缓存不会失效也不加锁：
    一个作业提交创建一个实例，不同作业（或并发的排序调用）不能共享同一实例。
    """

    def __init__(
        self,
        factory: LocalityHandleFactory,
        fast_tier_scheme: str = "alluxio",
        fast_tier_placement=FastTierPlacement.AFTER,
    ):
        try:
            placement = FastTierPlacement.parse(fast_tier_placement)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self.options = SortOptions(
            fast_tier_scheme=fast_tier_scheme,
            fast_tier_placement=placement,
        )
        self.client_cache = ClientCache(factory)
        self.oracle = LocalityOracleClient(factory, fast_tier_scheme, self.client_cache)
        self.scores = PercentageCache(self.oracle)
        self.stats = {
            "sorts": 0,
            "comparisons": 0,
        }

    @classmethod
    def from_config(cls, config) -> "SplitPrioritizer":
        """由配置（config.json 的 split_sort_config 段）创建排序器"""
        factory = create_handle_factory(config)
        scheme = get_setting(config, "fast_tier_scheme", DEFAULT_SPLIT_SORT_CONFIG["fast_tier_scheme"])
        placement = get_setting(
            config, "fast_tier_placement", DEFAULT_SPLIT_SORT_CONFIG["fast_tier_placement"]
        )
        logger.info(
            "创建 SplitPrioritizer: fast_tier_scheme=%s, fast_tier_placement=%s",
            scheme,
            placement,
        )
        return cls(factory, fast_tier_scheme=str(scheme), fast_tier_placement=placement)

    def compare(self, left: Split, right: Split) -> int:
        self.stats["comparisons"] += 1
        try:
            return compare_splits(left, right, self.scores, self.options)
        except Exception as e:
            raise ComparisonError(f"Problem sorting input splits: {e}", left, right) from e

    def sort(self, splits: Sequence[Split]) -> Sequence[Split]:
        """稳定排序。可变序列原地重排并返回自身，其它序列返回新的 list。

        比较中出现非预期异常时抛出 ComparisonError，原序列保持不变。
        """
        items: List[Split] = list(splits)
        try:
            ordered = sorted(items, key=cmp_to_key(self.compare))
        except ComparisonError as e:
            logger.error("split 排序失败，本次顺序不可用: %s", e, exc_info=True)
            raise

        self.stats["sorts"] += 1
        self.log_stats()
        if isinstance(splits, MutableSequence):
            splits[:] = ordered
            return splits
        return ordered

    def get_stats(self):
        stats = self.stats.copy()
        stats.update(self.scores.get_stats())
        stats.update(self.oracle.stats)
        stats["clients"] = len(self.client_cache)
        stats["client_failures"] = self.client_cache.stats["failures"]
        return stats

    def log_stats(self):
        stats = self.get_stats()
        logger.info(
            f"排序统计 - 排序次数: {stats['sorts']}, "
            f"比较次数: {stats['comparisons']}, "
            f"得分查询: {stats['total_queries']}, "
            f"命中率: {stats['hit_rate']:.2%}, "
            f"oracle 查询: {stats['oracle_queries']}, "
            f"查询失败: {stats['lookup_failures']}, "
            f"句柄数: {stats['clients']}"
        )

    def close(self):
        self.oracle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def sort_splits(splits: Sequence[Split], config) -> Sequence[Split]:
    """一次性排序：按配置创建排序器，排序后释放句柄"""
    with SplitPrioritizer.from_config(config) as prioritizer:
        return prioritizer.sort(splits)
