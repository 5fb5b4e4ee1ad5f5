import logging
from typing import Dict, Iterable

from locality_split_sorter.oracle import LocalityOracleClient, Tier
from locality_split_sorter.splits import Path

# 层级得分缓存日志
logger = logging.getLogger("PercentageCache")


class PercentageCache:
    """两张 path -> 得分 的表（内存层 / 缓存层），按需通过 oracle 填充。

    - 一次 oracle 查询同时得到两个层级的百分比，两张表一起写入；
    - 写入后不再失效，即使底层驻留情况发生变化，生命周期内得分保持不变；
    - 由单个 SplitPrioritizer 独占，非线程安全。
    """

    def __init__(self, oracle: LocalityOracleClient):
        self.oracle = oracle
        self.memory_pool: Dict[Path, int] = {}
        self.cache_pool: Dict[Path, int] = {}
        self.stats = {
            "total_queries": 0,
            "memory_hits": 0,
            "cache_hits": 0,
            "misses": 0,
        }

    def _pool(self, tier: Tier) -> Dict[Path, int]:
        if tier is Tier.MEMORY:
            return self.memory_pool
        return self.cache_pool

    def score_for(self, path: Path, tier: Tier) -> int:
        self.stats["total_queries"] += 1
        pool = self._pool(tier)
        score = pool.get(path)
        if score is not None:
            self.stats[f"{tier.value}_hits"] += 1
            return score

        self.stats["misses"] += 1
        status = self.oracle.query(path)
        # 只在首次写入，已有的另一层得分不覆盖
        self.memory_pool.setdefault(path, status.percentage(Tier.MEMORY))
        self.cache_pool.setdefault(path, status.percentage(Tier.CACHE))
        logger.debug(
            "缓存得分: %s memory=%d cache=%d",
            path,
            self.memory_pool[path],
            self.cache_pool[path],
        )
        return pool[path]

    def total_for(self, paths: Iterable[Path], tier: Tier) -> int:
        """多个路径在某一层的得分之和（不是平均值）"""
        return sum(self.score_for(p, tier) for p in paths)

    def get_stats(self):
        stats = self.stats.copy()
        hits = stats["memory_hits"] + stats["cache_hits"]
        stats["hit_rate"] = hits / stats["total_queries"] if stats["total_queries"] > 0 else 0
        stats["memory_size"] = len(self.memory_pool)
        stats["cache_size"] = len(self.cache_pool)
        return stats
