from dataclasses import dataclass
from enum import Enum

from locality_split_sorter.cache import PercentageCache
from locality_split_sorter.oracle import Tier
from locality_split_sorter.splits import CombinedSplit, Split


class FastTierPlacement(Enum):
    """只有一方首路径位于快速层时，快速层 split 的位置。

    AFTER:  快速层 split 排在另一方之后（默认）
    BEFORE: 快速层 split 排在另一方之前
    """

    AFTER = 1
    BEFORE = -1

    @staticmethod
    def parse(value) -> "FastTierPlacement":
        if isinstance(value, FastTierPlacement):
            return value
        try:
            return FastTierPlacement[str(value).upper()]
        except KeyError:
            raise ValueError(f"未知 fast_tier_placement: {value}") from None


@dataclass(frozen=True)
class SortOptions:
    fast_tier_scheme: str = "alluxio"
    fast_tier_placement: FastTierPlacement = FastTierPlacement.AFTER


def _cmp(x: int, y: int) -> int:
    return (x > y) - (x < y)


def _by_length_desc(left: Split, right: Split) -> int:
    return _cmp(right.length, left.length)


def _has_paths(split: Split) -> bool:
    return isinstance(split, CombinedSplit) and len(split.paths) > 0


def compare_splits(left: Split, right: Split, scores: PercentageCache, options: SortOptions) -> int:
    """比较两个 split，返回负数表示 left 排在前面。

    1. 任一方不是 CombinedSplit 或没有路径：按长度降序；
    2. 只看两方的首路径 scheme：
       - 只有一方在快速层：按 options.fast_tier_placement 决定先后；
       - 都不在快速层：按长度降序；
       - 都在快速层：缓存层得分之和降序，再按内存层得分之和降序，仍相等返回 0。
    """
    if not _has_paths(left) or not _has_paths(right):
        return _by_length_desc(left, right)

    scheme = options.fast_tier_scheme
    left_fast = left.leading_path.scheme == scheme
    right_fast = right.leading_path.scheme == scheme

    if left_fast and not right_fast:
        return options.fast_tier_placement.value
    if right_fast and not left_fast:
        return -options.fast_tier_placement.value
    if not left_fast:
        return _by_length_desc(left, right)

    flag = _cmp(
        scores.total_for(right.paths, Tier.CACHE),
        scores.total_for(left.paths, Tier.CACHE),
    )
    if flag != 0:
        return flag
    return _cmp(
        scores.total_for(right.paths, Tier.MEMORY),
        scores.total_for(left.paths, Tier.MEMORY),
    )
