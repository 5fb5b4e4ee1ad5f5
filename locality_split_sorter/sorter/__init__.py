from .comparator import FastTierPlacement, SortOptions, compare_splits
from .prioritizer import SplitPrioritizer, sort_splits

__all__ = [
    'FastTierPlacement',
    'SortOptions',
    'compare_splits',
    'SplitPrioritizer',
    'sort_splits',
]
