from .percentage_cache import PercentageCache

__all__ = [
    'PercentageCache'
]
