from .exceptions import (
    SplitSortError,
    ConfigurationError,
    LookupFailure,
    ComparisonError
)

from .splits import (
    Path,
    AuthorityKey,
    SimpleSplit,
    CombinedSplit
)

from .config_loader import (
    DEFAULT_SPLIT_SORT_CONFIG,
    load_config_from_json,
    merge_config_with_defaults
)

from .oracle import (
    Tier,
    TierStatus,
    LocalityHandle,
    LocalityHandleFactory,
    ClientCache,
    LocalityOracleClient,
    StaticLocalityHandleFactory,
    create_handle_factory
)

from .cache import PercentageCache

from .sorter import (
    FastTierPlacement,
    SortOptions,
    compare_splits,
    SplitPrioritizer,
    sort_splits
)

__all__ = [
    # 异常
    'SplitSortError',
    'ConfigurationError',
    'LookupFailure',
    'ComparisonError',

    # 数据模型
    'Path',
    'AuthorityKey',
    'SimpleSplit',
    'CombinedSplit',

    # 配置相关
    'DEFAULT_SPLIT_SORT_CONFIG',
    'load_config_from_json',
    'merge_config_with_defaults',

    # 本地性查询
    'Tier',
    'TierStatus',
    'LocalityHandle',
    'LocalityHandleFactory',
    'ClientCache',
    'LocalityOracleClient',
    'StaticLocalityHandleFactory',
    'create_handle_factory',

    # 缓存与排序
    'PercentageCache',
    'FastTierPlacement',
    'SortOptions',
    'compare_splits',
    'SplitPrioritizer',
    'sort_splits'
]
