from .base import (
    Tier,
    TierStatus,
    LocalityHandle,
    LocalityHandleFactory,
    FULLY_LOCAL,
    LOOKUP_FAILED,
)
from .client_cache import ClientCache
from .client import LocalityOracleClient
from .static import StaticLocalityHandleFactory
from .factory import create_handle_factory

# etcd 后端依赖 etcd3，由 create_handle_factory 按需导入

__all__ = [
    'Tier',
    'TierStatus',
    'LocalityHandle',
    'LocalityHandleFactory',
    'FULLY_LOCAL',
    'LOOKUP_FAILED',
    'ClientCache',
    'LocalityOracleClient',
    'StaticLocalityHandleFactory',
    'create_handle_factory',
]
