import importlib
import logging
from types import SimpleNamespace

from locality_split_sorter.config_loader import DEFAULT_SPLIT_SORT_CONFIG, get_setting
from locality_split_sorter.exceptions import ConfigurationError
from .base import LocalityHandleFactory
from .static import StaticLocalityHandleFactory

logger = logging.getLogger("OracleFactory")


def _as_dict(value):
    if value is None:
        return {}
    if isinstance(value, SimpleNamespace):
        return vars(value)
    return dict(value)


def _import_backend(class_path: str):
    try:
        module_name, cls_name = str(class_path).rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, cls_name)
    except (ImportError, AttributeError, ValueError) as e:
        raise ConfigurationError(f"本地性后端动态导入失败: {class_path} ({e})") from e


def _create_etcd_factory(config) -> LocalityHandleFactory:
    try:
        from .etcd import EtcdLocalityHandleFactory
    except Exception as e:
        # etcd3 未安装，或与已安装的 protobuf 不兼容
        raise ConfigurationError(f"etcd 本地性后端不可用: {e}") from e

    def _get(name):
        return get_setting(config, name, DEFAULT_SPLIT_SORT_CONFIG[name])

    return EtcdLocalityHandleFactory(
        prefix=str(_get("etcd_prefix")),
        etcd_port=int(_get("etcd_port")),
        endpoint_map=_as_dict(_get("etcd_endpoint_map")),
        timeout=_get("etcd_timeout"),
    )


def _create_static_factory(config) -> LocalityHandleFactory:
    return StaticLocalityHandleFactory(
        percentages=_as_dict(get_setting(config, "static_percentages", {})),
        unreachable_authorities=get_setting(config, "static_unreachable_authorities", []) or [],
    )


def create_handle_factory(config) -> LocalityHandleFactory:
    """根据配置创建本地性查询后端。

    oracle_backend 取值：
    - "etcd": 从 etcd 读取存储层发布的驻留信息（需要 etcd3）
    - "static": 配置内的静态表
    - 其它包含 "." 的值按类路径动态导入，类需无参构造
    任何解析失败都抛出 ConfigurationError。
    """
    backend = get_setting(config, "oracle_backend", DEFAULT_SPLIT_SORT_CONFIG["oracle_backend"])
    typ = str(backend).lower()
    logger.info("创建本地性查询后端: oracle_backend=%s", backend)

    if typ == "etcd":
        factory = _create_etcd_factory(config)
    elif typ == "static":
        factory = _create_static_factory(config)
    elif "." in str(backend):
        cls = _import_backend(str(backend))
        try:
            factory = cls()
        except Exception as e:
            raise ConfigurationError(f"本地性后端实例化失败: {backend} ({e})") from e
    else:
        raise ConfigurationError(f"Unsupported oracle backend: {backend}")

    if not isinstance(factory, LocalityHandleFactory):
        raise ConfigurationError(
            f"{backend} 未实现 LocalityHandleFactory: {type(factory).__name__}"
        )
    return factory
