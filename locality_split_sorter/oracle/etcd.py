import json
import logging
from typing import Dict, Optional, Tuple

import etcd3
from etcd3 import Etcd3Client

from locality_split_sorter.exceptions import ConfigurationError, LookupFailure
from locality_split_sorter.splits import AuthorityKey, Path
from .base import LocalityHandle, LocalityHandleFactory, TierStatus

logger = logging.getLogger("EtcdLocalityOracle")

DEFAULT_ETCD_PORT = 2379


def split_endpoint(endpoint: str) -> Tuple[str, int]:
    """把 host:port 拆成 (host, port)，支持 [::1]:2379 形式的 IPv6 地址"""
    host, sep, port = str(endpoint).rpartition(":")
    if not sep or not host or not port.isdigit():
        raise ValueError(f"etcd endpoint 格式错误（应为 host:port）: {endpoint!r}")
    return host, int(port)


class EtcdLocalityHandle(LocalityHandle):
    """从 etcd 读取存储层发布的驻留信息。

    key:   {prefix}/{path}
    value: {"in_memory_percentage": int, "in_cache_percentage": int}
    """

    def __init__(self, client: Etcd3Client, prefix: str, endpoint: str):
        self.client = client
        self.prefix = prefix.rstrip("/")
        self.endpoint = endpoint

    def _full_key(self, path: Path) -> str:
        clean_key = path.path.lstrip("/")
        return f"{self.prefix}/{clean_key}"

    def get_status(self, path: Path) -> TierStatus:
        full_key = self._full_key(path)
        value, _ = self.client.get(full_key)
        if value is None:
            raise LookupFailure(path, f"etcd 中不存在 {full_key} ({self.endpoint})")
        try:
            record = json.loads(value)
            return TierStatus(
                in_memory_percentage=record["in_memory_percentage"],
                in_cache_percentage=record["in_cache_percentage"],
            )
        except (ValueError, KeyError, TypeError) as e:
            raise LookupFailure(path, f"驻留信息格式错误: {e}") from e

    def close(self) -> None:
        close_fn = getattr(self.client, "close", None)
        if callable(close_fn):
            close_fn()


class EtcdLocalityHandleFactory(LocalityHandleFactory):
    """按 authority 连接 etcd。

    endpoint 解析顺序：endpoint_map[authority] > "{authority 的 host}:{etcd_port}"。
    """

    def __init__(
        self,
        prefix: str = "/tiermeta",
        etcd_port: int = DEFAULT_ETCD_PORT,
        endpoint_map: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ):
        self.prefix = prefix
        self.etcd_port = int(etcd_port)
        self.endpoint_map = dict(endpoint_map or {})
        self.timeout = timeout
        # endpoint 格式错误在构造时抛出
        for authority, endpoint in self.endpoint_map.items():
            try:
                split_endpoint(endpoint)
            except ValueError as e:
                raise ConfigurationError(f"etcd_endpoint_map[{authority}]: {e}") from e

    def check_available(self) -> None:
        if not callable(getattr(etcd3, "client", None)):
            raise ConfigurationError("etcd3.client 不可用，请检查 etcd3 安装")

    def resolve_endpoint(self, key: AuthorityKey) -> str:
        if key.authority and key.authority in self.endpoint_map:
            return self.endpoint_map[key.authority]
        if not key.authority:
            raise ValueError(f"路径缺少 authority，无法定位 etcd: {key}")
        hostinfo = key.authority.rsplit("@", 1)[-1]
        if hostinfo.startswith("[") and "]" in hostinfo:
            host = hostinfo[:hostinfo.index("]") + 1]
        else:
            host = hostinfo.split(":")[0]
        return f"{host}:{self.etcd_port}"

    def connect(self, key: AuthorityKey) -> EtcdLocalityHandle:
        endpoint = self.resolve_endpoint(key)
        host, port = split_endpoint(endpoint)
        client = etcd3.client(host=host, port=port, timeout=self.timeout)
        # 探活，失败由 ClientCache 捕获
        client.status()
        logger.info("已连接 etcd %s (authority=%s)", endpoint, key)
        return EtcdLocalityHandle(client, self.prefix, endpoint)
