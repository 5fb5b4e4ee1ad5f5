import json
import os
from types import SimpleNamespace

# split 排序的默认配置（config.json 中的 split_sort_config 段）
DEFAULT_SPLIT_SORT_CONFIG = {
    "fast_tier_scheme": "alluxio",
    "fast_tier_placement": "after",
    "oracle_backend": "etcd",
    "etcd_prefix": "/tiermeta",
    "etcd_port": 2379,
    "etcd_endpoint_map": {},
    "etcd_timeout": None,
    "static_percentages": {},
    "static_unreachable_authorities": [],
}


def dict_to_namespace(d):
    """将字典递归转换为SimpleNamespace对象，支持点号访问"""
    if isinstance(d, dict):
        return SimpleNamespace(**{k: dict_to_namespace(v) for k, v in d.items()})
    elif isinstance(d, list):
        return [dict_to_namespace(item) for item in d]
    else:
        return d


def namespace_to_dict(ns):
    if isinstance(ns, SimpleNamespace):
        return {k: namespace_to_dict(v) for k, v in vars(ns).items()}
    elif isinstance(ns, list):
        return [namespace_to_dict(item) for item in ns]
    else:
        return ns


def load_config_from_json(config_path: str = None):
    """
    从JSON配置文件加载配置

    Args:
        config_path (str): 配置文件路径，默认为项目根目录的config.json

    Returns:
        SimpleNamespace: 包含配置信息的对象
    """
    if config_path is None:
        # 项目根目录 = locality_split_sorter 包目录的父目录
        current_dir = os.path.dirname(os.path.abspath(__file__))
        project_root = os.path.dirname(current_dir)
        config_path = os.path.join(project_root, 'config.json')

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"配置文件 {config_path} 不存在")

    with open(config_path, 'r', encoding='utf-8') as f:
        config_dict = json.load(f)

    return dict_to_namespace(config_dict)


def merge_config_with_defaults(config, defaults):
    """
    将配置与默认值合并

    Args:
        config (SimpleNamespace): 用户配置
        defaults (dict): 默认配置字典

    Returns:
        SimpleNamespace: 合并后的配置
    """
    def merge_dict_with_namespace(default_dict, namespace):
        if not isinstance(namespace, SimpleNamespace):
            return namespace

        result = default_dict.copy()
        for key, value in vars(namespace).items():
            if key in result and isinstance(result[key], dict) and isinstance(value, SimpleNamespace):
                result[key] = merge_dict_with_namespace(result[key], value)
            else:
                result[key] = namespace_to_dict(value)
        return result

    merged_dict = merge_dict_with_namespace(defaults, config)
    return dict_to_namespace(merged_dict)


def get_setting(config, name: str, default=None):
    """读取 split 排序配置项。

    - config 可以是整个配置（含 split_sort_config 段），也可以直接是该段；
    - 优先读取属性 / 字典键，其次读取 extra_config[name]；
    - 都没有时返回 default。
    """
    sec = config
    if isinstance(config, dict):
        sec = config.get("split_sort_config", config)
    else:
        sec = getattr(config, "split_sort_config", config)

    if isinstance(sec, dict):
        val = sec.get(name)
        extra = sec.get("extra_config")
    else:
        val = getattr(sec, name, None)
        extra = getattr(sec, "extra_config", None)
    if val is not None:
        return val
    if isinstance(extra, SimpleNamespace):
        extra = vars(extra)
    if isinstance(extra, dict) and name in extra:
        return extra[name]
    return default
