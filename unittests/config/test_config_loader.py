import unittest
import tempfile
import json
import os
from types import SimpleNamespace
from locality_split_sorter.config_loader import (
    DEFAULT_SPLIT_SORT_CONFIG,
    load_config_from_json,
    dict_to_namespace,
    merge_config_with_defaults,
    get_setting,
)

class ConfigLoaderTests(unittest.TestCase):
    def test_load_config_from_json(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "config.json")
            data = {"split_sort_config": {"fast_tier_scheme": "alluxio", "oracle_backend": "static"}, "rank": 3}
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            ns = load_config_from_json(path)
            self.assertEqual(ns.rank, 3)
            self.assertEqual(ns.split_sort_config.oracle_backend, "static")

    def test_load_missing_file(self):
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(FileNotFoundError):
                load_config_from_json(os.path.join(td, "nope.json"))

    def test_dict_to_namespace_nested(self):
        d = {"a": 1, "b": {"c": 2, "d": [ {"x": 10}, 5 ] }}
        ns = dict_to_namespace(d)
        self.assertEqual(ns.a, 1)
        self.assertEqual(ns.b.c, 2)
        self.assertEqual(ns.b.d[0].x, 10)
        self.assertEqual(ns.b.d[1], 5)

    def test_merge_with_defaults(self):
        user = dict_to_namespace({"oracle_backend": "static", "etcd_endpoint_map": {"m:19998": "h:2379"}})
        merged = merge_config_with_defaults(user, DEFAULT_SPLIT_SORT_CONFIG)
        self.assertEqual(merged.oracle_backend, "static")
        self.assertEqual(merged.fast_tier_scheme, "alluxio")
        self.assertEqual(merged.etcd_port, 2379)
        self.assertEqual(vars(merged.etcd_endpoint_map), {"m:19998": "h:2379"})

    def test_get_setting_sources(self):
        # 1) split_sort_config 段中的属性
        cfg = SimpleNamespace(split_sort_config=SimpleNamespace(fast_tier_scheme="memfs"))
        self.assertEqual(get_setting(cfg, "fast_tier_scheme"), "memfs")
        # 2) extra_config 字典
        cfg = SimpleNamespace(extra_config={"oracle_backend": "static"})
        self.assertEqual(get_setting(cfg, "oracle_backend"), "static")
        # 3) 普通 dict
        self.assertEqual(get_setting({"split_sort_config": {"etcd_port": 1234}}, "etcd_port"), 1234)
        # 4) 默认值
        self.assertEqual(get_setting({}, "etcd_prefix", "/tiermeta"), "/tiermeta")

if __name__ == "__main__":
    unittest.main()
