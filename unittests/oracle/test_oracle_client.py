import unittest
from locality_split_sorter.exceptions import ConfigurationError
from locality_split_sorter.oracle import (
    LocalityHandle,
    LocalityHandleFactory,
    LocalityOracleClient,
    StaticLocalityHandleFactory,
    TierStatus,
)
from locality_split_sorter.splits import Path

class _RawHandle(LocalityHandle):
    """直接返回预设对象，用于构造格式错误的响应"""
    def __init__(self, answer):
        self.answer = answer
    def get_status(self, path):
        if isinstance(self.answer, Exception):
            raise self.answer
        return self.answer

class _RawFactory(LocalityHandleFactory):
    def __init__(self, answer=None, available=True):
        self.answer = answer
        self.available = available
        self.checks = 0
    def check_available(self):
        self.checks += 1
        if not self.available:
            raise RuntimeError("client api missing")
    def connect(self, key):
        return _RawHandle(self.answer)

FAST = Path.parse("alluxio://m:19998/data/a")

class LocalityOracleClientTests(unittest.TestCase):
    def test_non_fast_tier_short_circuits(self):
        factory = StaticLocalityHandleFactory()
        client = LocalityOracleClient(factory, "alluxio")
        status = client.query(Path.parse("hdfs://nn:8020/data/a"))
        self.assertEqual(status, TierStatus(100, 100))
        self.assertEqual(factory.connect_count, 0)
        self.assertEqual(client.stats["short_circuits"], 1)
        self.assertEqual(client.stats["oracle_queries"], 0)

    def test_fast_tier_query(self):
        factory = StaticLocalityHandleFactory({str(FAST): {"memory": 20, "cache": 90}})
        client = LocalityOracleClient(factory, "alluxio")
        self.assertEqual(client.query(FAST), TierStatus(20, 90))
        self.assertEqual(client.query(FAST), TierStatus(20, 90))
        # 句柄按 authority 复用
        self.assertEqual(factory.connect_count, 1)

    def test_unknown_path_scores_zero(self):
        client = LocalityOracleClient(StaticLocalityHandleFactory(), "alluxio")
        self.assertEqual(client.query(FAST), TierStatus(0, 0))
        self.assertEqual(client.stats["lookup_failures"], 1)

    def test_connection_error_scores_zero(self):
        client = LocalityOracleClient(_RawFactory(answer=ConnectionError("timeout")), "alluxio")
        self.assertEqual(client.query(FAST), TierStatus(0, 0))

    def test_missing_handle_scores_zero(self):
        factory = StaticLocalityHandleFactory(
            {str(FAST): {"memory": 50, "cache": 50}}, unreachable_authorities=["m:19998"]
        )
        client = LocalityOracleClient(factory, "alluxio")
        self.assertEqual(client.query(FAST), TierStatus(0, 0))

    def test_malformed_responses_score_zero(self):
        for answer in (TierStatus(150, 10), TierStatus(-1, 10), TierStatus("50", 10),
                       TierStatus(True, 10), {"memory": 1, "cache": 1}, None):
            with self.subTest(answer=answer):
                client = LocalityOracleClient(_RawFactory(answer=answer), "alluxio")
                self.assertEqual(client.query(FAST), TierStatus(0, 0))

    def test_construction_checks_api_once(self):
        factory = _RawFactory()
        client = LocalityOracleClient(factory, "alluxio")
        client.query(FAST)
        client.query(Path.parse("alluxio://m:19998/data/b"))
        self.assertEqual(factory.checks, 1)

    def test_unavailable_api_is_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            LocalityOracleClient(_RawFactory(available=False), "alluxio")

    def test_non_factory_is_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            LocalityOracleClient(object(), "alluxio")  # type: ignore[arg-type]
        with self.assertRaises(ConfigurationError):
            LocalityOracleClient(StaticLocalityHandleFactory(), "")

if __name__ == "__main__":
    unittest.main()
