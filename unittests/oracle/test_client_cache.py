import unittest
from locality_split_sorter.oracle import ClientCache, LocalityHandle, LocalityHandleFactory, TierStatus
from locality_split_sorter.splits import AuthorityKey

class _Handle(LocalityHandle):
    def __init__(self, key):
        self.key = key
        self.closed = False
    def get_status(self, path):
        return TierStatus(0, 0)
    def close(self):
        self.closed = True

class _Factory(LocalityHandleFactory):
    def __init__(self, failing=()):
        self.failing = set(failing)
        self.connects = []
    def check_available(self):
        return None
    def connect(self, key):
        self.connects.append(key)
        if key.authority in self.failing:
            raise ConnectionError("refused")
        return _Handle(key)

class ClientCacheTests(unittest.TestCase):
    def test_reuse_per_authority(self):
        factory = _Factory()
        cache = ClientCache(factory)
        k1 = AuthorityKey("alluxio", "m1:19998")
        k2 = AuthorityKey("alluxio", "m2:19998")
        h1 = cache.get_or_create(k1)
        self.assertIs(cache.get_or_create(AuthorityKey("alluxio", "m1:19998")), h1)
        h2 = cache.get_or_create(k2)
        self.assertIsNot(h1, h2)
        self.assertEqual(factory.connects, [k1, k2])
        self.assertEqual(len(cache), 2)
        self.assertEqual(cache.stats["created"], 2)
        self.assertEqual(cache.stats["reused"], 1)

    def test_failure_returns_none_and_retries(self):
        factory = _Factory(failing={"down:19998"})
        cache = ClientCache(factory)
        key = AuthorityKey("alluxio", "down:19998")
        self.assertIsNone(cache.get_or_create(key))
        self.assertIsNone(cache.get_or_create(key))
        # 失败结果不缓存，每次都会重新尝试
        self.assertEqual(len(factory.connects), 2)
        self.assertEqual(len(cache), 0)
        self.assertEqual(cache.stats["failures"], 2)

    def test_close_releases_handles(self):
        cache = ClientCache(_Factory())
        h = cache.get_or_create(AuthorityKey("alluxio", "m:19998"))
        cache.close()
        self.assertTrue(h.closed)
        self.assertEqual(len(cache), 0)

if __name__ == "__main__":
    unittest.main()
