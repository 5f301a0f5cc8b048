import unittest

from tiercache.cache.errors import ConfigurationError
from tiercache.cache.tier import Evicted, EvictionPolicy, Tier


class TestTierConstruction(unittest.TestCase):
    def test_rejects_non_positive_capacity(self):
        for bad in (0, -1):
            with self.assertRaises(ConfigurationError):
                Tier(bad, EvictionPolicy.LRU)

    def test_rejects_non_integer_capacity(self):
        for bad in (2.5, "3", True, None):
            with self.assertRaises(ConfigurationError):
                Tier(bad)  # type: ignore[arg-type]

    def test_policy_parsed_from_string(self):
        self.assertIs(Tier(2, "fifo").policy, EvictionPolicy.FIFO)
        self.assertIs(Tier(2, " Lru ").policy, EvictionPolicy.LRU)
        with self.assertRaises(ConfigurationError):
            Tier(2, "LFU")

    def test_policy_error_shows_original_input(self):
        for bad, shown in (("", "''"), (0, "0")):
            with self.assertRaises(ConfigurationError) as ctx:
                Tier(2, bad)  # type: ignore[arg-type]
            self.assertIn(f"Unknown eviction policy {shown}", str(ctx.exception))

    def test_configuration_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class TestTierEviction(unittest.TestCase):
    def _fill(self, tier, n):
        for k in range(1, n + 1):
            self.assertIsNone(tier.put(k, k * 10))

    def test_lru_untouched_evicts_first_inserted(self):
        tier = Tier(3, EvictionPolicy.LRU)
        self._fill(tier, 3)
        self.assertEqual(tier.put(4, 40), Evicted(1, 10))
        self.assertEqual(tier.keys(), [2, 3, 4])

    def test_lru_read_refreshes_recency(self):
        tier = Tier(3, EvictionPolicy.LRU)
        self._fill(tier, 3)
        self.assertEqual(tier.get(1), 10)
        evicted = tier.put(4, 40)
        self.assertEqual(evicted.key, 2)
        self.assertIn(1, tier)

    def test_fifo_read_does_not_reorder(self):
        tier = Tier(3, EvictionPolicy.FIFO)
        self._fill(tier, 3)
        self.assertEqual(tier.get(1), 10)
        self.assertEqual(tier.keys(), [1, 2, 3])
        evicted = tier.put(4, 40)
        self.assertEqual(evicted, Evicted(1, 10))
        self.assertNotIn(1, tier)

    def test_update_never_evicts_and_moves_to_back(self):
        for policy in EvictionPolicy:
            tier = Tier(3, policy)
            self._fill(tier, 3)
            self.assertIsNone(tier.put(1, 99))
            self.assertEqual(len(tier), 3)
            self.assertEqual(tier.peek(1), 99)
            self.assertEqual(tier.keys(), [2, 3, 1])

    def test_miss_returns_default_without_side_effects(self):
        tier = Tier(2)
        tier.put("a", 1)
        self.assertIsNone(tier.get("zzz"))
        self.assertEqual(tier.get("zzz", "fallback"), "fallback")
        self.assertEqual(tier.keys(), ["a"])

    def test_stored_none_is_present(self):
        tier = Tier(2)
        tier.put("a", None)
        self.assertIn("a", tier)
        self.assertIsNone(tier.get("a", "fallback"))

    def test_peek_does_not_refresh_lru(self):
        tier = Tier(2, EvictionPolicy.LRU)
        tier.put("a", 1)
        tier.put("b", 2)
        self.assertEqual(tier.peek("a"), 1)
        self.assertEqual(tier.put("c", 3).key, "a")

    def test_force_remove(self):
        tier = Tier(2)
        tier.put("a", 1)
        tier.put("b", 2)
        tier.force_remove("a")
        tier.force_remove("missing")
        self.assertEqual(tier.items(), [("b", 2)])
        self.assertFalse(tier.is_full)
        self.assertIsNone(tier.put("c", 3))
        self.assertTrue(tier.is_full)

    def test_capacity_and_order_invariants_hold(self):
        for policy in EvictionPolicy:
            tier = Tier(4, policy)
            for step in range(200):
                key = (step * 7) % 11
                if step % 3 == 0:
                    tier.get(key)
                elif step % 5 == 0:
                    tier.force_remove(key)
                else:
                    tier.put(key, step)
                self.assertLessEqual(len(tier), tier.capacity)
                self.assertEqual(sorted(tier.keys()), sorted(k for k, _ in tier.items()))
                self.assertEqual(len(set(tier.keys())), len(tier))


if __name__ == "__main__":
    unittest.main()
