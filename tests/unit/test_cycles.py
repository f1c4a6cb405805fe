import pytest

from arbcycle.errors import ReconstructionAnomaly
from arbcycle.graph.cycles import ArbitrageCycle, reconstruct_cycle, score_cycle


class TestReconstructCycle:
    def test_walks_back_into_forward_order(self):
        # 0 -> 1 -> 2 -> 0
        assert reconstruct_cycle([2, 0, 1], 0, 3) == [0, 1, 2, 0]

    def test_tail_leading_into_loop_is_dropped(self):
        # 3 hangs off the 0 -> 1 -> 2 -> 0 loop
        assert reconstruct_cycle([2, 0, 1, 0], 3, 4) == [0, 1, 2, 0]

    def test_two_hop_loop(self):
        assert reconstruct_cycle([1, 0], 1, 2) == [1, 0, 1]

    def test_chain_ending_at_source_is_anomaly(self):
        with pytest.raises(ReconstructionAnomaly):
            reconstruct_cycle([None, 0, 1], 2, 3)

    def test_longest_chain_closes_within_bound(self):
        # loop 0 -> 1 -> 2 -> 3 -> 0 with 4 hanging off 0
        assert reconstruct_cycle([3, 0, 1, 2, 0], 4, 5) == [0, 1, 2, 3, 0]
        # the loop spans every vertex
        assert reconstruct_cycle([4, 0, 1, 2, 3], 4, 5) == [4, 0, 1, 2, 3, 4]

    def test_chain_through_every_vertex_without_loop_is_anomaly(self):
        # 0 -> 1 -> 2 -> 3 -> 4, no way back
        with pytest.raises(ReconstructionAnomaly, match="ends at 0"):
            reconstruct_cycle([None, 0, 1, 2, 3], 4, 5)


class TestScoreCycle:
    def test_profit_from_raw_rates(self, triangle):
        cycle = score_cycle(triangle, ["USDC", "ETH", "DAI", "USDC"], 0.01)
        expected = 0.0004 * 2600 * 0.98
        assert cycle.start_token == "USDC"
        assert cycle.product == pytest.approx(expected, rel=1e-9)
        assert cycle.profit_pct == pytest.approx((expected - 1) * 100, rel=1e-9)
        assert cycle.profit_pct == pytest.approx(1.92, abs=1e-6)
        assert cycle.hop_count == 3

    def test_below_threshold_is_dropped(self, triangle):
        assert score_cycle(triangle, ["USDC", "ETH", "DAI", "USDC"], 0.02) is None

    def test_threshold_is_strict(self, exact_triangle):
        loop = ["A", "B", "C", "A"]
        assert score_cycle(exact_triangle, loop, 0.25) is None
        assert score_cycle(exact_triangle, loop, 0.25 - 1e-12).profit_pct == 25.0

    def test_losing_cycle_is_dropped(self, consistent_market):
        assert score_cycle(consistent_market, ["A", "B", "C", "A"], 0.0) is None

    def test_parallel_edges_use_best_rate(self, parallel_pools):
        cycle = score_cycle(parallel_pools, ["USDC", "ETH", "DAI", "USDC"])
        assert cycle.hops[0].pool_id == "usdc-eth-5bp"
        assert cycle.product == pytest.approx(0.00041 * 2600 * 0.98, rel=1e-9)

    def test_missing_hop_is_dropped(self, triangle):
        assert score_cycle(triangle, ["USDC", "DAI", "ETH", "USDC"]) is None

    def test_open_sequence_is_dropped(self, triangle):
        assert score_cycle(triangle, ["USDC", "ETH", "DAI"]) is None


class TestArbitrageCycle:
    def _cycle(self, tokens):
        return ArbitrageCycle(tokens[0], tuple(tokens), 1.1, 10.0)

    def test_key_is_rotation_invariant(self):
        a = self._cycle(["B", "C", "A", "B"])
        b = self._cycle(["A", "B", "C", "A"])
        assert a.key() == b.key() == ("A", "B", "C")

    def test_key_respects_direction(self):
        a = self._cycle(["A", "B", "C", "A"])
        b = self._cycle(["A", "C", "B", "A"])
        assert a.key() != b.key()

    def test_as_dict(self, triangle):
        cycle = score_cycle(triangle, ["USDC", "ETH", "DAI", "USDC"])
        data = cycle.as_dict()
        assert data["cycle"] == ["USDC", "ETH", "DAI", "USDC"]
        assert [h["to"] for h in data["hops"]] == ["ETH", "DAI", "USDC"]
