import json
from pathlib import Path

import pytest

from arbcycle.errors import InvalidEdgeError
from arbcycle.graph.finder import find_arbitrage
from arbcycle.snapshot import load_snapshot, network_from_dict

SAMPLE = Path(__file__).resolve().parents[2] / "data" / "snapshot.json"


def _write(tmp_path, data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadSnapshot:
    def test_loads_declared_tokens(self, tmp_path):
        path = _write(tmp_path, {
            "tokens": ["USDC", "ETH", "DAI"],
            "edges": [{"from": "USDC", "to": "ETH", "rate": 0.0004, "pool_id": "p1"}],
        })
        net = load_snapshot(path)
        assert net.tokens == ("USDC", "ETH", "DAI")
        assert net.edges[0].pool_id == "p1"

    def test_infers_tokens_in_first_seen_order(self):
        net = network_from_dict({"edges": [
            {"from": "ETH", "to": "DAI", "rate": 2600},
            {"from": "DAI", "to": "USDC", "rate": 0.98},
        ]})
        assert net.tokens == ("ETH", "DAI", "USDC")
        assert net.edges[0].pool_id is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_snapshot(path)

    @pytest.mark.parametrize("data", [
        [],
        {"tokens": ["A"]},
        {"edges": [{"from": "A", "to": "B"}]},
        {"edges": [["A", "B", 1.1]]},
        {"edges": [{"from": "A", "to": "B", "rate": -1}]},
        {"tokens": "AB", "edges": []},
        {"tokens": ["A"], "edges": [{"from": "A", "to": "B", "rate": 1.1}]},
        {"edges": [{"from": ["A"], "to": "B", "rate": 1.1}]},
        {"edges": [{"from": "A", "to": {"x": 1}, "rate": 1.1}]},
        {"edges": [{"from": "A", "to": "B", "rate": True}]},
        {"tokens": [["A"]], "edges": []},
        {"tokens": [1, 2], "edges": []},
    ])
    def test_rejects_malformed_snapshot(self, data):
        with pytest.raises(InvalidEdgeError):
            network_from_dict(data)

    def test_sample_snapshot_has_one_loop(self):
        cycles = find_arbitrage(load_snapshot(SAMPLE), 0.01)
        assert len(cycles) == 1
        assert set(cycles[0].tokens) == {"USDC", "ETH", "DAI"}
        assert "usdc-eth-5bp" in {h.pool_id for h in cycles[0].hops}
        assert cycles[0].product == pytest.approx(0.000401 * 2600 * 0.98, rel=1e-9)
