# arbcycle/__main__.py
"""
Snapshot runner for the arbitrage engine

-----------------------------
Features:
    1. Load a rate snapshot (JSON) into a Network
    2. Log graph statistics
    3. Search for negative cycles (arbitrage opportunities)
    4. Log the cycles, most profitable first

Usage:
    python -m arbcycle [snapshot.json]
"""

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from arbcycle import config
from arbcycle.errors import InvalidEdgeError
from arbcycle.graph.cycles import ArbitrageCycle
from arbcycle.graph.finder import find_arbitrage, sort_by_profit
from arbcycle.graph.network import Network
from arbcycle.graph.stats import graph_stats
from arbcycle.snapshot import load_snapshot

log = logging.getLogger("ArbitrageScanner")


class ArbitrageScanner:
    """
    Runs one detection pass over a snapshot file

    Attributes
    ----------
    snapshot_path : Path
        Snapshot to load
    network : Optional[Network]
        Network built from the snapshot
    """

    def __init__(self, snapshot_path: Path) -> None:
        self.snapshot_path = snapshot_path
        self.network: Optional[Network] = None

    def load_network(self) -> bool:
        """
        Build the Network from the snapshot

        Returns
        -------
        bool
            Whether the snapshot was loaded
        """
        log.info("📂 Loading snapshot %s", self.snapshot_path)
        try:
            self.network = load_snapshot(self.snapshot_path)
        except FileNotFoundError as e:
            log.error("❌ %s", e)
            return False
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            log.error("❌ Snapshot is not valid UTF-8 JSON: %s", e)
            return False
        except InvalidEdgeError as e:
            log.error("❌ Invalid edge in snapshot: %s", e)
            return False

        stats = graph_stats(self.network)
        log.info("📊 Graph: %d tokens, %d edges (%d parallel)",
                 stats["vertices"], stats["edges"], stats["parallel_edges"])
        for key, value in stats.items():
            log.debug("  %-25s: %s", key, value)
        return True

    def find_opportunities(
        self,
        min_profit: float = config.MIN_PROFIT_THRESHOLD,
    ) -> List[ArbitrageCycle]:
        """
        Search the loaded Network for profitable cycles

        Parameters
        ----------
        min_profit : float
            Minimum profit rate (0.001 = 0.1%)

        Returns
        -------
        List[ArbitrageCycle]
            Cycles, most profitable first
        """
        if self.network is None:
            raise RuntimeError("Network not loaded. Call load_network() first.")

        log.info("🔍 Searching for arbitrage opportunities (min profit: %.2f%%)",
                 min_profit * 100)
        cycles = sort_by_profit(find_arbitrage(
            self.network,
            min_profit,
            max_workers=config.SEARCH_WORKERS,
            multi_source=config.MULTI_SOURCE,
            time_budget=config.SEARCH_TIME_BUDGET,
        ))

        if not cycles:
            log.info("😕 No profitable arbitrage opportunities found")
            return cycles

        log.info("🎯 Found %d profitable arbitrage opportunities:", len(cycles))
        for i, cycle in enumerate(cycles, 1):
            log.info("  %d. %s (%.4f%% profit, %d hops)",
                     i, " → ".join(cycle.tokens), cycle.profit_pct, cycle.hop_count)
            for j, hop in enumerate(cycle.hops, 1):
                log.debug("       %d. %s → %s rate %.10g (pool: %s)",
                          j, hop.from_token, hop.to_token, hop.rate, hop.pool_id)
        return cycles


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main execution function
    """
    argv = sys.argv[1:] if argv is None else argv
    snapshot_path = Path(argv[0]) if argv else config.SNAPSHOT_PATH

    scanner = ArbitrageScanner(snapshot_path)
    if not scanner.load_network():
        return 1
    scanner.find_opportunities()
    log.info("🏁 Scan finished")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        log.info("👋 Scan stopped by user")
