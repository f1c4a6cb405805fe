# arbcycle/graph/cycles.py
"""
Cycle reconstruction & scoring

-----------------------------
Purpose:
    - Walk predecessor links back from a certifying edge to recover the loop
    - Replay raw rates along the loop to get the real profit
      (log weights only decide that a cycle exists, never how much it pays)
    - Filter by the caller's minimum profit
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from arbcycle.errors import ReconstructionAnomaly
from arbcycle.graph.network import DirectedEdge, Network

# Logger setup
log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArbitrageCycle:
    """
    A profitable loop

    Attributes
    ----------
    start_token : str
        Token the loop starts and ends with
    tokens : Tuple[str, ...]
        Closed token sequence, ``tokens[0] == tokens[-1] == start_token``
    product : float
        Product of the raw rates around the loop
    profit_pct : float
        ``(product - 1) * 100``
    hops : Tuple[DirectedEdge, ...]
        Edge used for each hop
    """

    start_token: str
    tokens: Tuple[str, ...]
    product: float
    profit_pct: float
    hops: Tuple[DirectedEdge, ...] = ()

    @property
    def hop_count(self) -> int:
        return len(self.tokens) - 1

    def key(self) -> Tuple[str, ...]:
        """Rotation-invariant identity of the loop"""
        ring = self.tokens[:-1]
        return min(ring[i:] + ring[:i] for i in range(len(ring)))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "start_token": self.start_token,
            "cycle": list(self.tokens),
            "product": self.product,
            "profit_pct": self.profit_pct,
            "hops": [
                {"from": e.from_token, "to": e.to_token, "rate": e.rate, "pool_id": e.pool_id}
                for e in self.hops
            ],
        }


def reconstruct_cycle(
    pred_token: Sequence[Optional[int]],
    start: int,
    n: int,
) -> List[int]:
    """
    Recover the loop reached by walking predecessors back from ``start``

    Parameters
    ----------
    pred_token : Sequence[Optional[int]]
        Predecessor vertex of each vertex (None = no predecessor)
    start : int
        Tail of the certifying edge
    n : int
        Number of vertices; the walk never needs more steps than this

    Returns
    -------
    List[int]
        Closed vertex sequence in forward order, e.g. [a, b, c, a]

    Raises
    ------
    ReconstructionAnomaly
        If the chain hits a vertex without predecessor or does not close
        within ``n`` steps
    """
    walk = [start]
    position = {start: 0}
    cur = start
    for _ in range(n):
        prev = pred_token[cur]
        if prev is None:
            raise ReconstructionAnomaly(f"predecessor chain from {start} ends at {cur}")
        if prev in position:
            # walk[i:] is the loop in backward order
            loop = walk[position[prev]:]
            return [prev] + loop[::-1]
        position[prev] = len(walk)
        walk.append(prev)
        cur = prev
    raise ReconstructionAnomaly(f"predecessor chain from {start} did not close in {n} steps")


def score_cycle(
    network: Network,
    cycle: Sequence[str],
    min_profit: float = 0.0,
) -> Optional[ArbitrageCycle]:
    """
    Replay raw rates along ``cycle`` and keep it if it clears the threshold

    For each hop the maximum-rate parallel edge is used.

    Parameters
    ----------
    network : Network
    cycle : Sequence[str]
        Closed token sequence (first == last)
    min_profit : float, default 0.0
        Fractional threshold (0.01 = 1%); compared strictly

    Returns
    -------
    Optional[ArbitrageCycle]
        None if a hop has no edge or profit_pct <= min_profit * 100
    """
    if len(cycle) < 3 or cycle[0] != cycle[-1]:
        log.debug("Not a closed cycle: %s", cycle)
        return None

    product = 1.0
    hops = []
    for a, b in zip(cycle, cycle[1:]):
        edge = network.best_edge(a, b)
        if edge is None:
            log.warning("Edge data not found for %s -> %s", a, b)
            return None
        product *= edge.rate
        hops.append(edge)

    profit_pct = (product - 1.0) * 100
    if product <= 1.0 or not profit_pct > min_profit * 100:
        log.debug("Cycle profit %.4f%% not above threshold %.4f%%",
                  profit_pct, min_profit * 100)
        return None

    return ArbitrageCycle(
        start_token=cycle[0],
        tokens=tuple(cycle),
        product=product,
        profit_pct=profit_pct,
        hops=tuple(hops),
    )
