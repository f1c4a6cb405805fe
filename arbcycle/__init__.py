"""
arbcycle - arbitrage cycle detection over AMM rate graphs

    >>> net = Network.from_triples(["A", "B"], [("A", "B", 2.0), ("B", "A", 0.6)])
    >>> [c.tokens for c in find_arbitrage(net, 0.01)]
    [('A', 'B', 'A')]
"""

from arbcycle.errors import InvalidEdgeError, ReconstructionAnomaly
from arbcycle.graph.cycles import ArbitrageCycle
from arbcycle.graph.finder import find_arbitrage, sort_by_profit
from arbcycle.graph.network import DirectedEdge, Network

__all__ = [
    "ArbitrageCycle",
    "DirectedEdge",
    "InvalidEdgeError",
    "Network",
    "ReconstructionAnomaly",
    "find_arbitrage",
    "sort_by_profit",
]
