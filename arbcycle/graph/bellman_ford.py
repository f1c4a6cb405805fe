"""
Negative cycle search using Bellman-Ford in log-space
  * relax_from_source
      - Shortest-path estimates from one source + certifying edges
  * relax_from_virtual_source
      - Same, from a dummy zero-weight source reaching every vertex
"""

import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

Edge = Tuple[int, int, float]


class RelaxationResult(NamedTuple):
    """
    dist : List[float]
        shortest-path estimate per vertex (math.inf = unreached)
    pred : List[Optional[int]]
        index (into the edge list) of the edge that set each estimate
    certifying : List[int]
        edge indices still relaxable after |V|-1 passes
    passes : int
        relaxation passes actually run (early exit included)
    """
    dist: List[float]
    pred: List[Optional[int]]
    certifying: List[int]
    passes: int


def _relax(
    edges: Sequence[Edge],
    dist: List[float],
    pred: List[Optional[int]],
    max_passes: int,
) -> int:
    passes = 0
    for _ in range(max_passes):
        passes += 1
        updated = False
        for ei, (u, v, w) in enumerate(edges):
            du = dist[u]
            if du == math.inf:
                continue
            if du + w < dist[v]:
                dist[v] = du + w
                pred[v] = ei
                updated = True
        if not updated:
            break
    return passes


def _certify(edges: Sequence[Edge], dist: List[float]) -> List[int]:
    return [
        ei for ei, (u, v, w) in enumerate(edges)
        if dist[u] != math.inf and dist[u] + w < dist[v]
    ]


def relax_from_source(n: int, edges: Sequence[Edge], source: int) -> RelaxationResult:
    """
    Parameters
    ----------
    n : int
        number of vertices
    edges : [(u,v,w), ...]
        directed edge set, relaxed in this order every pass
    source : int
        source vertex

    Returns
    -------
    RelaxationResult
        A non-empty ``certifying`` list means a negative cycle is reachable
        from ``source``.
    """
    if not 0 <= source < n:
        raise IndexError(f"source {source} out of range for {n} vertices")

    # ---------- 1. Initialise working tables ----------
    dist: List[float] = [math.inf] * n
    pred: List[Optional[int]] = [None] * n
    dist[source] = 0.0

    # ---------- 2. Relax |V|-1 times ----------
    passes = _relax(edges, dist, pred, n - 1)

    # ---------- 3. Edges still relaxable certify a negative cycle ----------
    return RelaxationResult(dist, pred, _certify(edges, dist), passes)


def relax_from_virtual_source(n: int, edges: Sequence[Edge]) -> RelaxationResult:
    """
    Single pass over the whole graph: a dummy source with a 0-weight edge
    to every vertex is equivalent to starting every ``dist`` at 0.

    ``pred`` entries stay None for vertices never improved below 0, which
    is where the dummy edge would have been the predecessor.
    """
    dist: List[float] = [0.0] * n
    pred: List[Optional[int]] = [None] * n

    # The extended graph has n+1 vertices, hence n passes
    passes = _relax(edges, dist, pred, n)
    return RelaxationResult(dist, pred, _certify(edges, dist), passes)
