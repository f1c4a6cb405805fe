# arbcycle/graph/finder.py
"""
Arbitrage search entry point

-----------------------------
Features:
    1. Per-source Bellman-Ford pass from every token (or a chosen subset)
    2. Optional single virtual-source pass
    3. Reconstruction + raw-rate scoring of each certifying edge
    4. Rotation dedupe, optional thread pool and wall-clock budget
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from arbcycle.errors import ReconstructionAnomaly
from arbcycle.graph.bellman_ford import (
    RelaxationResult,
    relax_from_source,
    relax_from_virtual_source,
)
from arbcycle.graph.cycles import ArbitrageCycle, reconstruct_cycle, score_cycle
from arbcycle.graph.network import Network

# Logger setup
log = logging.getLogger(__name__)


def _collect_cycles(
    network: Network,
    result: RelaxationResult,
    min_profit: float,
) -> List[ArbitrageCycle]:
    """Turn every certifying edge of one relaxation into a scored cycle"""
    edges = network.indexed_edges
    tokens = network.tokens
    n = len(tokens)
    pred_token = [edges[ei][0] if ei is not None else None for ei in result.pred]

    cycles = []
    for ei in result.certifying:
        u, v, _ = edges[ei]
        try:
            idx_cycle = reconstruct_cycle(pred_token, u, n)
        except ReconstructionAnomaly as e:
            log.debug("Skipping certifying edge %s -> %s: %s", tokens[u], tokens[v], e)
            continue

        cycle = score_cycle(network, [tokens[i] for i in idx_cycle], min_profit)
        if cycle is not None:
            cycles.append(cycle)
    return cycles


def _scan_source(
    network: Network,
    source: int,
    min_profit: float,
    deadline: Optional[float],
) -> Optional[List[ArbitrageCycle]]:
    """One source pass; None means it was skipped by the time budget"""
    if deadline is not None and time.monotonic() >= deadline:
        return None

    result = relax_from_source(len(network), network.indexed_edges, source)
    log.debug("Source %s: %d passes, %d certifying edges",
              network.tokens[source], result.passes, len(result.certifying))
    if not result.certifying:
        return []
    return _collect_cycles(network, result, min_profit)


def _dedupe(batches: Iterable[List[ArbitrageCycle]]) -> List[ArbitrageCycle]:
    seen = set()
    unique = []
    for batch in batches:
        for cycle in batch:
            key = cycle.key()
            if key in seen:
                continue
            seen.add(key)
            unique.append(cycle)
    return unique


def find_arbitrage(
    network: Network,
    min_profit: float = 0.0,
    *,
    sources: Optional[Iterable[str]] = None,
    max_workers: Optional[int] = None,
    multi_source: bool = False,
    time_budget: Optional[float] = None,
) -> List[ArbitrageCycle]:
    """
    Detect profitable cycles (negative cycles in log-space)

    Parameters
    ----------
    network : Network
        Immutable rate graph; read-only for the whole call
    min_profit : float, default 0.0
        Minimum profit rate (0.01 = 1%); a cycle must strictly exceed it
    sources : Optional[Iterable[str]]
        Source tokens to scan from (default: every token, in token order)
    max_workers : Optional[int]
        > 1 runs source passes on a thread pool; the result is identical
        to the sequential scan
    multi_source : bool, default False
        Use one virtual-source pass instead of one pass per token
    time_budget : Optional[float]
        Wall-clock cap in seconds; sources not started in time are skipped

    Returns
    -------
    List[ArbitrageCycle]
        One entry per distinct loop (up to rotation); empty if none

    Raises
    ------
    ValueError
        If ``min_profit`` is negative or ``sources`` is combined with
        ``multi_source``
    InvalidEdgeError
        If a source token is not in the network
    """
    if min_profit < 0:
        raise ValueError(f"min_profit must be >= 0, got {min_profit}")

    if multi_source:
        if sources is not None:
            raise ValueError("sources cannot be combined with multi_source")
        log.info("Searching for negative cycles from a virtual source (min profit: %.2f%%)",
                 min_profit * 100)
        result = relax_from_virtual_source(len(network), network.indexed_edges)
        cycles = _dedupe([_collect_cycles(network, result, min_profit)])
        log.info("Found %d profitable cycles", len(cycles))
        return cycles

    if sources is None:
        source_idx = list(range(len(network)))
    else:
        source_idx = [network.index_of(t) for t in sources]

    log.info("Searching for negative cycles from %d sources (min profit: %.2f%%)",
             len(source_idx), min_profit * 100)

    deadline = time.monotonic() + time_budget if time_budget is not None else None

    if max_workers and max_workers > 1 and len(source_idx) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = [
                pool.submit(_scan_source, network, s, min_profit, deadline)
                for s in source_idx
            ]
            batches = [f.result() for f in futures]
    else:
        batches = [_scan_source(network, s, min_profit, deadline) for s in source_idx]

    skipped = sum(1 for b in batches if b is None)
    if skipped:
        log.warning("Time budget of %.3fs exhausted: %d of %d sources not scanned",
                    time_budget, skipped, len(source_idx))

    cycles = _dedupe(b for b in batches if b is not None)
    if cycles:
        log.info("Found %d profitable cycles", len(cycles))
    else:
        log.info("No profitable cycles found")
    return cycles


def sort_by_profit(cycles: Iterable[ArbitrageCycle]) -> List[ArbitrageCycle]:
    """Cycles ordered by profit_pct, highest first"""
    return sorted(cycles, key=lambda c: c.profit_pct, reverse=True)
