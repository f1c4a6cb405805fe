# arbcycle/graph/stats.py
"""
Graph statistics for a Network (python-igraph)
"""

import logging
from typing import Any, Dict

from igraph import Graph

from arbcycle.graph.network import Network

log = logging.getLogger(__name__)


def to_igraph(network: Network) -> Graph:
    """Directed multigraph with ``token`` vertex and ``rate``/``weight``/``pool_id`` edge attributes"""
    g = Graph(directed=True)
    g.add_vertices(len(network))
    g.vs["token"] = list(network.tokens)
    g.add_edges([(u, v) for u, v, _ in network.indexed_edges])
    g.es["rate"] = [e.rate for e in network.edges]
    g.es["weight"] = [e.weight for e in network.edges]
    g.es["pool_id"] = [e.pool_id for e in network.edges]
    return g


def graph_stats(network: Network) -> Dict[str, Any]:
    """
    Get graph statistics

    Returns
    -------
    Dict[str, Any]
        Graph statistics
    """
    if len(network) == 0:
        return {"vertices": 0, "edges": 0, "parallel_edges": 0}

    g = to_igraph(network)

    # Basic information
    num_vertices = g.vcount()
    num_edges    = g.ecount()
    pairs        = {(e.source, e.target) for e in g.es}
    parallel     = num_edges - len(pairs)

    # Connectivity
    weak_sizes   = g.components(mode="weak").sizes()
    strong_sizes = g.components(mode="strong").sizes()
    cyclic_sccs  = sum(1 for s in strong_sizes if s > 1)

    # Degree distribution
    indegrees  = g.indegree()
    outdegrees = g.outdegree()
    degrees    = [i + o for i, o in zip(indegrees, outdegrees)]

    return {
        "vertices": num_vertices,
        "edges": num_edges,
        "parallel_edges": parallel,
        "density": g.density(loops=False),
        "is_weakly_connected": len(weak_sizes) == 1,
        "component_count": len(weak_sizes),
        "largest_component_size": max(weak_sizes),
        "cyclic_scc_count": cyclic_sccs,
        "max_degree": max(degrees),
        "min_degree": min(degrees),
        "avg_degree": sum(degrees) / num_vertices,
        "max_indegree": max(indegrees),
        "max_outdegree": max(outdegrees),
        "isolated_tokens": sum(1 for d in degrees if d == 0),
    }
