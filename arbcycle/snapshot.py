# arbcycle/snapshot.py
"""
Rate snapshot loader

-----------------------------
Purpose:
    - Read a JSON snapshot of net (after-fee) rates handed over by the
      pool-ingestion side
    - Turn it into a Network; malformed entries are rejected, not dropped

Format::

    {
      "tokens": ["USDC", "ETH", ...],          # optional
      "edges": [
        {"from": "USDC", "to": "ETH", "rate": 0.0004, "pool_id": "uni-v3-5bp"},
        ...
      ]
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from arbcycle.errors import InvalidEdgeError
from arbcycle.graph.network import DirectedEdge, Network

# Logger setup
log = logging.getLogger(__name__)


def network_from_dict(data: Dict[str, Any]) -> Network:
    """
    Build a Network from an already-decoded snapshot

    Raises
    ------
    InvalidEdgeError
        If the snapshot shape or any edge is invalid
    """
    if not isinstance(data, dict) or not isinstance(data.get("edges"), list):
        raise InvalidEdgeError("Snapshot must be an object with an 'edges' list")

    edges: List[DirectedEdge] = []
    inferred: Dict[str, None] = {}
    for i, raw in enumerate(data["edges"]):
        try:
            edge = DirectedEdge(
                from_token=raw["from"],
                to_token=raw["to"],
                rate=raw["rate"],
                pool_id=raw.get("pool_id"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise InvalidEdgeError(f"Malformed edge #{i}: {raw!r} ({e})") from None
        edges.append(edge)
        inferred.setdefault(edge.from_token)
        inferred.setdefault(edge.to_token)

    tokens = data.get("tokens")
    if tokens is None:
        tokens = list(inferred)
    elif not isinstance(tokens, list):
        raise InvalidEdgeError("'tokens' must be a list")

    return Network(tokens, edges)


def load_snapshot(path: Union[str, Path]) -> Network:
    """
    Load a rate snapshot file

    Parameters
    ----------
    path : Union[str, Path]
        JSON snapshot file

    Returns
    -------
    Network

    Raises
    ------
    FileNotFoundError
        When the snapshot file is not found
    json.JSONDecodeError
        When the JSON file format is invalid
    UnicodeDecodeError
        When the file is not UTF-8
    InvalidEdgeError
        When an edge or the token list is invalid
    """
    snapshot_path = Path(path)
    if not snapshot_path.exists():
        log.error("Snapshot file not found: %s", snapshot_path)
        raise FileNotFoundError(f"Snapshot file not found: {snapshot_path}")

    with open(snapshot_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    network = network_from_dict(data)
    log.info("Loaded snapshot %s", snapshot_path)
    return network
