# arbcycle/graph/network.py
"""
Token graph model

-----------------------------
Purpose:
    - Hold tokens (vertices) and directed, fee-adjusted rate edges
    - Precompute log-space weights (-ln rate) for Bellman-Ford
    - Keep every parallel edge (pools / fee tiers) in an adjacency index
"""

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from arbcycle.errors import InvalidEdgeError

# Logger setup
log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectedEdge:
    """
    One directional exchange opportunity ``from_token -> to_token``

    Attributes
    ----------
    from_token : str
        Token sold
    to_token : str
        Token bought
    rate : float
        Net units of ``to_token`` per one ``from_token`` (fees already applied)
    pool_id : Optional[str]
        Pool / fee tier the rate comes from
    weight : float
        ``-ln(rate)``, derived at construction
    """

    from_token: str
    to_token: str
    rate: float
    pool_id: Optional[str] = None
    weight: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for token in (self.from_token, self.to_token):
            if not isinstance(token, str):
                raise InvalidEdgeError(f"Token identifier must be a string, got {token!r}")
        if not self.from_token or not self.to_token:
            raise InvalidEdgeError(f"Edge with empty token: {self.from_token!r} -> {self.to_token!r}")
        if self.from_token == self.to_token:
            raise InvalidEdgeError(f"Self-loop edge: {self.from_token}")
        if isinstance(self.rate, bool):
            raise InvalidEdgeError(
                f"Boolean rate {self.rate!r} on {self.from_token} -> {self.to_token}"
            )
        try:
            rate = float(self.rate)
        except (TypeError, ValueError):
            raise InvalidEdgeError(
                f"Non-numeric rate {self.rate!r} on {self.from_token} -> {self.to_token}"
            ) from None
        if not math.isfinite(rate) or rate <= 0:
            raise InvalidEdgeError(
                f"Rate must be positive and finite, got {self.rate!r} on "
                f"{self.from_token} -> {self.to_token}"
            )
        object.__setattr__(self, "rate", rate)
        object.__setattr__(self, "weight", float(-np.log(rate)))


class Network:
    """
    Immutable directed rate graph

    Tokens are stored once in a stable-indexed tuple; the relaxation tables
    are keyed by that integer index rather than by the token string.

    Attributes
    ----------
    tokens : Tuple[str, ...]
        Tokens in declaration order
    edges : Tuple[DirectedEdge, ...]
        Edges in insertion order (also the relaxation order)
    adjacency : Mapping[str, Tuple[DirectedEdge, ...]]
        Token -> edges leaving it, parallel edges included
    indexed_edges : Tuple[Tuple[int, int, float], ...]
        ``(u_idx, v_idx, weight)`` triples aligned with ``edges``
    """

    def __init__(self, tokens: Iterable[str], edges: Iterable[DirectedEdge]) -> None:
        token_list = list(tokens)
        token_to_idx: Dict[str, int] = {}
        for token in token_list:
            if not isinstance(token, str):
                raise InvalidEdgeError(f"Token identifier must be a string, got {token!r}")
            if not token:
                raise InvalidEdgeError("Empty token identifier")
            if token in token_to_idx:
                raise InvalidEdgeError(f"Duplicate token declaration: {token}")
            token_to_idx[token] = len(token_to_idx)

        edge_list: List[DirectedEdge] = []
        adjacency: Dict[str, List[DirectedEdge]] = {t: [] for t in token_list}
        for edge in edges:
            if not isinstance(edge, DirectedEdge):
                raise InvalidEdgeError(f"Not a DirectedEdge: {edge!r}")
            for endpoint in (edge.from_token, edge.to_token):
                if endpoint not in token_to_idx:
                    raise InvalidEdgeError(
                        f"Edge {edge.from_token} -> {edge.to_token} references "
                        f"undeclared token {endpoint}"
                    )
            edge_list.append(edge)
            adjacency[edge.from_token].append(edge)

        self._tokens: Tuple[str, ...] = tuple(token_list)
        self._token_to_idx = token_to_idx
        self._edges: Tuple[DirectedEdge, ...] = tuple(edge_list)
        self._adjacency = MappingProxyType({t: tuple(es) for t, es in adjacency.items()})
        self._indexed_edges: Tuple[Tuple[int, int, float], ...] = tuple(
            (token_to_idx[e.from_token], token_to_idx[e.to_token], e.weight)
            for e in edge_list
        )

        log.info("Network built: %d tokens, %d edges", len(self._tokens), len(self._edges))

    @classmethod
    def from_triples(
        cls,
        tokens: Iterable[str],
        triples: Iterable[Sequence],
    ) -> "Network":
        """
        Build a Network from ``(from, to, rate)`` or ``(from, to, rate, pool_id)`` tuples

        Raises
        ------
        InvalidEdgeError
            On any malformed triple; nothing is dropped silently
        """
        edges = []
        for triple in triples:
            if len(triple) not in (3, 4):
                raise InvalidEdgeError(f"Expected (from, to, rate[, pool_id]), got {triple!r}")
            edges.append(DirectedEdge(*triple))
        return cls(tokens, edges)

    # ------------------------------------------------------------------ views
    @property
    def tokens(self) -> Tuple[str, ...]:
        return self._tokens

    @property
    def edges(self) -> Tuple[DirectedEdge, ...]:
        return self._edges

    @property
    def adjacency(self) -> Mapping[str, Tuple[DirectedEdge, ...]]:
        return self._adjacency

    @property
    def indexed_edges(self) -> Tuple[Tuple[int, int, float], ...]:
        return self._indexed_edges

    def index_of(self, token: str) -> int:
        try:
            return self._token_to_idx[token]
        except KeyError:
            raise InvalidEdgeError(f"Unknown token: {token}") from None

    def edges_between(self, from_token: str, to_token: str) -> Tuple[DirectedEdge, ...]:
        """All parallel edges ``from_token -> to_token`` in insertion order"""
        return tuple(e for e in self._adjacency.get(from_token, ()) if e.to_token == to_token)

    def best_edge(self, from_token: str, to_token: str) -> Optional[DirectedEdge]:
        """Maximum-rate edge ``from_token -> to_token``; earliest inserted wins a tie"""
        best = None
        for edge in self._adjacency.get(from_token, ()):
            if edge.to_token == to_token and (best is None or edge.rate > best.rate):
                best = edge
        return best

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_idx

    def __repr__(self) -> str:
        return f"Network(tokens={len(self._tokens)}, edges={len(self._edges)})"
