# arbcycle/errors.py
"""
Error types raised by the arbitrage engine

-----------------------------
    * InvalidEdgeError      - bad token/edge input, raised while building a Network
    * ReconstructionAnomaly - predecessor walk that never closes; absorbed by the finder
"""


class InvalidEdgeError(ValueError):
    """Malformed edge or token declaration (non-positive rate, self-loop, unknown token)"""


class ReconstructionAnomaly(Exception):
    """A certifying edge whose predecessor chain does not close into a cycle"""
