import pytest

from arbcycle.graph.network import Network

FEE = 0.997


@pytest.fixture
def triangle():
    """USDC -> ETH -> DAI -> USDC, product 0.0004 * 2600 * 0.98 = 1.0192"""
    return Network.from_triples(
        ["USDC", "ETH", "DAI"],
        [
            ("USDC", "ETH", 0.0004),
            ("ETH", "DAI", 2600.0),
            ("DAI", "USDC", 0.98),
        ],
    )


@pytest.fixture
def exact_triangle():
    """Rates with an exact binary product of 1.25 in every rotation"""
    return Network.from_triples(
        ["A", "B", "C"],
        [("A", "B", 2.0), ("B", "C", 0.5), ("C", "A", 1.25)],
    )


@pytest.fixture
def consistent_market():
    """Every pair quoted both ways at consistent prices minus a 0.3% fee"""
    prices = {("A", "B"): 2.0, ("B", "C"): 3.0, ("A", "C"): 6.0}
    triples = []
    for (a, b), p in prices.items():
        triples.append((a, b, p * FEE))
        triples.append((b, a, (1 / p) * FEE))
    return Network.from_triples(["A", "B", "C"], triples)


@pytest.fixture
def parallel_pools():
    """Two USDC -> ETH pools; the 5bp one has the better rate"""
    return Network.from_triples(
        ["USDC", "ETH", "DAI"],
        [
            ("USDC", "ETH", 0.0004, "usdc-eth-30bp"),
            ("USDC", "ETH", 0.00041, "usdc-eth-5bp"),
            ("ETH", "DAI", 2600.0, "eth-dai-30bp"),
            ("DAI", "USDC", 0.98, "dai-usdc-1bp"),
        ],
    )


@pytest.fixture
def two_loops():
    """Two disjoint profitable loops and an isolated token"""
    return Network.from_triples(
        ["A", "B", "C", "D", "E", "X"],
        [
            ("A", "B", 2.0),
            ("B", "A", 0.55),
            ("C", "D", 1.5),
            ("D", "E", 1.2),
            ("E", "C", 0.6),
            ("E", "D", 0.8),
        ],
    )
