"""
Exceptions raised by the Apriori miner.
"""


class AprioriMinerError(Exception):
    """Base class for all mining errors."""


class InsufficientDataError(AprioriMinerError, ValueError):
    """The transaction corpus is empty, so supports cannot be computed."""


class InvalidConfigurationError(AprioriMinerError, ValueError):
    """A mining threshold lies outside (0, 1]."""


class MiningInvariantError(AprioriMinerError, RuntimeError):
    """An internal invariant of the algorithm was violated (e.g. a zero support denominator)."""
