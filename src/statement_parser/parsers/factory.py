"""Strategy registry for routing statement text to an issuer parser.

The registry is an immutable, ordered collection of strategies.
Registration order is the tie-break when more than one strategy's
detection rule matches the same text: the earlier one wins.
"""

import logging
from functools import lru_cache

from statement_parser.parsers.generic import GenericParser
from statement_parser.parsers.refinements import (
    AmexParser,
    AxisParser,
    HDFCParser,
    ICICIParser,
    SBIParser,
)

logger = logging.getLogger(__name__)

UNKNOWN_ISSUER = "Unknown"


class StrategyRegistry:
    """Ordered, read-only collection of issuer strategies.

    Example:
        >>> registry = build_default_registry()
        >>> parser = registry.select(text)
        >>> if parser is None:
        ...     print("No issuer detected")
        >>> extended = registry.register(MyBankParser())
    """

    def __init__(self, strategies: tuple[GenericParser, ...] = ()):
        """Initialize the registry.

        Args:
            strategies: Strategies in priority order
        """
        for strategy in strategies:
            if not isinstance(strategy, GenericParser):
                raise ValueError(f"Strategy must inherit from GenericParser, got {strategy!r}")
        self._strategies = tuple(strategies)

    @property
    def strategies(self) -> tuple[GenericParser, ...]:
        return self._strategies

    def __len__(self) -> int:
        return len(self._strategies)

    def register(self, strategy: GenericParser) -> "StrategyRegistry":
        """Return a new registry with ``strategy`` appended (lowest priority).

        The current registry is left unchanged.
        """
        return StrategyRegistry(self._strategies + (strategy,))

    def select(self, text: str | None) -> GenericParser | None:
        """Return the first strategy whose detection rule matches, or None."""
        for strategy in self._strategies:
            if strategy.detect(text):
                logger.info("Detected issuer: %s", strategy.name)
                return strategy

        logger.info("No issuer detected")
        return None

    def detect_issuer(self, text: str | None) -> str:
        """Return the detected issuer name, or "Unknown"."""
        strategy = self.select(text)
        return strategy.name if strategy else UNKNOWN_ISSUER

    def supported_issuers(self) -> list[str]:
        """Return issuer names in priority order."""
        return [strategy.name for strategy in self._strategies]


def build_default_registry() -> StrategyRegistry:
    """Build a registry with the built-in issuers in priority order."""
    return StrategyRegistry(
        (
            HDFCParser(),
            ICICIParser(),
            SBIParser(),
            AxisParser(),
            AmexParser(),
        )
    )


@lru_cache
def get_default_registry() -> StrategyRegistry:
    """Get the shared default registry (built once per process)."""
    return build_default_registry()
