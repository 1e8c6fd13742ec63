"""Exception classes for the inventory pricing package.

The pricing engine itself is total and never raises; these errors belong to
the outer surface (input loading).
"""


class InventoryPricingError(Exception):
    """Base class for all errors raised by the inventory pricing package."""


class PricingInputError(InventoryPricingError):
    """Raised when an input document cannot be read as an opportunity record.

    Attributes:
        source: Where the input was read from (a path or ``"-"`` for stdin).
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Cannot read opportunity from {source}: {reason}")
