"""
Error Types
===========
Exceptions raised by the FreshTag services.

All errors are local and recoverable: the caller decides whether to skip
the offending product or statistic, or to display a placeholder.
"""

from typing import Any, List, Optional


class FreshTagError(Exception):
    """Base class for all FreshTag errors."""


class InvalidDateRange(FreshTagError):
    """
    Raised when a product's expiry is not strictly after its manufacturing date.

    Attributes
    ----------
    product_id : Any
        Identifier of the malformed product, if known
    """

    def __init__(self, message: str, product_id: Optional[Any] = None):
        super().__init__(message)
        self.product_id = product_id


class UndefinedStatistic(FreshTagError):
    """
    Raised when a summary statistic would divide by an empty denominator.

    Attributes
    ----------
    statistic : str
        Name of the statistic that is undefined
    """

    def __init__(self, statistic: str, reason: str):
        super().__init__(f"{statistic} is undefined: {reason}")
        self.statistic = statistic
        self.reason = reason


class CatalogLoadError(FreshTagError):
    """
    Raised when a catalog file cannot be turned into products.

    Attributes
    ----------
    problems : List[str]
        Every issue found, so the whole file can be fixed in one pass
    """

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = list(problems or [])
        if self.problems:
            message = f"{message}: " + "; ".join(self.problems)
        super().__init__(message)
