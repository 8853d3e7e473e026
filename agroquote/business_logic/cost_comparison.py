# agroquote/business_logic/cost_comparison.py
"""
Cost normalization and ranking of quotes for a required quantity.

A quote prices a package; its unit cost is the price of one standard unit
of the product:

    unit_cost  = price / (packaging_size * conversion_factor)
    total_cost = unit_cost * required_quantity

The winner for a prescription is the quote with the lowest total cost.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from .entities.quote_entity import QuoteEntity
from .entities.store_entity import StoreEntity
from ..constants import RankLabel

import logging
logger = logging.getLogger(__name__)


class InvalidQuoteError(ValueError):
    """Raised when a quote cannot be normalized (zero packaging size or conversion factor)."""

    def __init__(self, quote: QuoteEntity, reason: str):
        super().__init__(f"Quote {quote.id}: {reason}")
        self.quote = quote
        self.reason = reason


@dataclass(frozen=True)
class RankedQuote:
    quote: QuoteEntity
    total_cost: Decimal
    rank: int = 1

    @property
    def store(self) -> Optional[StoreEntity]:
        return self.quote.store

    @property
    def label(self) -> RankLabel:
        return RankLabel.WINNER if self.rank == 1 else RankLabel.LOSER

    @property
    def is_winner(self) -> bool:
        return self.rank == 1


# --- Unit compatibility policies ---

class UnitPolicy:
    """Decides whether a required unit can be priced against a product's standard unit."""

    def is_compatible(self, required_unit: str, standard_unit: str) -> bool:
        raise NotImplementedError


class ExactUnitPolicy(UnitPolicy):
    def is_compatible(self, required_unit: str, standard_unit: str) -> bool:
        return required_unit == standard_unit


class CaseInsensitiveUnitPolicy(UnitPolicy):
    """Treats "kg", " KG" and "Kg" as the same unit. Still no physical conversion."""

    def is_compatible(self, required_unit: str, standard_unit: str) -> bool:
        return (required_unit or "").strip().casefold() == (standard_unit or "").strip().casefold()


# --- Normalizer ---

def _as_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def check_quote(quote: QuoteEntity) -> None:
    """Raises InvalidQuoteError if the quote's denominator would be zero or negative."""
    if quote.packaging_size is None or quote.packaging_size <= 0:
        raise InvalidQuoteError(quote, "tamanho da embalagem deve ser maior que zero")
    if quote.conversion_factor is None or quote.conversion_factor <= 0:
        raise InvalidQuoteError(quote, "fator de conversão deve ser maior que zero")


def unit_cost(quote: QuoteEntity) -> Decimal:
    check_quote(quote)
    return _as_decimal(quote.price) / (_as_decimal(quote.packaging_size) * _as_decimal(quote.conversion_factor))


def total_cost(quote: QuoteEntity, required_quantity: Decimal) -> Decimal:
    return unit_cost(quote) * _as_decimal(required_quantity)


def split_valid_quotes(quotes: Iterable[QuoteEntity]) -> Tuple[List[QuoteEntity], List[InvalidQuoteError]]:
    """Separates priceable quotes from degenerate ones, keeping input order."""
    valid: List[QuoteEntity] = []
    rejected: List[InvalidQuoteError] = []
    for quote in quotes:
        try:
            check_quote(quote)
        except InvalidQuoteError as e:
            logger.warning(f"Ignoring quote {quote.id}: {e.reason}")
            rejected.append(e)
            continue
        valid.append(quote)
    return valid, rejected


# --- Selector and ranking ---

def select_winner(quotes: Sequence[QuoteEntity], required_quantity: Decimal) -> Optional[RankedQuote]:
    """
    Lowest total cost wins. On equal costs the first quote in input order
    is kept (strict comparison). Returns None for an empty list.
    """
    best: Optional[QuoteEntity] = None
    best_cost: Optional[Decimal] = None
    for quote in quotes:
        cost = total_cost(quote, required_quantity)
        if best_cost is None or cost < best_cost:
            best, best_cost = quote, cost
    if best is None:
        return None
    return RankedQuote(quote=best, total_cost=best_cost, rank=1)


def rank_quotes(quotes: Sequence[QuoteEntity], required_quantity: Decimal) -> List[RankedQuote]:
    """Ascending by total cost; equal costs keep their input order."""
    costed = [(quote, total_cost(quote, required_quantity)) for quote in quotes]
    ordered = sorted(costed, key=lambda item: item[1])
    return [RankedQuote(quote=quote, total_cost=cost, rank=position)
            for position, (quote, cost) in enumerate(ordered, start=1)]
