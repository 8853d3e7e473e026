# agroquote/business_logic/quote_report_manager.py

import sqlite3
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, TYPE_CHECKING

from .cost_comparison import (
    ExactUnitPolicy, InvalidQuoteError, RankedQuote, UnitPolicy,
    rank_quotes, select_winner, split_valid_quotes,
)
from .entities.prescription_entity import PrescriptionEntity
from ..config import CURRENCY_SYMBOL
from ..constants import DATE_FORMAT, ReportMode

if TYPE_CHECKING:
    from ..data_access.prescriptions_repository import PrescriptionsRepository
    from ..data_access.quotes_repository import QuotesRepository

import logging
logger = logging.getLogger(__name__)


@dataclass
class ProductComparison:
    """Outcome of comparing the quotes of one prescription on one date."""
    prescription: PrescriptionEntity
    ranking: List[RankedQuote] = field(default_factory=list)
    rejected: List[InvalidQuoteError] = field(default_factory=list)
    skip_message: Optional[str] = None

    @property
    def winner(self) -> Optional[RankedQuote]:
        return self.ranking[0] if self.ranking else None


class QuoteReportManager:
    """
    Builds the winners report and the full winners/losers report for a date.

    Every prescription is compared against the quotes of its product on the
    report date. Problems with one prescription (unknown product, unit
    mismatch, no quotes, storage failure) become a line in the report and
    never abort it.
    """

    def __init__(self,
                 prescriptions_repository: 'PrescriptionsRepository',
                 quotes_repository: 'QuotesRepository',
                 unit_policy: Optional[UnitPolicy] = None):
        if prescriptions_repository is None or quotes_repository is None:
            raise ValueError("prescriptions_repository and quotes_repository cannot be None")
        self.prescriptions_repo = prescriptions_repository
        self.quotes_repo = quotes_repository
        self.unit_policy = unit_policy or ExactUnitPolicy()

    # --- Comparison ---

    def compare_prescription(self, prescription: PrescriptionEntity, report_date: date, full: bool) -> ProductComparison:
        comparison = ProductComparison(prescription=prescription)
        date_str = report_date.strftime(DATE_FORMAT)
        product = prescription.product

        if product is None or not product.id:
            logger.warning(f"Prescription {prescription.id} references unknown product ID {prescription.product_id}.")
            comparison.skip_message = f"Produto com ID {prescription.product_id} não encontrado."
            return comparison

        if not self.unit_policy.is_compatible(prescription.required_unit, product.standard_unit):
            logger.info(f"Unit mismatch for '{product.name}': required '{prescription.required_unit}', standard '{product.standard_unit}'.")
            comparison.skip_message = (f"Unidade requerida '{prescription.required_unit}' não combina com "
                                       f"padrão '{product.standard_unit}' para '{product.name}'.")
            return comparison

        try:
            quotes = self.quotes_repo.find_by_product_and_date(product.id, report_date)
        except sqlite3.Error as e:
            logger.error(f"Could not load quotes for product {product.id} on {date_str}: {e}", exc_info=True)
            comparison.skip_message = f"Não foi possível carregar as cotações de '{product.name}' na data {date_str}."
            return comparison

        if not quotes:
            logger.info(f"No quotes for '{product.name}' on {date_str}.")
            comparison.skip_message = f"Nenhuma cotação para '{product.name}' na data {date_str}."
            return comparison

        valid_quotes, comparison.rejected = split_valid_quotes(quotes)
        if not valid_quotes:
            comparison.skip_message = f"Nenhuma cotação válida para '{product.name}' na data {date_str}."
            return comparison

        if full:
            comparison.ranking = rank_quotes(valid_quotes, prescription.required_quantity)
        else:
            winner = select_winner(valid_quotes, prescription.required_quantity)
            comparison.ranking = [winner] if winner else []
        return comparison

    def compare_all(self, report_date: date, full: bool = False) -> List[ProductComparison]:
        """Compares every prescription on the given date, in prescription order."""
        prescriptions = self.prescriptions_repo.get_all_with_products()
        logger.debug(f"Comparing {len(prescriptions)} prescriptions for {report_date}.")
        comparisons = []
        for prescription in prescriptions:
            try:
                comparisons.append(self.compare_prescription(prescription, report_date, full))
            except Exception as e:
                logger.error(f"Error comparing prescription {prescription.id}: {e}", exc_info=True)
                comparisons.append(ProductComparison(
                    prescription=prescription,
                    skip_message=f"Erro ao processar a prescrição #{prescription.id}: {e}"))
        return comparisons

    # --- Reports ---

    def generate_winner_report(self, report_date: date) -> str:
        return self._generate_report(report_date, ReportMode.WINNERS)

    def generate_full_report(self, report_date: date) -> str:
        return self._generate_report(report_date, ReportMode.FULL)

    def _generate_report(self, report_date: date, mode: ReportMode) -> str:
        date_str = report_date.strftime(DATE_FORMAT)
        logger.info(f"Generating '{mode.name}' quote report for {date_str}...")
        header = f"{mode.value} para {date_str}:"

        try:
            comparisons = self.compare_all(report_date, full=(mode == ReportMode.FULL))
        except Exception as e:
            logger.error(f"Could not load prescriptions for report on {date_str}: {e}", exc_info=True)
            return f"{header}\n\nNão foi possível carregar as prescrições.\n"

        if not comparisons:
            return f"{header}\n\nNenhuma prescrição cadastrada.\n"

        sections = [self._format_section(c, mode) for c in comparisons]
        logger.info(f"Quote report for {date_str} generated with {len(sections)} sections.")
        return header + "\n\n" + "\n\n".join(sections) + "\n"

    def _format_section(self, comparison: ProductComparison, mode: ReportMode) -> str:
        if comparison.skip_message:
            lines = [comparison.skip_message]
        else:
            prescription = comparison.prescription
            lines = [f"Para '{prescription.product.name}' "
                     f"({prescription.required_quantity:.2f} {prescription.required_unit}):"]
            details_indent = "    " if mode == ReportMode.FULL else "  "
            for ranked in comparison.ranking:
                lines.extend(self._format_entry(ranked, details_indent))

        for rejected in comparison.rejected:
            store = rejected.quote.store
            store_name = store.name if store else f"#{rejected.quote.store_id}"
            lines.append(f"  Cotação #{rejected.quote.id} da loja '{store_name}' ignorada: {rejected.reason}.")
        return "\n".join(lines)

    @staticmethod
    def _format_entry(ranked: RankedQuote, details_indent: str) -> List[str]:
        quote = ranked.quote
        store = ranked.store
        store_name = store.name if store else f"#{quote.store_id}"
        store_address = store.address if store else "endereço desconhecido"
        return [
            f"  {ranked.label.value}: Loja '{store_name}' ({store_address}) - "
            f"Custo Total: {CURRENCY_SYMBOL} {ranked.total_cost:.2f}",
            f"{details_indent}Detalhes: Preço {CURRENCY_SYMBOL} {quote.price:.2f} por "
            f"{quote.packaging_size:.2f} {quote.packaging_unit} (Conv: {quote.conversion_factor:.2f}) "
            f"em {quote.quote_date.strftime(DATE_FORMAT)}",
        ]
