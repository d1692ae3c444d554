import logging
import re
from collections.abc import Callable, Sequence
from decimal import Decimal, InvalidOperation

from gmoney.config import settings
from gmoney.currency import CURRENCY_RULES, CurrencyRule
from gmoney.models import AmountMatch

logger = logging.getLogger(__name__)

# Currency-agnostic fallbacks, tried in order; each pattern's largest hit wins.
_KEYWORD_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\$\s*([\d,]+\.?\d{0,2})"),
    re.compile(r"USD\s+([\d,]+\.?\d{0,2})"),
    re.compile(r"total\s*:?\s*\$?\s*([\d,]+\.?\d{0,2})", re.IGNORECASE),
    re.compile(r"amount\s*:?\s*\$?\s*([\d,]+\.?\d{0,2})", re.IGNORECASE),
    re.compile(r"charge\s*:?\s*\$?\s*([\d,]+\.?\d{0,2})", re.IGNORECASE),
    re.compile(r"price\s*:?\s*\$?\s*([\d,]+\.?\d{0,2})", re.IGNORECASE),
    re.compile(r"[$£€]\s*([\d,]+\.?\d{0,2})"),
    re.compile(r"([\d,]+\.\d{2})\s*(?:USD|EUR|GBP)"),
)

# 12.34-shaped tokens, commas allowed; receipts list the total after the line items.
_DECIMAL_TOKEN_RE = re.compile(r"(?<![\d.,])\d[\d,]*\.\d{2}(?!\d)")

# Complete numbers: "1,500,000.50" is one token, never its "50" tail.
_INTEGER_TOKEN_RE = re.compile(r"(?<![\d.,])(\d[\d,]*(?:\.\d+)?)")


def parse_number(raw: str) -> Decimal | None:
    """Parse ``1,234.56``-style text, returning None when it is not a number."""
    try:
        value = Decimal(raw.replace(",", ""))
    except (InvalidOperation, AttributeError):
        return None
    return value if value.is_finite() else None


class AmountParser:
    """Finds the transaction amount in free text.

    Strategies run in order and the first one to produce a plausible amount
    wins: the currency-aware rule table, then keyword/symbol anchored
    patterns, then the last ``d.dd`` token, then the largest bare number.
    Anything at or above ``max_amount`` is treated as noise (order ids,
    phone numbers) and ignored by every strategy.
    """

    def __init__(
        self,
        rules: Sequence[CurrencyRule] = CURRENCY_RULES,
        max_amount: float | None = None,
        default_currency: str | None = None,
        default_symbol: str | None = None,
    ):
        self._rules = tuple(rules)
        self._max_amount = Decimal(str(max_amount if max_amount is not None else settings.max_amount))
        self._default_currency = default_currency or settings.default_currency
        self._default_symbol = default_symbol or settings.default_symbol
        self._strategies: tuple[Callable[[str], AmountMatch | None], ...] = (
            self._match_currency_rules,
            self._match_keywords,
            self._match_last_decimal,
            self._match_largest_number,
        )

    def parse(self, text: str) -> AmountMatch:
        if not text:
            return self._nothing()
        for strategy in self._strategies:
            match = strategy(text)
            if match is not None:
                return match
        return self._nothing()

    def is_plausible(self, value: Decimal | None) -> bool:
        return value is not None and 0 < value < self._max_amount

    def _nothing(self) -> AmountMatch:
        return AmountMatch(Decimal(0), self._default_currency, self._default_symbol, "")

    def _largest(self, pattern: re.Pattern, text: str) -> tuple[Decimal, str] | None:
        best: tuple[Decimal, str] | None = None
        for m in pattern.finditer(text):
            value = parse_number(m.group(1))
            if not self.is_plausible(value):
                continue
            if best is None or value > best[0]:
                best = (value, m.group(0).strip())
        return best

    def _match_currency_rules(self, text: str) -> AmountMatch | None:
        for rule in self._rules:
            best = self._largest(rule.pattern, text)
            if best:
                logger.debug("[AmountParser] %s rule matched %r", rule.currency, best[1])
                return AmountMatch(best[0], rule.currency, rule.symbol, best[1])
        return None

    def _match_keywords(self, text: str) -> AmountMatch | None:
        for pattern in _KEYWORD_PATTERNS:
            best = self._largest(pattern, text)
            if best:
                logger.debug("[AmountParser] fallback pattern matched %r", best[1])
                return AmountMatch(best[0], self._default_currency, self._default_symbol, best[1])
        return None

    def _match_last_decimal(self, text: str) -> AmountMatch | None:
        for raw in reversed(_DECIMAL_TOKEN_RE.findall(text)):
            value = parse_number(raw)
            if self.is_plausible(value):
                return AmountMatch(value, self._default_currency, self._default_symbol, raw)
        return None

    def _match_largest_number(self, text: str) -> AmountMatch | None:
        best = self._largest(_INTEGER_TOKEN_RE, text)
        if best:
            return AmountMatch(best[0], self._default_currency, self._default_symbol, best[1])
        return None
