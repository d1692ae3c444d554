import re
from dataclasses import dataclass

# Digits with optional thousands separators and up to two decimals.
NUMBER = r"(?P<amount>\d[\d,]*\.?\d{0,2})"


@dataclass(frozen=True)
class CurrencyRule:
    pattern: re.Pattern
    currency: str
    symbol: str


def _rule(pattern: str, currency: str, symbol: str) -> CurrencyRule:
    return CurrencyRule(re.compile(pattern, re.IGNORECASE), currency, symbol)


# Ordered: the first rule that yields a plausible amount decides the currency.
# A bare "$" is read as USD before any of the "$"-flavoured MXN/CAD markers.
CURRENCY_RULES: tuple[CurrencyRule, ...] = (
    _rule(r"\$\s*" + NUMBER + r"(?:\s*USD)?", "USD", "$"),
    _rule(NUMBER + r"\s*USD", "USD", "$"),
    _rule(r"(?:MXN|M\$|MEX|\$\s*M)\s*" + NUMBER, "MXN", "$"),
    _rule(NUMBER + r"\s*(?:MXN|M\$|MEX)", "MXN", "$"),
    _rule(r"€\s*" + NUMBER, "EUR", "€"),
    _rule(NUMBER + r"\s*(?:EUR|€)", "EUR", "€"),
    _rule(r"£\s*" + NUMBER, "GBP", "£"),
    _rule(NUMBER + r"\s*(?:GBP|£)", "GBP", "£"),
    _rule(r"(?:¥|JPY)\s*" + NUMBER, "JPY", "¥"),
    _rule(NUMBER + r"\s*(?:JPY|¥)", "JPY", "¥"),
    _rule(r"(?:CAD|\$\s*C)\s*" + NUMBER, "CAD", "$"),
    _rule(NUMBER + r"\s*CAD", "CAD", "$"),
)

SUPPORTED_CURRENCIES = tuple(dict.fromkeys(rule.currency for rule in CURRENCY_RULES))


def symbol_for(currency: str, default: str = "$") -> str:
    for rule in CURRENCY_RULES:
        if rule.currency == currency.upper():
            return rule.symbol
    return default
