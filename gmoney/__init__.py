from gmoney.amounts import AmountParser
from gmoney.catalog import ServiceCatalog, load_catalog
from gmoney.config import MoneyParserSettings, settings
from gmoney.currency import CURRENCY_RULES, CurrencyRule
from gmoney.dates import DateRecoverer, clean_html
from gmoney.exceptions import CatalogError, MessageSourceError, MoneyParserError
from gmoney.extractor import TransactionExtractor
from gmoney.matcher import ServiceMatcher
from gmoney.messages import load_messages, parse_gmail_message
from gmoney.models import AmountMatch, RawMessage, ServiceDefinition, Transaction
from gmoney.summary import ExpenseSummary, filter_transactions, summarize

__version__ = "1.0.0"

__all__ = [
    "AmountParser",
    "AmountMatch",
    "CURRENCY_RULES",
    "CurrencyRule",
    "DateRecoverer",
    "clean_html",
    "ServiceMatcher",
    "TransactionExtractor",
    "ServiceCatalog",
    "load_catalog",
    "load_messages",
    "parse_gmail_message",
    "MoneyParserSettings",
    "settings",
    "RawMessage",
    "ServiceDefinition",
    "Transaction",
    "ExpenseSummary",
    "filter_transactions",
    "summarize",
    "MoneyParserError",
    "CatalogError",
    "MessageSourceError",
]
