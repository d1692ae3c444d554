import logging
import re
import warnings
from collections.abc import Callable
from datetime import UTC, date, datetime

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

logger = logging.getLogger(__name__)

# Plain-text bodies are routinely passed through the HTML cleaner.
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

_MONTH = (
    r"(jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)

_MONTHS = {
    name: number
    for number, name in enumerate(
        ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"), start=1
    )
}

_ISO_RE = re.compile(r"\b(\d{4})-(\d{2})-(\d{2})\b", re.IGNORECASE)
_US_RE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b", re.IGNORECASE)
_MONTH_DAY_YEAR_RE = re.compile(rf"\b{_MONTH}\s+(\d{{1,2}}),?\s+(\d{{4}})\b", re.IGNORECASE)
_DAY_MONTH_YEAR_RE = re.compile(rf"\b(\d{{1,2}})\s+{_MONTH}\s+(\d{{4}})\b", re.IGNORECASE)
_MONTH_DAY_RE = re.compile(rf"\b{_MONTH}\s+(\d{{1,2}})\b", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")


def clean_html(text: str) -> str:
    """Strip tags, decode entities and collapse whitespace."""
    if not text:
        return ""
    plain = BeautifulSoup(text, "html.parser").get_text(separator=" ")
    return _WHITESPACE_RE.sub(" ", plain).strip()


def _month_number(name: str) -> int:
    return _MONTHS[name[:3].lower()]


def _build(year: str | int, month: str | int, day: str | int) -> datetime | None:
    try:
        return datetime(int(year), int(month), int(day), tzinfo=UTC)
    except ValueError:
        return None


# (name, pattern, groups -> (year, month, day)), tried in this order.
_FULL_DATE_FAMILIES: tuple[tuple[str, re.Pattern, Callable[[tuple], tuple]], ...] = (
    ("iso", _ISO_RE, lambda g: (g[0], g[1], g[2])),
    ("us", _US_RE, lambda g: (g[2], g[0], g[1])),
    ("month-day-year", _MONTH_DAY_YEAR_RE, lambda g: (g[2], _month_number(g[0]), g[1])),
    ("day-month-year", _DAY_MONTH_YEAR_RE, lambda g: (g[2], _month_number(g[1]), g[0])),
)


class DateRecoverer:
    """Guesses the transaction date written inside a receipt.

    Each pattern family is scanned over the cleaned text and the *last*
    occurrence is used, since header dates tend to precede the actual
    transaction date. ``today`` supplies the year for dates written without
    one.
    """

    def __init__(self, today: Callable[[], date] | None = None):
        self._today = today or (lambda: datetime.now(UTC).date())

    def recover(self, body: str, subject: str = "") -> datetime | None:
        text = f"{clean_html(body)} {subject or ''}".lower()

        for name, pattern, to_ymd in _FULL_DATE_FAMILIES:
            matches = pattern.findall(text)
            if not matches:
                continue
            found = _build(*to_ymd(matches[-1]))
            if found:
                logger.debug("[DateRecoverer] %s date %s", name, found.date())
                return found

        matches = _MONTH_DAY_RE.findall(text)
        if matches:
            month, day = matches[-1]
            found = _build(self._today().year, _month_number(month), day)
            if found:
                logger.debug("[DateRecoverer] month-day date %s (year assumed)", found.date())
                return found

        return None
