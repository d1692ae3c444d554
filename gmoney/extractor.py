import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from gmoney.amounts import AmountParser
from gmoney.dates import DateRecoverer
from gmoney.matcher import ServiceMatcher
from gmoney.models import RawMessage, ServiceDefinition, Transaction


class TransactionExtractor:
    def __init__(
        self,
        services: Iterable[ServiceDefinition],
        amount_parser: AmountParser | None = None,
        date_recoverer: DateRecoverer | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._matcher = ServiceMatcher(services)
        self._amounts = amount_parser or AmountParser()
        self._dates = date_recoverer or DateRecoverer()
        self._logger = logger or logging.getLogger(__name__)
        self._clock = clock or (lambda: datetime.now(UTC))

    def extract(self, messages: Iterable[RawMessage]) -> list[Transaction]:
        transactions = []
        total = 0
        for message in messages:
            total += 1
            txn = self.extract_one(message)
            if txn is not None:
                transactions.append(txn)
        self._logger.info(
            "[TransactionExtractor] extracted %d transactions from %d messages", len(transactions), total
        )
        return transactions

    def extract_one(self, message: RawMessage) -> Transaction | None:
        service = self._matcher.match(message)
        if service is None:
            self._logger.debug("[TransactionExtractor] %s: no matching service", message.id)
            return None

        amount = self._amounts.parse(message.body)
        if not amount.found:
            self._logger.debug("[TransactionExtractor] %s: %s matched but no amount found", message.id, service.id)
            return None

        txn_date = self._dates.recover(message.body, message.subject) or message.received_at

        return Transaction(
            id=message.id,
            service_id=service.id,
            service_name=service.name,
            category=service.category,
            amount=amount.amount,
            currency=amount.currency,
            currency_symbol=amount.symbol,
            date=txn_date,
            description=message.subject,
            email=message.sender,
            subject=message.subject,
            processed_at=self._clock(),
            raw_amount=amount.raw,
        )
