from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class PricePattern(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    currency: str = ""
    field_names: tuple[str, ...] = Field(default=(), alias="fields")


class ServiceDefinition(BaseModel):
    """One catalog entry: how to recognise mail from a merchant.

    ``transaction_types`` and ``price_pattern`` are carried for callers but
    are not consulted by the matcher.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str = ""
    category: str = "Other"
    email_domains: tuple[str, ...] = Field(default=(), alias="emailDomains")
    keywords: tuple[str, ...] = ()
    transaction_types: tuple[str, ...] = Field(default=(), alias="transactionTypes")
    price_pattern: PricePattern | None = Field(default=None, alias="pricePattern")


@dataclass(frozen=True)
class RawMessage:
    id: str
    sender: str
    subject: str
    body: str
    received_at: datetime


@dataclass(frozen=True)
class AmountMatch:
    amount: Decimal
    currency: str
    symbol: str
    raw: str

    @property
    def found(self) -> bool:
        return self.amount > 0


@dataclass(frozen=True)
class Transaction:
    id: str
    service_id: str
    service_name: str
    category: str
    amount: Decimal
    currency: str
    currency_symbol: str
    date: datetime
    description: str
    email: str
    subject: str
    processed_at: datetime
    raw_amount: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "service_id": self.service_id,
            "service_name": self.service_name,
            "category": self.category,
            "amount": float(self.amount),
            "currency": self.currency,
            "currency_symbol": self.currency_symbol,
            "date": self.date.isoformat(),
            "description": self.description,
            "email": self.email,
            "subject": self.subject,
            "processed_at": self.processed_at.isoformat(),
            "raw_amount": self.raw_amount,
        }
