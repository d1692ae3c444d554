import json
from datetime import UTC, datetime

import pytest

from gmoney.catalog import ServiceCatalog
from gmoney.models import RawMessage, ServiceDefinition


@pytest.fixture
def catalog():
    return ServiceCatalog(
        [
            ServiceDefinition(
                id="uber", name="Uber", category="Transport", email_domains=["uber.com"], keywords=["trip"]
            ),
            ServiceDefinition(
                id="netflix", name="Netflix", category="Entertainment", email_domains=["netflix.com"],
                keywords=["netflix"],
            ),
            ServiceDefinition(
                id="amazon", name="Amazon", category="Shopping", email_domains=["amazon.com"],
                keywords=["order confirmation"],
            ),
        ]
    )


@pytest.fixture
def make_message():
    def _make(
        id="msg_1",
        sender="billing@uber.com",
        subject="Your Friday trip",
        body="Total $18.32 USD",
        received_at=datetime(2024, 3, 1, 10, 0, tzinfo=UTC),
    ):
        return RawMessage(id=id, sender=sender, subject=subject, body=body, received_at=received_at)

    return _make


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "tracker-mails.json"
    path.write_text(
        json.dumps(
            {
                "services": [
                    {
                        "id": "uber",
                        "name": "Uber",
                        "category": "Transport",
                        "emailDomains": ["uber.com"],
                        "transactionTypes": ["trip"],
                        "keywords": ["trip"],
                        "pricePattern": {"currency": "USD", "fields": ["Total"]},
                    },
                    {
                        "id": "didi",
                        "name": "DiDi",
                        "category": "Transport",
                        "emailDomains": ["didiglobal.com"],
                        "keywords": ["didi"],
                    },
                ]
            }
        )
    )
    return path


@pytest.fixture
def sample_raw_message():
    return {
        "id": "msg_123",
        "threadId": "thread_456",
        "labelIds": ["INBOX", "UNREAD"],
        "snippet": "Test email snippet",
        "historyId": "12345",
        "internalDate": "1700000000000",
        "sizeEstimate": 1024,
        "payload": {
            "mimeType": "text/plain",
            "headers": [
                {"name": "From", "value": "Uber Receipts <noreply@uber.com>"},
                {"name": "To", "value": "recipient@example.com"},
                {"name": "Subject", "value": "Your Tuesday trip"},
                {"name": "Date", "value": "Tue, 14 Nov 2023 12:00:00 +0000"},
            ],
            "body": {
                "data": "VG90YWwgJDI1LjAwIFVTRA==",  # "Total $25.00 USD"
            },
            "parts": [],
        },
    }
