import logging
from collections.abc import Iterable

from gmoney.models import RawMessage, ServiceDefinition

logger = logging.getLogger(__name__)


class ServiceMatcher:
    """Maps a message to the catalog service that sent it.

    Sender domains are checked for every service before any keyword is
    considered. Within a pass services are visited in catalog order, so when
    two services could claim the same message the one declared first wins.
    """

    def __init__(self, services: Iterable[ServiceDefinition]):
        self._services = tuple(services)

    def match(self, message: RawMessage) -> ServiceDefinition | None:
        text = f"{message.body or ''} {message.subject or ''}"
        return self.match_sender(message.sender) or self.match_text(text)

    def match_sender(self, sender: str) -> ServiceDefinition | None:
        sender = (sender or "").lower()
        for service in self._services:
            for domain in service.email_domains:
                if domain and domain.lower() in sender:
                    logger.debug("[ServiceMatcher] %s matched by domain %s", service.id, domain)
                    return service
        return None

    def match_text(self, text: str) -> ServiceDefinition | None:
        text = (text or "").lower()
        for service in self._services:
            for keyword in service.keywords:
                if keyword and keyword.lower() in text:
                    logger.debug("[ServiceMatcher] %s matched by keyword %r", service.id, keyword)
                    return service
        return None
