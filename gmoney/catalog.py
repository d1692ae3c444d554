import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from pydantic import BaseModel, ValidationError

from gmoney.config import settings
from gmoney.exceptions import CatalogError
from gmoney.models import ServiceDefinition

logger = logging.getLogger(__name__)


class _CatalogDocument(BaseModel):
    services: list[ServiceDefinition]


class ServiceCatalog:
    """Read-only, ordered set of service definitions."""

    def __init__(self, services: Iterable[ServiceDefinition]):
        self._services = tuple(services)
        self._by_id: dict[str, ServiceDefinition] = {}
        for service in self._services:
            if service.id in self._by_id:
                raise CatalogError(f"Duplicate service id: {service.id}")
            self._by_id[service.id] = service

    def __iter__(self) -> Iterator[ServiceDefinition]:
        return iter(self._services)

    def __len__(self) -> int:
        return len(self._services)

    def get(self, service_id: str) -> ServiceDefinition | None:
        return self._by_id.get(service_id)

    def ids(self) -> list[str]:
        return [s.id for s in self._services]

    @classmethod
    def from_dict(cls, data: dict) -> "ServiceCatalog":
        try:
            document = _CatalogDocument.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Invalid service catalog: {e}") from e
        return cls(document.services)


def load_catalog(path: str | Path | None = None) -> ServiceCatalog:
    path = Path(path or settings.catalog_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"Service catalog not found: {path}") from e
    except (OSError, ValueError) as e:
        raise CatalogError(f"Failed to read service catalog {path}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"Service catalog {path} must be a JSON object with a 'services' list")

    catalog = ServiceCatalog.from_dict(data)
    logger.info("[ServiceCatalog] loaded %d services from %s", len(catalog), path)
    return catalog
