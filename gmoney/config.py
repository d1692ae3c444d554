from pydantic_settings import BaseSettings


class MoneyParserSettings(BaseSettings):
    model_config = {"env_prefix": "GMONEY_"}

    catalog_path: str = "tracker-mails.json"
    max_amount: float = 1_000_000
    default_currency: str = "USD"
    default_symbol: str = "$"
    log_level: str = "INFO"


def get_settings() -> MoneyParserSettings:
    return MoneyParserSettings()


class _LazySettings:
    _instance: MoneyParserSettings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _LazySettings()
