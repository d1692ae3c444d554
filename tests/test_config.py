from gmoney.amounts import AmountParser
from gmoney.config import MoneyParserSettings


def test_defaults():
    s = MoneyParserSettings()
    assert s.catalog_path == "tracker-mails.json"
    assert s.max_amount == 1_000_000
    assert (s.default_currency, s.default_symbol) == ("USD", "$")


def test_env_override(monkeypatch):
    monkeypatch.setenv("GMONEY_MAX_AMOUNT", "500")
    monkeypatch.setenv("GMONEY_CATALOG_PATH", "/etc/gmoney/services.json")
    s = MoneyParserSettings()
    assert s.max_amount == 500
    assert s.catalog_path == "/etc/gmoney/services.json"


def test_parser_arguments_override_settings():
    parser = AmountParser(max_amount=50, default_currency="MXN", default_symbol="$")
    result = parser.parse("Total: 42.50")
    assert result.currency == "MXN"
    assert not parser.parse("Total: 60.00").found
