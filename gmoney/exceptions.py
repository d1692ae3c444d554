class MoneyParserError(Exception):
    pass


class CatalogError(MoneyParserError):
    pass


class MessageSourceError(MoneyParserError):
    pass
