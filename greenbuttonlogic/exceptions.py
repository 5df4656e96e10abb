class GBError(Exception): ...


class IngestError(GBError): ...


class OutputError(GBError): ...


class ConfigError(GBError): ...


class ValidationError(GBError): ...


def require(condition: bool, message: str, exc: type[GBError] = GBError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
