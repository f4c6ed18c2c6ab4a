"""Exceptions raised by the online compiler core."""

from __future__ import annotations


class UnknownLanguage(LookupError):
    """Raised when a service id is not part of the language catalog."""

    def __init__(self, service_id: str) -> None:
        super().__init__(f"Unknown language: {service_id}")
        self.service_id = service_id


class AlreadySubmitting(RuntimeError):
    """Raised when a session is asked to submit while a submission is in flight."""

    pass


class ConfigurationError(ValueError):
    """Raised at startup when the registry or the environment is inconsistent."""

    pass
