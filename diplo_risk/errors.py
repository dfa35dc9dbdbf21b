"""
Error taxonomy for the diplomatic risk pipeline.

  AcquisitionFailure       — network, credential, or payload parse problem in
                             an ingestion client.  Never escapes the
                             orchestrator: it is replaced by a fallback value.
  PresentationUnavailable  — a presentation sink cannot draw the risk chart.
                             The run degrades to "no chart" and continues.
  ConfigurationInvalid     — a settings write was rejected (e.g. unknown
                             region).  The previously stored value is kept.
"""

from __future__ import annotations

from typing import Optional


class DiploRiskError(Exception):
    """Base class for all errors raised by this package."""


class AcquisitionFailure(DiploRiskError):
    """An external data source could not deliver a usable payload.

    Attributes:
        source:      Which source failed ("news", "economy", "weather").
        country_key: Country the call was made for.
    """

    def __init__(
        self,
        message: str,
        source: str,
        country_key: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.country_key = country_key


class PresentationUnavailable(DiploRiskError):
    """The risk chart cannot be rendered by the current sink."""


class ConfigurationInvalid(DiploRiskError):
    """A configuration or settings value was rejected.

    Attributes:
        key:   Settings key that was being written.
        value: The rejected value.
    """

    def __init__(self, message: str, key: str, value: object = None) -> None:
        super().__init__(message)
        self.key = key
        self.value = value
