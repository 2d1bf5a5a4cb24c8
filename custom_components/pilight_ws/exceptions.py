"""Exceptions raised by the pilight websocket integration."""

from __future__ import annotations

from dataclasses import dataclass


class PilightError(Exception):
    """Base exception for pilight integration errors."""


class NotConnectedError(PilightError):
    """Raised when a command is issued without an active connection."""


class InvalidArgumentError(PilightError):
    """Raised when a set-operation receives a malformed value."""


class DeviceNotFoundError(PilightError):
    """Raised when a requested device value has not been observed yet."""


class ConversionError(PilightError):
    """Raised when a dim level or brightness lies outside its domain."""


@dataclass(frozen=True, slots=True)
class ClassificationError:
    """Describe an inbound frame that matched no known message shape.

    Returned by the classifier instead of being raised so that a single
    malformed frame never interrupts the processing of later ones.
    """

    error: Exception
    raw: object = None
    decode_error: bool = False

    def __str__(self) -> str:
        return str(self.error)
