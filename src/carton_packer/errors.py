"""Exceptions raised outside the engine; shortfalls are results, not errors."""

from __future__ import annotations


class PackingError(Exception):
    """Base class for carton_packer errors."""


class PackingRequestError(PackingError):
    """The background worker rejected or failed a pack request."""


class WorkerUnavailableError(PackingError):
    """The background worker is not running or did not answer in time."""


class PresetError(PackingError):
    """Invalid preset payload."""


class PresetNotFoundError(PresetError):
    pass


class DuplicatePresetError(PresetError):
    pass
