"""Custom exception hierarchy for roiPicker.

The coordinate engine never raises for pointer or geometry input; these errors
belong to the collaborators around it (image loading, clipboard, settings and
the command line).
"""

from __future__ import annotations


class RoiPickerError(Exception):
    """Base class for all custom errors raised by roiPicker."""


# --- 3-layer hierarchy ---

class DomainError(RoiPickerError):
    """Base class for domain-level errors."""


class InfrastructureError(RoiPickerError):
    """Base class for infrastructure-level errors."""


class ApplicationError(RoiPickerError):
    """Base class for application-level errors."""


# --- Domain errors ---

class InvalidGeometryError(DomainError):
    """Raised when a ``WIDTHxHEIGHT`` size or ``X,Y`` point cannot be parsed."""


# --- Infrastructure errors ---

class ImageLoadError(InfrastructureError):
    """Raised when an image file cannot be read or decoded."""


class UnsupportedImageError(ImageLoadError):
    """Raised when the file extension is not one of the supported formats."""


class ClipboardUnavailableError(InfrastructureError):
    """Raised when the system clipboard cannot be reached."""


# --- Application errors ---

class SelectionRejectedError(ApplicationError):
    """Raised when a scripted drag cannot start because its anchor misses the image."""


# --- Settings errors ---

class SettingsError(RoiPickerError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
