"""Custom exception types for typed identifier operations."""


class TypedIdError(Exception):
    """Base exception for all typedid operations."""


class ConfigurationError(TypedIdError):
    """Raised when a transform configuration or mapping file is invalid."""


class FieldSettingsError(TypedIdError):
    """Raised when field settings cannot be read or decoded."""


class SourceError(TypedIdError):
    """Raised when a record source cannot be loaded."""
