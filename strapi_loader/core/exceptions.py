"""Exception hierarchy for the loader, the schema mapper and the API."""

from typing import Any, Dict, Optional


class LoaderError(Exception):
    """
    Base exception for the application.

    Carries an HTTP status code and a machine-readable error code so the API
    layer can render it without knowing the concrete subclass.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(LoaderError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=500, error_code="CONFIGURATION_ERROR", details=details)


class SchemaMappingError(LoaderError):
    """A CMS schema could not be turned into a validator."""

    def __init__(self, message: str, error_code: str = "SCHEMA_MAPPING_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=502, error_code=error_code, details=details)


class UnsupportedFieldTypeError(SchemaMappingError):
    def __init__(self, field_type: str):
        self.field_type = field_type
        super().__init__(
            f"Unsupported type: {field_type}",
            error_code="UNSUPPORTED_FIELD_TYPE",
            details={"type": field_type},
        )


class InvalidFieldError(SchemaMappingError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f"Invalid field value for key: {key}",
            error_code="INVALID_FIELD",
            details={"key": key},
        )


class EntryValidationError(LoaderError):
    """A fetched record does not match the collection schema."""

    def __init__(self, collection: str, entry_id: str, errors: list):
        self.collection = collection
        self.entry_id = entry_id
        super().__init__(
            f"Entry '{entry_id}' in collection '{collection}' failed validation",
            status_code=422,
            error_code="ENTRY_VALIDATION_ERROR",
            details={"collection": collection, "entry_id": entry_id, "errors": errors},
        )


class CollectionNotFoundError(LoaderError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Collection '{name}' is not defined",
            status_code=404,
            error_code="COLLECTION_NOT_FOUND",
            details={"collection": name},
        )
