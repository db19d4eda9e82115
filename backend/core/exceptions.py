"""Custom exceptions for the template ingestion pipeline."""


class IngestionError(Exception):
    """Base exception for fatal ingestion conditions."""

    def __init__(self, message: str, exit_code: int = 1):
        """Initialize exception with message and process exit code.

        Args:
            message: Exception message
            exit_code: Exit status the entry script should terminate with
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(self.message)


class CorpusNotFoundError(IngestionError):
    """Corpus root directory is missing or not a directory."""

    def __init__(self, message: str = "Corpus directory not found"):
        """Initialize CorpusNotFoundError with exit code 2."""
        super().__init__(message, 2)


class NoRecordsFoundError(IngestionError):
    """A full walk of the corpus produced zero buildable records."""

    def __init__(self, message: str = "No valid workflow JSONs found"):
        """Initialize NoRecordsFoundError with exit code 3."""
        super().__init__(message, 3)


class MissingStoreCredentialsError(IngestionError):
    """Templates store connection settings are absent."""

    def __init__(self, message: str = "Missing store credentials"):
        """Initialize MissingStoreCredentialsError with exit code 4."""
        super().__init__(message, 4)


class StoreError(Exception):
    """A templates store operation failed.

    Non-fatal by itself: the loader decides whether a failed delete,
    insert or count aborts anything.
    """

    def __init__(self, message: str, operation: str = "unknown"):
        self.message = message
        self.operation = operation
        super().__init__(self.message)
