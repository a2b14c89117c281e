"""Custom exception hierarchy for the research assistant."""


class ResearchAssistantError(Exception):
    """Base exception for all research assistant errors."""


class GenerationError(ResearchAssistantError):
    """Error calling the completion service."""


class UnsupportedProviderError(GenerationError):
    """Requested completion provider is unknown or not implemented."""


class CitationValidationError(ResearchAssistantError):
    """Citation failed validation before persistence."""


class StorageError(ResearchAssistantError):
    """Error reading or writing persisted records."""


class NotFoundError(StorageError):
    """Requested record does not exist."""
