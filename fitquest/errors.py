"""
Service-level exceptions. The API layer maps these onto HTTP envelopes.
"""


class QuestGenerationError(Exception):
    """The provider did not yield a usable quest."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderUnavailableError(QuestGenerationError):
    """No provider client was configured at startup."""
