from __future__ import annotations


class PatentChatError(Exception):
    pass


class PatentNotFoundError(PatentChatError):
    def __init__(self, patent_id: str) -> None:
        super().__init__(f"Patent {patent_id} not found")
        self.patent_id = patent_id


class QuestionValidationError(PatentChatError, ValueError):
    pass


class ConfigurationError(PatentChatError):
    pass


class GenerationError(PatentChatError):
    def __init__(self, message: str, model: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.model = model
        self.status_code = status_code


class AuthenticationError(GenerationError):
    pass


class ModelUnavailableError(GenerationError):
    pass


class TransientGenerationError(GenerationError):
    pass
