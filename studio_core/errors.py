"""Typed failures raised by the studio. Messages are user-facing (Korean)."""

TRANSCRIPT_TOO_SHORT = "대본이 너무 짧습니다. {min_chars}자 이상 입력해주세요."
ANALYSIS_FAILED = "대본 분석에 실패했습니다. 다시 시도해주세요."
GENERATION_FAILED = "새로운 대본을 생성하는 중 오류가 발생했습니다."

# Fallbacks for failures that did not come through the adapter
ANALYSIS_UNEXPECTED = "분석 중 문제가 발생했습니다."
GENERATION_UNEXPECTED = "대본 생성 중 문제가 발생했습니다."


class StudioError(Exception):
    """Base class. ``str(error)`` is safe to show to the user."""


class ValidationError(StudioError):
    """Input rejected before any network call."""


class AnalysisError(StudioError):
    def __init__(self, message: str = ANALYSIS_FAILED):
        super().__init__(message)


class GenerationError(StudioError):
    def __init__(self, message: str = GENERATION_FAILED):
        super().__init__(message)
