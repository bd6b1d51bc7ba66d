import threading
from typing import Dict, Optional

from loguru import logger
from pydantic import BaseModel, computed_field

from studio_core.config_manager import StudioConfig
from studio_core.errors import (
    ANALYSIS_UNEXPECTED,
    GENERATION_UNEXPECTED,
    TRANSCRIPT_TOO_SHORT,
    StudioError,
    ValidationError,
)
from studio_core.intelligence.analyst import ViralAnalyst
from studio_core.intelligence.models import AnalysisResult, LoadingState

TOPIC_NOT_AVAILABLE = "선택할 수 있는 추천 주제가 없습니다."


class StudioState(BaseModel):
    transcript: str = ""
    topic: str = ""
    analysis: Optional[AnalysisResult] = None
    generated_script: str = ""
    loading_state: LoadingState = LoadingState.IDLE
    error: Optional[str] = None

    @computed_field
    @property
    def can_analyze(self) -> bool:
        return bool(self.transcript) and self.loading_state != LoadingState.ANALYZING

    @computed_field
    @property
    def can_generate(self) -> bool:
        return (
            self.analysis is not None
            and bool(self.topic.strip())
            and self.loading_state != LoadingState.GENERATING
        )


class StudioController:
    """
    Owns the state behind the four-step form.

    Every request takes an action token. A new analysis supersedes any pending
    analysis or generation, a new generation supersedes a pending generation,
    and replies for superseded tokens are dropped.
    """

    def __init__(self, analyst: ViralAnalyst, studio_config: Optional[StudioConfig] = None):
        self.analyst = analyst
        self.cfg = studio_config or StudioConfig()
        self._state = StudioState()
        self._lock = threading.Lock()
        self._seq = 0
        self._current: Dict[str, int] = {"analysis": 0, "generation": 0}

    @property
    def state(self) -> StudioState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def set_transcript(self, transcript: str) -> None:
        with self._lock:
            self._state.transcript = transcript

    def set_topic(self, topic: str) -> None:
        with self._lock:
            self._state.topic = topic

    def select_topic(self, index: int) -> str:
        """Copies a suggested topic into the topic field. No network call."""
        with self._lock:
            analysis = self._state.analysis
            if analysis is None or not 0 <= index < len(analysis.suggested_topics):
                raise ValidationError(TOPIC_NOT_AVAILABLE)
            topic = analysis.suggested_topics[index]
            self._state.topic = topic
        return topic

    def _issue(self, *kinds: str) -> int:
        self._seq += 1
        for kind in kinds:
            self._current[kind] = self._seq
        return self._seq

    def _is_current(self, kind: str, token: int) -> bool:
        if self._current[kind] != token:
            logger.warning(f"Discarding stale {kind} response (token {token}, current {self._current[kind]})")
            return False
        return True

    def _fail(self, kind: str, token: int, message: str) -> None:
        with self._lock:
            if not self._is_current(kind, token):
                return
            self._state.error = message
            self._state.loading_state = LoadingState.ERROR

    def request_analysis(self, transcript: str) -> Optional[AnalysisResult]:
        """
        Runs the analyze step.

        Raises ValidationError, leaving state untouched, when the transcript is
        blank or shorter than the configured minimum. Adapter failures are
        stored as ``state.error`` instead of raised.
        """
        min_chars = self.cfg.min_transcript_chars
        if not transcript or not transcript.strip() or len(transcript) < min_chars:
            raise ValidationError(TRANSCRIPT_TOO_SHORT.format(min_chars=min_chars))

        with self._lock:
            token = self._issue("analysis", "generation")
            self._state.transcript = transcript
            self._state.loading_state = LoadingState.ANALYZING
            self._state.analysis = None
            self._state.generated_script = ""
            self._state.error = None

        try:
            result = self.analyst.analyze(transcript)
        except StudioError as e:
            logger.error(f"Analysis Error: {e}")
            self._fail("analysis", token, str(e) or ANALYSIS_UNEXPECTED)
            return None
        except Exception as e:
            logger.exception(f"Unexpected analysis failure: {e}")
            self._fail("analysis", token, ANALYSIS_UNEXPECTED)
            return None

        with self._lock:
            if not self._is_current("analysis", token):
                return None
            self._state.analysis = result
            self._state.loading_state = LoadingState.IDLE
        return result

    def request_generation(
        self, analysis: Optional[AnalysisResult] = None, topic: Optional[str] = None
    ) -> Optional[str]:
        """Runs the remix step. A no-op without an analysis or a topic."""
        with self._lock:
            if analysis is None:
                analysis = self._state.analysis
            if topic is None:
                topic = self._state.topic
            if analysis is None or not topic or not topic.strip():
                return None

            token = self._issue("generation")
            self._state.topic = topic
            self._state.loading_state = LoadingState.GENERATING
            self._state.generated_script = ""
            self._state.error = None

        try:
            text = self.analyst.generate(analysis, topic)
        except StudioError as e:
            logger.error(f"Generation Error: {e}")
            self._fail("generation", token, str(e) or GENERATION_UNEXPECTED)
            return None
        except Exception as e:
            logger.exception(f"Unexpected generation failure: {e}")
            self._fail("generation", token, GENERATION_UNEXPECTED)
            return None

        with self._lock:
            if not self._is_current("generation", token):
                return None
            self._state.generated_script = text
            self._state.loading_state = LoadingState.SUCCESS
        return text
