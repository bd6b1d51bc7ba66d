from typing import Any, Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from studio_core.config_manager import StudioConfig
from studio_core.errors import TRANSCRIPT_TOO_SHORT, AnalysisError, GenerationError
from studio_core.intelligence.client import LLMClient
from studio_core.intelligence.models import AnalysisResult
from studio_core.intelligence.prompts import (
    ANALYSIS_PROMPT_TEMPLATE,
    ANALYST_SYSTEM_PROMPT,
    GENERATION_FALLBACK_TEXT,
    REMIX_PROMPT_TEMPLATE,
)


class ViralAnalyst:
    """
    Extracts the Viral DNA of a transcript and remixes it onto a new topic.

    Holds nothing but the injected client handle, so one instance can serve
    every session.
    """

    def __init__(self, client: Optional[LLMClient], studio_config: Optional[StudioConfig] = None):
        self.client = client
        self.cfg = studio_config or StudioConfig()

    def truncate_transcript(self, transcript: str) -> str:
        return transcript[: self.cfg.max_transcript_chars]

    def build_analysis_prompt(self, excerpt: str) -> str:
        """``excerpt`` is embedded as given; pass it through truncate_transcript first."""
        return ANALYSIS_PROMPT_TEMPLATE.format(transcript_text=excerpt)

    def build_remix_prompt(self, analysis: AnalysisResult, new_topic: str) -> str:
        return REMIX_PROMPT_TEMPLATE.format(
            new_topic=new_topic,
            analysis_context=analysis.to_context(),
            structure_type=analysis.structure_type,
            hook_strategy=analysis.hook_strategy,
            pacing=analysis.pacing,
            retention_techniques=", ".join(analysis.retention_techniques),
        )

    def analyze(self, transcript: str) -> AnalysisResult:
        """
        Sends one schema-constrained request and validates the reply.

        Raises:
            AnalysisError: short input, missing client, transport failure,
                empty reply, or a reply that does not match AnalysisResult.
        """
        min_chars = self.cfg.min_transcript_chars
        if not transcript or len(transcript) < min_chars:
            raise AnalysisError(TRANSCRIPT_TOO_SHORT.format(min_chars=min_chars))

        if not self.client:
            logger.error("LLM Client not available. Cannot analyze transcript.")
            raise AnalysisError()

        excerpt = self.truncate_transcript(transcript)
        prompt = self.build_analysis_prompt(excerpt)
        logger.info(f"Analyzing transcript: {len(transcript)} chars ({len(excerpt)} sent)")

        try:
            payload = self.client.complete_structured(prompt, AnalysisResult, system=ANALYST_SYSTEM_PROMPT)
        except Exception as e:
            logger.error(f"Analysis request failed: {e}")
            raise AnalysisError() from e

        result = self._validate(payload)
        logger.success(f"Analysis complete: structure={result.structure_type!r}, {len(result.suggested_topics)} topics")
        return result

    def _validate(self, payload: Any) -> AnalysisResult:
        if payload is None or (isinstance(payload, (str, bytes)) and not payload.strip()):
            logger.error("Analysis response was empty.")
            raise AnalysisError()

        try:
            if isinstance(payload, AnalysisResult):
                return payload
            if isinstance(payload, (str, bytes)):
                return AnalysisResult.model_validate_json(payload)
            return AnalysisResult.model_validate(payload)
        except PydanticValidationError as e:
            logger.error(f"Analysis response did not match the expected shape: {e}")
            raise AnalysisError() from e

    def generate(self, analysis: AnalysisResult, new_topic: str) -> str:
        """Writes a Markdown script for ``new_topic`` in the analyzed style."""
        if not self.client:
            logger.error("LLM Client not available. Cannot generate script.")
            raise GenerationError()

        prompt = self.build_remix_prompt(analysis, new_topic)
        logger.info(f"Generating remixed script for topic: {new_topic}")

        try:
            text = self.client.complete_text(prompt)
        except Exception as e:
            logger.error(f"Generation request failed: {e}")
            raise GenerationError() from e

        if not text:
            logger.warning("Generation response was empty. Using fallback text.")
            return GENERATION_FALLBACK_TEXT
        return text
