from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class LoadingState(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    GENERATING = "generating"
    ERROR = "error"
    SUCCESS = "success"


class AnalysisResult(BaseModel):
    """The Viral DNA extracted from a transcript. Wire names are camelCase."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    hook_strategy: str = Field(
        ...,
        alias="hookStrategy",
        description="초반 10초 동안 시청자를 사로잡은 '후킹' 전략에 대한 분석 (한국어)",
    )
    pacing: str = Field(
        ...,
        description="편집 및 말하기 속도와 호흡에 대한 설명 (예: 빠른 컷 편집, 차분한 설명 등) (한국어)",
    )
    emotional_triggers: List[str] = Field(
        ...,
        alias="emotionalTriggers",
        description="사용된 감정적 트리거 목록 (예: 호기심, 공포, 대리만족, 분노 등) (한국어)",
    )
    structure_type: str = Field(
        ...,
        alias="structureType",
        description="스토리텔링 구조 유형 (예: 영웅의 여정, 순위 매기기, 문제-해결 구조 등) (한국어)",
    )
    retention_techniques: List[str] = Field(
        ...,
        alias="retentionTechniques",
        description="시청 지속 시간을 늘리기 위해 사용된 구체적인 기법들 (예: 열린 결말, 패턴 깨기 등) (한국어)",
    )
    call_to_action_type: str = Field(
        ...,
        alias="callToActionType",
        description="구독이나 좋아요를 유도하는 방식 (한국어)",
    )
    summary: str = Field(..., description="이 영상이 왜 떡상했는지에 대한 2문장 요약 (한국어)")
    # Three by convention; length and uniqueness are not enforced
    suggested_topics: List[str] = Field(
        ...,
        alias="suggestedTopics",
        description="이 영상의 구조와 스타일을 적용했을 때 대박날 만한 새로운 주제 3가지 추천 (한국어)",
    )

    def to_context(self) -> str:
        """Indented JSON block used as the style constraint for a remix."""
        return self.model_dump_json(by_alias=True, indent=2)
