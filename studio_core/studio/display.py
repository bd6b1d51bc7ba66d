from typing import List

from pydantic import BaseModel

from studio_core.intelligence.models import AnalysisResult

ANALYSIS_TITLE = "성공 유전자(DNA) 분석 결과"


class LabeledBlock(BaseModel):
    label: str
    text: str


class ChipGroup(BaseModel):
    label: str
    chips: List[str]


class QuoteBlock(BaseModel):
    label: str
    text: str


class AnalysisView(BaseModel):
    title: str
    blocks: List[LabeledBlock]
    chip_groups: List[ChipGroup]
    quote: QuoteBlock


def render_analysis(analysis: AnalysisResult) -> AnalysisView:
    return AnalysisView(
        title=ANALYSIS_TITLE,
        blocks=[
            LabeledBlock(label="후킹(Hook) 전략", text=analysis.hook_strategy),
            LabeledBlock(label="스토리 구조", text=analysis.structure_type),
            LabeledBlock(label="편집/진행 호흡", text=analysis.pacing),
            LabeledBlock(label="구독/좋아요 유도 (CTA)", text=analysis.call_to_action_type),
        ],
        chip_groups=[
            ChipGroup(label="감정 트리거", chips=list(analysis.emotional_triggers)),
            ChipGroup(label="이탈 방지 기술 (Retention)", chips=list(analysis.retention_techniques)),
        ],
        quote=QuoteBlock(label="3줄 요약", text=analysis.summary),
    )


def render_markdown(view: AnalysisView) -> str:
    lines = [f"## {view.title}", ""]
    for block in view.blocks:
        lines += [f"### {block.label}", block.text, ""]
    for group in view.chip_groups:
        lines += [f"### {group.label}", " ".join(f"`{chip}`" for chip in group.chips), ""]
    lines += [f"### {view.quote.label}", f'> "{view.quote.text}"']
    return "\n".join(lines)
