import pytest

from studio_core.intelligence.models import AnalysisResult
from studio_core.studio.display import ANALYSIS_TITLE, render_analysis, render_markdown


@pytest.fixture
def sample_analysis():
    return AnalysisResult(
        hook_strategy="첫 3초 충격 질문",
        pacing="빠른 컷 편집",
        emotional_triggers=["호기심", "대리만족"],
        structure_type="순위 매기기",
        retention_techniques=["열린 결말", "패턴 깨기"],
        call_to_action_type="중간 구독 유도",
        summary="강한 후킹과 빠른 호흡이 성공 요인입니다.",
        suggested_topics=["초보자 코딩 입문"],
    )


def test_render_analysis_sections(sample_analysis):
    view = render_analysis(sample_analysis)

    assert view.title == ANALYSIS_TITLE
    blocks = {b.label: b.text for b in view.blocks}
    assert blocks == {
        "후킹(Hook) 전략": "첫 3초 충격 질문",
        "스토리 구조": "순위 매기기",
        "편집/진행 호흡": "빠른 컷 편집",
        "구독/좋아요 유도 (CTA)": "중간 구독 유도",
    }
    chips = {g.label: g.chips for g in view.chip_groups}
    assert chips["감정 트리거"] == ["호기심", "대리만족"]
    assert chips["이탈 방지 기술 (Retention)"] == ["열린 결말", "패턴 깨기"]
    assert view.quote.label == "3줄 요약"
    assert view.quote.text == sample_analysis.summary


def test_render_analysis_empty_sequences(sample_analysis):
    analysis = sample_analysis.model_copy(update={"retention_techniques": []})
    view = render_analysis(analysis)
    assert view.chip_groups[1].chips == []


def test_render_markdown(sample_analysis):
    text = render_markdown(render_analysis(sample_analysis))

    assert text.startswith(f"## {ANALYSIS_TITLE}")
    assert "### 후킹(Hook) 전략\n첫 3초 충격 질문" in text
    assert "`열린 결말` `패턴 깨기`" in text
    assert text.endswith('> "강한 후킹과 빠른 호흡이 성공 요인입니다."')
