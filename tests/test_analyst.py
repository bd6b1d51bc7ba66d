import pytest

from studio_core.config_manager import StudioConfig
from studio_core.errors import AnalysisError, GenerationError
from studio_core.intelligence.analyst import ViralAnalyst
from studio_core.intelligence.client import LLMClient
from studio_core.intelligence.models import AnalysisResult
from studio_core.intelligence.prompts import ANALYST_SYSTEM_PROMPT, GENERATION_FALLBACK_TEXT

TRANSCRIPT = "여러분 이 영상 끝까지 보시면 인생이 바뀝니다. 오늘은 아무도 알려주지 않는 비밀을 공개합니다. " * 3


@pytest.fixture
def sample_analysis():
    return AnalysisResult.model_validate(
        {
            "hookStrategy": "첫 3초에 충격적인 질문을 던짐",
            "pacing": "빠른 컷 편집",
            "emotionalTriggers": ["호기심", "공포"],
            "structureType": "문제-해결 구조",
            "retentionTechniques": ["열린 결말", "패턴 깨기"],
            "callToActionType": "중간 구독 유도",
            "summary": "강한 후킹과 빠른 호흡이 성공 요인입니다.",
            "suggestedTopics": ["초보자 코딩 입문", "부업으로 월 100만원", "아침 루틴의 비밀"],
        }
    )


@pytest.fixture
def mock_client(mocker):
    return mocker.Mock(spec=LLMClient)


def test_analyze_returns_structured_result(mock_client, sample_analysis):
    mock_client.complete_structured.return_value = sample_analysis
    analyst = ViralAnalyst(mock_client)

    result = analyst.analyze(TRANSCRIPT)

    assert result == sample_analysis
    prompt = mock_client.complete_structured.call_args.args[0]
    assert TRANSCRIPT in prompt
    assert mock_client.complete_structured.call_args.args[1] is AnalysisResult
    assert mock_client.complete_structured.call_args.kwargs["system"] == ANALYST_SYSTEM_PROMPT


def test_analyze_validates_raw_json(mock_client, sample_analysis):
    mock_client.complete_structured.return_value = sample_analysis.model_dump_json(by_alias=True)
    analyst = ViralAnalyst(mock_client)

    assert analyst.analyze(TRANSCRIPT) == sample_analysis


def test_analyze_rejects_short_transcript(mock_client):
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(AnalysisError, match="50자 이상"):
        analyst.analyze("너무 짧은 대본")

    mock_client.complete_structured.assert_not_called()


def test_analyze_network_failure(mock_client):
    mock_client.complete_structured.side_effect = Exception("API Error")
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(AnalysisError, match="대본 분석에 실패했습니다"):
        analyst.analyze(TRANSCRIPT)


@pytest.mark.parametrize("payload", [None, "", "   "])
def test_analyze_empty_response(mock_client, payload):
    mock_client.complete_structured.return_value = payload
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(AnalysisError):
        analyst.analyze(TRANSCRIPT)


def test_analyze_malformed_json(mock_client):
    mock_client.complete_structured.return_value = '{"hookStrategy": "질문"'
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(AnalysisError):
        analyst.analyze(TRANSCRIPT)


def test_analyze_missing_fields(mock_client):
    mock_client.complete_structured.return_value = {"hookStrategy": "질문", "pacing": "빠름"}
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(AnalysisError):
        analyst.analyze(TRANSCRIPT)


def test_analyze_without_client():
    with pytest.raises(AnalysisError):
        ViralAnalyst(None).analyze(TRANSCRIPT)


def test_transcript_truncated_before_prompt(mock_client, sample_analysis):
    mock_client.complete_structured.return_value = sample_analysis
    analyst = ViralAnalyst(mock_client)
    long_transcript = "a" * 15000 + "b" * 5000

    assert len(analyst.truncate_transcript(long_transcript)) == 15000

    analyst.analyze(long_transcript)
    prompt = mock_client.complete_structured.call_args.args[0]
    assert '"' + "a" * 15000 + '"' in prompt
    assert "b" not in prompt


def test_transcript_truncated_once_per_analysis(mocker, mock_client, sample_analysis):
    mock_client.complete_structured.return_value = sample_analysis
    analyst = ViralAnalyst(mock_client)
    spy = mocker.spy(analyst, "truncate_transcript")

    analyst.analyze("a" * 20000)

    assert spy.call_count == 1
    assert spy.spy_return == "a" * 15000


def test_truncation_limit_is_configurable(mock_client):
    analyst = ViralAnalyst(mock_client, StudioConfig(max_transcript_chars=100))
    assert analyst.truncate_transcript("x" * 500) == "x" * 100


def test_generate_prompt_embeds_topic_and_style(mock_client, sample_analysis):
    mock_client.complete_text.return_value = "## 후킹 (0-10초)\n> 화면 전환 효과음"
    analyst = ViralAnalyst(mock_client)

    text = analyst.generate(sample_analysis, "초보자 코딩 입문")

    assert text == "## 후킹 (0-10초)\n> 화면 전환 효과음"
    prompt = mock_client.complete_text.call_args.args[0]
    assert '"초보자 코딩 입문"' in prompt
    assert sample_analysis.structure_type in prompt
    assert sample_analysis.hook_strategy in prompt
    assert sample_analysis.pacing in prompt
    assert "열린 결말, 패턴 깨기" in prompt
    # The full analysis travels as a camelCase JSON block
    assert '"structureType": "문제-해결 구조"' in prompt


def test_generate_empty_response_uses_fallback(mock_client, sample_analysis):
    mock_client.complete_text.return_value = ""
    analyst = ViralAnalyst(mock_client)

    assert analyst.generate(sample_analysis, "새 주제") == GENERATION_FALLBACK_TEXT


def test_generate_network_failure(mock_client, sample_analysis):
    mock_client.complete_text.side_effect = ConnectionError("timeout")
    analyst = ViralAnalyst(mock_client)

    with pytest.raises(GenerationError, match="새로운 대본을 생성하는 중 오류가 발생했습니다"):
        analyst.generate(sample_analysis, "새 주제")


def test_generate_without_client(sample_analysis):
    with pytest.raises(GenerationError):
        ViralAnalyst(None).generate(sample_analysis, "새 주제")
