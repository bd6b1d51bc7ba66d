ANALYST_SYSTEM_PROMPT = "당신은 냉철하고 분석적인 유튜브 컨설턴트입니다. 핵심만 명확하게 한국어로 전달하세요."

ANALYSIS_PROMPT_TEMPLATE = """
당신은 대한민국 최고의 유튜브 알고리즘 전략가입니다.
다음은 조회수가 폭발한 '떡상' 영상의 대본입니다.

이 대본을 분석하여 성공 요인(Viral DNA)을 추출하고,
이 스타일을 그대로 적용해서 또 다른 대박을 터뜨릴 수 있는 새로운 주제 3가지를 추천해주세요.
분석 항목: 후킹 전략, 편집/진행 호흡, 감정적 트리거, 스토리 구조, 이탈 방지 기법, 구독/좋아요 유도 방식, 2문장 요약, 추천 주제.
모든 분석 결과는 **반드시 한국어**로 작성되어야 합니다.

대본:
"{transcript_text}"
(너무 길 경우 일부 생략됨)
"""

REMIX_PROMPT_TEMPLATE = """
새로운 유튜브 영상 대본을 작성해주세요.
주제: "{new_topic}"

**중요**: 반드시 이전에 분석한 '떡상 영상'의 성공 공식(Viral DNA)을 그대로 따라야 합니다.

[성공 공식 분석 데이터]
{analysis_context}

[작성 지침]
1. **구조**: {structure_type} 구조를 그대로 사용하세요.
2. **후킹**: 오프닝은 다음 전략을 따르세요: {hook_strategy}.
3. **호흡**: {pacing} 느낌이 나도록 문장을 구성하세요.
4. **몰입 장치**: 다음 기법들을 대본 곳곳에 배치하세요: {retention_techniques}.
5. **톤앤매너**: 원본 영상의 에너지와 감정선을 유지하세요.
6. **언어**: 자연스럽고 몰입도 높은 **한국어 구어체**로 작성하세요.

[출력 형식]
Markdown 형식을 사용하세요.
섹션은 헤더(##)로 구분하세요 (예: ## 후킹 (0-10초), ## 본론 1, ## 결론 및 CTA).
영상 편집자를 위한 지시문(화면 연출, 효과음 등)은 인용구(>)로 표시하세요.
"""

GENERATION_FALLBACK_TEXT = "대본 생성에 실패했습니다."
