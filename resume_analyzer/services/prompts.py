from resume_analyzer.ai.types import ChatMessage

SYSTEM_PROMPT = """
You are a professional ATS resume evaluator.

Return ONLY valid JSON.

{
  "ats_score": number (0-100),
  "strengths": string[],
  "weaknesses": string[],
  "missing_skills": string[],
  "improvement_suggestions": string[]
}
"""


def build_analysis_messages(resume_text: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=f"Analyze this resume thoroughly:\n\n{resume_text}"),
    ]
