"""
Prompt template for CV scoring.
"""

SCORING_PROMPT = """You are an AI assistant. Compare the following job description and CV. Provide:
1. A match score (0 to 100) on how suitable the candidate is.
2. A 3-sentence professional profile summary.

Job Description: {job_description}
CV: {cv_text}"""

STRUCTURED_OUTPUT_INSTRUCTION = """

Respond ONLY with a JSON object in this exact format, no other text:
{"match_score": <integer 0-100>, "profile_summary": "<3-sentence summary>"}"""


def build_scoring_prompt(
    job_description: str,
    cv_text: str,
    structured: bool = False,
) -> str:
    """
    Build the scoring instruction for a job description and CV text.

    Both inputs are inserted verbatim.
    """
    prompt = SCORING_PROMPT.format(job_description=job_description, cv_text=cv_text)
    if structured:
        prompt += STRUCTURED_OUTPUT_INSTRUCTION
    return prompt
