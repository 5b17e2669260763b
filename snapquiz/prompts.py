from snapquiz.errors import InvalidInput

MIN_QUESTIONS = 3
MAX_QUESTIONS = 8


def build_quiz_prompt(source_text: str) -> str:
    """Build the MCQ instruction prompt for a piece of source text."""
    if not source_text or not source_text.strip():
        raise InvalidInput("Missing 'text' in request body")

    return f"""Based on the following text content, generate {MIN_QUESTIONS} to {MAX_QUESTIONS} multiple choice questions (MCQs) that test understanding of the key concepts.

Text content:
{source_text}

IMPORTANT: Respond with ONLY valid JSON in this exact format (no additional text, explanations, or markdown):
{{
  "questions": [
    {{
      "id": 1,
      "question": "Question text...",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": 0,
      "explanation": "Why this is correct"
    }}
  ]
}}

Requirements:
- Generate {MIN_QUESTIONS} to {MAX_QUESTIONS} questions; pick the count from how long and rich the text content is
- Number the questions with sequential ids starting at 1
- Give every question exactly 4 distinct options
- "correctAnswer" is the 0-based index (0, 1, 2 or 3) of the correct option
- Make questions clear and test understanding
- Ensure options are plausible and varied
- Correct answers should be distributed (0, 1, 2, 3)
- Provide helpful explanations
- Return ONLY the JSON object, no other text and no code fences"""
