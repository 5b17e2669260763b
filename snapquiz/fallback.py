"""Generic quiz shown by the front end when every model failed."""

from snapquiz.models import Quiz

PLACEHOLDER_QUESTIONS = [
    {
        "id": 1,
        "question": "What is the main topic of the extracted text?",
        "options": ["General information", "Technical details", "Historical facts", "Personal opinions"],
        "correctAnswer": 0,
        "explanation": "The text appears to contain general information.",
    },
    {
        "id": 2,
        "question": "How would you categorize this content?",
        "options": ["Educational", "Entertainment", "News", "Fiction"],
        "correctAnswer": 0,
        "explanation": "The content seems educational in nature.",
    },
    {
        "id": 3,
        "question": "What type of information is most prominent?",
        "options": ["Facts and data", "Opinions and views", "Instructions", "Stories"],
        "correctAnswer": 0,
        "explanation": "The text contains factual information and data.",
    },
    {
        "id": 4,
        "question": "Which best describes the text's purpose?",
        "options": ["To inform", "To persuade", "To entertain", "To sell"],
        "correctAnswer": 0,
        "explanation": "The primary purpose appears to be informative.",
    },
    {
        "id": 5,
        "question": "What level of detail is provided?",
        "options": ["High detail", "Medium detail", "Low detail", "Mixed detail"],
        "correctAnswer": 1,
        "explanation": "The text provides a moderate level of detail.",
    },
]


def placeholder_quiz() -> Quiz:
    return Quiz.model_validate({"questions": PLACEHOLDER_QUESTIONS})
