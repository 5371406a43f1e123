import random
from typing import Optional

from ..schemas import ScoreBreakdown, ScoringResult

# (low, high) inclusive, per rubric component
MOCK_RANGES = {
    "functionality": (20, 30),
    "code_quality": (20, 30),
    "documentation": (12, 20),
    "innovation": (5, 10),
    "uiux": (5, 10),
}

NOT_CONFIGURED = "AI scoring API not configured"
UNAVAILABLE = "AI scoring API unavailable"

MOCK_FEEDBACK = (
    "**Mock Evaluation** ({reason})\n\n"
    "This is a simulated score for demonstration purposes. The project shows promise with solid "
    "implementation. Consider improving documentation and adding more innovative features to boost "
    "your score.\n\n"
    "**Strengths:**\n"
    "- Good code structure\n"
    "- Working functionality\n"
    "- Clean UI design\n\n"
    "**Areas for Improvement:**\n"
    "- Add more comprehensive documentation\n"
    "- Implement additional features\n"
    "- Enhance error handling"
)


def generate_mock_score(
    rng: Optional[random.Random] = None, reason: str = NOT_CONFIGURED
) -> ScoringResult:
    rng = rng or random.Random()
    parts = {key: rng.randint(low, high) for key, (low, high) in MOCK_RANGES.items()}
    score = ScoreBreakdown.from_components(feedback=MOCK_FEEDBACK.format(reason=reason), **parts)
    return ScoringResult.ok(score, used_mock=True)
