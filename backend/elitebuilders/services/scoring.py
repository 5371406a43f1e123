import math
from typing import Any, Dict

from ..errors import MalformedResponse
from ..schemas import ScoreBreakdown

# Upper bound of each rubric component, keyed by its wire name.
SCORE_BOUNDS = {
    "functionality": 30,
    "codeQuality": 30,
    "documentation": 20,
    "innovation": 10,
    "uiux": 10,
}
DEFAULT_FEEDBACK = "No feedback provided"


def clamp_score(value: float, upper: int) -> int:
    return int(round(max(0, min(upper, value))))


def _as_number(key: str, value: Any) -> float:
    if value is None:
        return 0
    # bool is an int subclass; a true/false score is not a score
    if isinstance(value, bool):
        raise MalformedResponse(f"{key} is a boolean, expected a number")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError as exc:
            raise MalformedResponse(f"{key} is not numeric: {value!r}") from exc
    else:
        raise MalformedResponse(f"{key} has unexpected type {type(value).__name__}")
    if math.isnan(number):
        raise MalformedResponse(f"{key} is NaN")
    return number


def normalize_scores(raw: Dict[str, Any]) -> ScoreBreakdown:
    """Clamp every sub-score into range and rebuild the total from the clamped parts.

    The model's own ``total`` (if any) is ignored.
    """
    if not isinstance(raw, dict):
        raise MalformedResponse(f"expected a JSON object, got {type(raw).__name__}")
    if not any(key in raw for key in SCORE_BOUNDS):
        raise MalformedResponse("reply has none of the rubric scores")
    clamped = {
        key: clamp_score(_as_number(key, raw.get(key)), upper)
        for key, upper in SCORE_BOUNDS.items()
    }
    feedback = raw.get("feedback")
    if not isinstance(feedback, str) or not feedback.strip():
        feedback = DEFAULT_FEEDBACK
    return ScoreBreakdown.from_components(
        functionality=clamped["functionality"],
        code_quality=clamped["codeQuality"],
        documentation=clamped["documentation"],
        innovation=clamped["innovation"],
        uiux=clamped["uiux"],
        feedback=feedback,
    )
