import re
from typing import Optional

GRADE_MIN = 1
GRADE_MAX = 5

# 우선순위 순서: "Grade: 4/5", "4 out of 5", "4/5", "Grade: 4"
_GRADE_PATTERNS = [
    re.compile(r"grade\s*(?:of|is)?\s*[:\-]?\s*\**\s*(\d+(?:\.\d+)?)\s*\**\s*(?:/|out\s+of)\s*5\b", re.IGNORECASE),
    re.compile(r"\b(\d+(?:\.\d+)?)\s*(?:/|out\s+of)\s*5\b", re.IGNORECASE),
    re.compile(r"grade\s*(?:of|is)?\s*[:\-]?\s*\**\s*(\d+(?:\.\d+)?)\b", re.IGNORECASE),
]

def parse_grade(feedback: Optional[str]) -> Optional[int]:
    """피드백 본문에 포함된 1-5 점수 추출. 찾지 못하면 None"""
    if not feedback:
        return None

    for pattern in _GRADE_PATTERNS:
        for match in pattern.finditer(feedback):
            value = float(match.group(1))
            if GRADE_MIN <= value <= GRADE_MAX:
                return int(round(value))
    return None
