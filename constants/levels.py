from enum import Enum


class StrengthLevel(str, Enum):
    VERY_WEAK = "veryWeak"
    WEAK = "weak"
    SOSO = "soso"
    GOOD = "good"
    STRONG = "strong"


# Weakest first
LEVEL_ORDER = (
    StrengthLevel.VERY_WEAK,
    StrengthLevel.WEAK,
    StrengthLevel.SOSO,
    StrengthLevel.GOOD,
    StrengthLevel.STRONG,
)

SUPPORTED_BARS = (3, 4, 5)
DEFAULT_BARS_NUMBER = 5
