from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from constants.levels import DEFAULT_BARS_NUMBER, StrengthLevel
from constants.rules import MAX_SCORE

BarsNumber = Literal[3, 4, 5]


class RuleOptions(BaseModel):
    """
    Context for the optional rules. An absent or empty value skips its rule.
    """
    email: Optional[str] = Field(default=None, description="Password must not contain 4+ chars of its local part")
    forbiddenWords: Optional[List[str]] = Field(default=None, description="Case-insensitive substrings to reject")


class StrengthOptions(RuleOptions):
    barsNumber: BarsNumber = DEFAULT_BARS_NUMBER


class EvaluationResult(BaseModel):
    """
    Outcome of the rule evaluator. Rule ids keep rule-definition order.
    """
    passedRules: List[str] = []
    failedRules: List[str] = []
    score: int = Field(..., ge=0, le=MAX_SCORE)


class StrengthResult(EvaluationResult):
    level: StrengthLevel
    percentage: int = Field(..., ge=0, le=100)


class EvaluateRequest(RuleOptions):
    password: str = ""


class StrengthRequest(RuleOptions):
    """
    Payload for scoring a password for display.
    barsNumber and maxRules fall back to the configured defaults when omitted.
    """
    password: str = ""
    barsNumber: Optional[BarsNumber] = None
    maxRules: Optional[int] = Field(default=None, ge=0)


class StrengthReport(StrengthResult):
    """
    StrengthResult plus what a bar renderer needs.
    """
    barsNumber: BarsNumber
    activeBars: int = Field(..., ge=0, le=5)
    displayRules: List[str] = []


class RuleCatalog(BaseModel):
    mandatoryRules: List[str]
    optionalRules: List[str]
    levels: List[StrengthLevel]
    supportedBars: List[int]
