from fastapi import APIRouter, Depends

from apps.strength.schemas import EvaluateRequest, EvaluationResult, RuleCatalog, StrengthReport, StrengthRequest
from apps.strength.service import StrengthService
from common.responses import http_bad_request
from security.password_rules import evaluate_password
from settings.config import Settings, get_settings


router = APIRouter(prefix="/api/password-strength", tags=["Password Strength"])


def _guard_length(password: str, settings: Settings) -> None:
    if len(password) > settings.MAX_PASSWORD_LENGTH:
        raise http_bad_request(f"Password must be at most {settings.MAX_PASSWORD_LENGTH} characters long.")


@router.post("/evaluate", response_model=EvaluationResult)
async def evaluate(payload: EvaluateRequest, settings: Settings = Depends(get_settings)) -> EvaluationResult:
    _guard_length(payload.password, settings)
    return evaluate_password(payload.password, payload)


@router.post("/score", response_model=StrengthReport)
async def score(payload: StrengthRequest, settings: Settings = Depends(get_settings)) -> StrengthReport:
    """
    Score a password for display: level, active bars, percentage and the
    rules a renderer should list.
    """
    _guard_length(payload.password, settings)
    return StrengthService.build_report(
        payload,
        default_bars=settings.DEFAULT_BARS_NUMBER,
        default_max_rules=settings.DEFAULT_MAX_RULES,
    )


@router.get("/rules", response_model=RuleCatalog)
async def rules() -> RuleCatalog:
    return StrengthService.rule_catalog()
