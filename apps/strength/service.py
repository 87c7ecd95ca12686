import logging
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from apps.strength.schemas import (
    RuleCatalog,
    StrengthOptions,
    StrengthReport,
    StrengthRequest,
    StrengthResult,
)
from constants.display import DEFAULT_MAX_RULES
from constants.levels import DEFAULT_BARS_NUMBER, LEVEL_ORDER, SUPPORTED_BARS, StrengthLevel
from constants.rules import MANDATORY_RULE_IDS, MAX_SCORE, OPTIONAL_RULE_IDS
from security.password_rules import OptionsLike, evaluate_password, round_half_up

logger = logging.getLogger(__name__)

VW, W, S, G, ST = LEVEL_ORDER

# bars -> level for score 0..5
LEVEL_TABLE: Mapping[int, Tuple[StrengthLevel, ...]] = MappingProxyType({
    5: (VW, VW, W, S, G, ST),
    4: (W, W, S, G, G, ST),
    3: (W, W, W, S, S, ST),
})

# (level, bars) -> active bars
ACTIVE_BARS_TABLE: Mapping[Tuple[StrengthLevel, int], int] = MappingProxyType({
    (VW, 3): 0, (VW, 4): 0, (VW, 5): 1,
    (W, 3): 1, (W, 4): 1, (W, 5): 2,
    (S, 3): 2, (S, 4): 2, (S, 5): 3,
    (G, 3): 2, (G, 4): 3, (G, 5): 4,
    (ST, 3): 3, (ST, 4): 4, (ST, 5): 5,
})


def _check_bars(bars: int) -> None:
    if bars not in SUPPORTED_BARS:
        raise ValueError(f"barsNumber must be one of {SUPPORTED_BARS}, got {bars!r}.")


def score_to_level(score: int, bars: int = 5) -> StrengthLevel:
    _check_bars(bars)
    if not 0 <= score <= MAX_SCORE:
        raise ValueError(f"score must be between 0 and {MAX_SCORE}, got {score!r}.")
    return LEVEL_TABLE[bars][score]


def level_to_active_bars(level: StrengthLevel, bars: int = 5) -> int:
    _check_bars(bars)
    return ACTIVE_BARS_TABLE[(StrengthLevel(level), bars)]


def score_to_percentage(score: int) -> int:
    """
    0..5 score as 0..100, independent of the bar configuration.
    """
    return round_half_up(score / MAX_SCORE * 100)


def select_display_rules(passed_rules: Sequence[str], failed_rules: Sequence[str], max_rules: int) -> List[str]:
    """
    Pick which rules a renderer lists: failed ones first, then passed ones,
    at most max_rules in total.
    """
    if max_rules <= 0:
        return []
    failed = list(failed_rules[:max_rules])
    passed = list(passed_rules[:max(0, max_rules - len(failed_rules))])
    return (failed + passed)[:max_rules]


def _coerce_strength_options(options: OptionsLike) -> StrengthOptions:
    if options is None:
        return StrengthOptions()
    if isinstance(options, StrengthOptions):
        return options
    # None means "use the default", for models and mappings alike
    if isinstance(options, Mapping):
        values = {key: value for key, value in options.items() if value is not None}
    else:
        values = options.model_dump(exclude_none=True)
    return StrengthOptions.model_validate(values)


def compute_strength(password: Optional[str], options: OptionsLike = None) -> StrengthResult:
    """
    Evaluate the password and map its score to a level and a percentage.
    options may carry barsNumber (default 5), email and forbiddenWords.
    An empty password is always veryWeak, whatever the bar configuration.
    """
    strength_options = _coerce_strength_options(options)
    evaluation = evaluate_password(password, strength_options)
    if password:
        level = score_to_level(evaluation.score, strength_options.barsNumber)
    else:
        level = StrengthLevel.VERY_WEAK
    return StrengthResult(
        score=evaluation.score,
        level=level,
        passedRules=evaluation.passedRules,
        failedRules=evaluation.failedRules,
        percentage=score_to_percentage(evaluation.score),
    )


class StrengthService:
    @staticmethod
    def build_report(
        payload: StrengthRequest,
        default_bars: int = DEFAULT_BARS_NUMBER,
        default_max_rules: int = DEFAULT_MAX_RULES,
    ) -> StrengthReport:
        bars = default_bars if payload.barsNumber is None else payload.barsNumber
        max_rules = default_max_rules if payload.maxRules is None else payload.maxRules
        options = StrengthOptions(email=payload.email, forbiddenWords=payload.forbiddenWords, barsNumber=bars)
        result = compute_strength(payload.password, options)
        report = StrengthReport(
            **result.model_dump(),
            barsNumber=bars,
            activeBars=level_to_active_bars(result.level, bars),
            displayRules=select_display_rules(result.passedRules, result.failedRules, max_rules),
        )
        logger.info(
            "Strength computed: level=%s score=%s bars=%s/%s",
            report.level.value,
            report.score,
            report.activeBars,
            report.barsNumber,
        )
        return report

    @staticmethod
    def rule_catalog() -> RuleCatalog:
        return RuleCatalog(
            mandatoryRules=list(MANDATORY_RULE_IDS),
            optionalRules=list(OPTIONAL_RULE_IDS),
            levels=list(LEVEL_ORDER),
            supportedBars=list(SUPPORTED_BARS),
        )
