import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple, Union

from apps.strength.schemas import EvaluationResult, RuleOptions
from constants.rules import (
    EMAIL_MATCH_MIN_LENGTH,
    EMAIL_PENALTY,
    FORBIDDEN_WORDS_PENALTY,
    LOWERCASE,
    MANDATORY_RULE_IDS,
    MAX_SCORE,
    MIN_LENGTH,
    MIN_PASSWORD_LENGTH,
    NO_EMAIL,
    NO_FORBIDDEN_WORDS,
    NUMBER,
    SPECIAL,
    UPPERCASE,
)

logger = logging.getLogger(__name__)

UPPERCASE_RE = re.compile(r"[A-Z]")
LOWERCASE_RE = re.compile(r"[a-z]")
DIGIT_RE = re.compile(r"[0-9]")
SPECIAL_RE = re.compile(r"""[!@#$%^&*(),.?":{}|<>_\-+=\[\]\\/`~;']""")

OptionsLike = Union[RuleOptions, Mapping[str, Any], None]


def _always(options: RuleOptions) -> bool:
    return True


@dataclass(frozen=True)
class PasswordRule:
    """
    A named predicate over a password.
    is_active decides from the options whether the rule is evaluated at all.
    """
    id: str
    test: Callable[[str, RuleOptions], bool]
    is_active: Callable[[RuleOptions], bool] = _always


def _excludes_email(password: str, options: RuleOptions) -> bool:
    """
    True when no run of 4+ consecutive chars from the email's local part
    shows up in the password (case-insensitive).
    """
    username = (options.email or "").lower().split("@")[0]
    if len(username) < EMAIL_MATCH_MIN_LENGTH:
        return True

    lower_password = password.lower()
    for size in range(EMAIL_MATCH_MIN_LENGTH, len(username) + 1):
        for start in range(0, len(username) - size + 1):
            if username[start:start + size] in lower_password:
                return False
    return True


def _excludes_forbidden_words(password: str, options: RuleOptions) -> bool:
    if not options.forbiddenWords:
        return True
    lower_password = password.lower()
    return not any(word.lower() in lower_password for word in options.forbiddenWords)


DEFAULT_RULES: Tuple[PasswordRule, ...] = (
    PasswordRule(MIN_LENGTH, lambda password, options: len(password) >= MIN_PASSWORD_LENGTH),
    PasswordRule(UPPERCASE, lambda password, options: bool(UPPERCASE_RE.search(password))),
    PasswordRule(LOWERCASE, lambda password, options: bool(LOWERCASE_RE.search(password))),
    PasswordRule(NUMBER, lambda password, options: bool(DIGIT_RE.search(password))),
    PasswordRule(SPECIAL, lambda password, options: bool(SPECIAL_RE.search(password))),
)

OPTIONAL_RULES: Tuple[PasswordRule, ...] = (
    PasswordRule(NO_EMAIL, _excludes_email, is_active=lambda options: bool(options.email)),
    PasswordRule(
        NO_FORBIDDEN_WORDS,
        _excludes_forbidden_words,
        is_active=lambda options: bool(options.forbiddenWords),
    ),
)

RULE_REGISTRY: Tuple[PasswordRule, ...] = DEFAULT_RULES + OPTIONAL_RULES

# failed rule id -> score deduction
PENALTIES: Tuple[Tuple[str, int], ...] = (
    (NO_EMAIL, EMAIL_PENALTY),
    (NO_FORBIDDEN_WORDS, FORBIDDEN_WORDS_PENALTY),
)


def coerce_options(options: OptionsLike) -> RuleOptions:
    """
    Accept a RuleOptions (or subclass), a plain mapping, or None.
    """
    if options is None:
        return RuleOptions()
    if isinstance(options, RuleOptions):
        return options
    return RuleOptions.model_validate(dict(options))


def round_half_up(value: float) -> int:
    """
    Round .5 away from zero for non-negative values; round() would give 2 for 2.5.
    """
    return int(math.floor(value + 0.5))


def active_rules(options: OptionsLike = None) -> List[PasswordRule]:
    rule_options = coerce_options(options)
    return [rule for rule in RULE_REGISTRY if rule.is_active(rule_options)]


def evaluate_password(password: Optional[str], options: OptionsLike = None) -> EvaluationResult:
    """
    Run the active rules against a password and score it 0..5.

    Score is round(passed / evaluated * 5), then 2 is taken off for each of
    noEmail / noForbiddenWords that failed, never going below 0.
    An empty password fails all mandatory rules without running them.
    """
    if not password:
        return EvaluationResult(passedRules=[], failedRules=list(MANDATORY_RULE_IDS), score=0)

    rule_options = coerce_options(options)
    passed: List[str] = []
    failed: List[str] = []
    for rule in active_rules(rule_options):
        if rule.test(password, rule_options):
            passed.append(rule.id)
        else:
            failed.append(rule.id)

    total = len(passed) + len(failed)
    score = round_half_up(len(passed) / total * MAX_SCORE) if total else 0

    for rule_id, penalty in PENALTIES:
        if rule_id in failed:
            score = max(0, score - penalty)

    logger.debug("Password evaluated: score=%s failed=%s", score, failed)
    return EvaluationResult(passedRules=passed, failedRules=failed, score=score)
