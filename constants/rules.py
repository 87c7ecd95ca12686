"""
Password rule identifiers and scoring constants.
Identifiers are stable: external translation tables are keyed by them.
"""

MIN_LENGTH = "minLength"
UPPERCASE = "uppercase"
LOWERCASE = "lowercase"
NUMBER = "number"
SPECIAL = "special"
NO_EMAIL = "noEmail"
NO_FORBIDDEN_WORDS = "noForbiddenWords"

MANDATORY_RULE_IDS = (MIN_LENGTH, UPPERCASE, LOWERCASE, NUMBER, SPECIAL)
OPTIONAL_RULE_IDS = (NO_EMAIL, NO_FORBIDDEN_WORDS)
ALL_RULE_IDS = MANDATORY_RULE_IDS + OPTIONAL_RULE_IDS

MIN_PASSWORD_LENGTH = 12
EMAIL_MATCH_MIN_LENGTH = 4

MAX_SCORE = 5
EMAIL_PENALTY = 2
FORBIDDEN_WORDS_PENALTY = 2
