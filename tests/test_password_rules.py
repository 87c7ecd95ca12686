import pytest

from apps.strength.schemas import RuleOptions
from security.password_rules import (
    DEFAULT_RULES,
    OPTIONAL_RULES,
    active_rules,
    evaluate_password,
    round_half_up,
)

MANDATORY = ["minLength", "uppercase", "lowercase", "number", "special"]
STRONG_PASSWORD = "MyP@ssw0rd123"


def test_registry_order():
    assert [rule.id for rule in DEFAULT_RULES] == MANDATORY
    assert [rule.id for rule in OPTIONAL_RULES] == ["noEmail", "noForbiddenWords"]


def test_empty_password_fails_all_mandatory_rules():
    for password in ("", None):
        result = evaluate_password(password, {"email": "johndoe@mail.com", "forbiddenWords": ["qwerty"]})
        assert result.score == 0
        assert result.passedRules == []
        assert result.failedRules == MANDATORY


def test_strong_password_passes_everything():
    result = evaluate_password(STRONG_PASSWORD)
    assert result.passedRules == MANDATORY
    assert result.failedRules == []
    assert result.score == 5


@pytest.mark.parametrize(
    "password, failed",
    [
        ("MyP@ssw0rd1", ["minLength"]),
        ("myp@ssw0rd123", ["uppercase"]),
        ("MYP@SSW0RD123", ["lowercase"]),
        ("MyP@ssword!!!", ["number"]),
        ("MyPassw0rd123", ["special"]),
    ],
)
def test_single_mandatory_failure(password, failed):
    result = evaluate_password(password)
    assert result.failedRules == failed
    assert result.score == 4


@pytest.mark.parametrize("char", list("!@#$%^&*(),.?\":{}|<>_-+=[]\\/`~;'"))
def test_every_special_character_counts(char):
    result = evaluate_password("abc" + char)
    assert "special" in result.passedRules


def test_space_and_unlisted_symbols_are_not_special():
    result = evaluate_password("abc def§€")
    assert "special" in result.failedRules


def test_non_ascii_letters_do_not_count_as_cases():
    result = evaluate_password("ÄÖÜäöüßéèêëñ")
    assert "uppercase" in result.failedRules
    assert "lowercase" in result.failedRules
    assert "minLength" in result.passedRules


def test_very_long_password():
    result = evaluate_password("Aa1!" * 10000)
    assert result.score == 5


def test_rule_count_matches_evaluated_rules():
    assert len(active_rules()) == 5
    assert len(active_rules({"email": "johndoe@mail.com"})) == 6
    assert len(active_rules({"forbiddenWords": ["qwerty"]})) == 6
    assert len(active_rules({"email": "johndoe@mail.com", "forbiddenWords": ["qwerty"]})) == 7

    for options, expected in (
        (None, 5),
        ({"email": "johndoe@mail.com"}, 6),
        ({"email": "johndoe@mail.com", "forbiddenWords": ["qwerty"]}, 7),
    ):
        result = evaluate_password("whatever", options)
        assert len(result.passedRules) + len(result.failedRules) == expected
        assert not set(result.passedRules) & set(result.failedRules)


def test_empty_options_skip_optional_rules():
    result = evaluate_password(STRONG_PASSWORD, RuleOptions(email="", forbiddenWords=[]))
    assert result.passedRules == MANDATORY
    assert result.failedRules == []


class TestNoEmail:
    def test_local_part_fragment_fails_and_is_penalized(self):
        result = evaluate_password("Xjohn!Pass99word", {"email": "johndoe@mail.com"})
        assert result.failedRules == ["noEmail"]
        # round(5/6 * 5) = 4, minus 2
        assert result.score == 2

    def test_match_is_case_insensitive(self):
        result = evaluate_password("xxDOEJxx", {"email": "JohnDoeJ@mail.com"})
        assert "noEmail" in result.failedRules

    def test_no_fragment_passes(self):
        result = evaluate_password("Xjoh!ndoPass99", {"email": "johndoe@mail.com"})
        assert "noEmail" in result.passedRules

    def test_short_local_part_always_passes(self):
        result = evaluate_password("abPass1!", {"email": "ab@mail.com"})
        assert "noEmail" in result.passedRules
        assert result.failedRules == ["minLength"]
        assert result.score == 4

    def test_email_without_at_uses_whole_value(self):
        result = evaluate_password("my-johndoe-1", {"email": "johndoe"})
        assert "noEmail" in result.failedRules

    def test_noemail_listed_after_mandatory_rules(self):
        result = evaluate_password(STRONG_PASSWORD, {"email": "zzzz@mail.com"})
        assert result.passedRules == MANDATORY + ["noEmail"]


class TestNoForbiddenWords:
    @pytest.mark.parametrize("password", ["myqwerty1", "myQWERTY1", "MyQwErTy1"])
    def test_forbidden_word_fails_case_insensitively(self, password):
        result = evaluate_password(password, {"forbiddenWords": ["qwerty"]})
        assert "noForbiddenWords" in result.failedRules

    def test_forbidden_word_match_ignores_word_case(self):
        result = evaluate_password("myqwerty1", {"forbiddenWords": ["QWERTY"]})
        assert "noForbiddenWords" in result.failedRules

    def test_penalty_floors_at_zero(self):
        # 2 of 6 rules pass: round(1.67) = 2, minus 2
        result = evaluate_password("myqwerty1", {"forbiddenWords": ["qwerty"]})
        assert result.score == 0

    def test_absent_words_pass(self):
        result = evaluate_password(STRONG_PASSWORD, {"forbiddenWords": ["qwerty", "admin"]})
        assert result.passedRules == MANDATORY + ["noForbiddenWords"]
        assert result.score == 5


def test_both_penalties_never_go_below_zero():
    result = evaluate_password("johndoePass1!", {"email": "johndoe@x.com", "forbiddenWords": ["pass"]})
    assert result.failedRules == ["noEmail", "noForbiddenWords"]
    # round(5/7 * 5) = 4, minus 2 twice
    assert result.score == 0

    result = evaluate_password("john1", {"email": "johndoe@x.com", "forbiddenWords": ["john"]})
    assert result.score == 0


def test_half_ratio_rounds_up():
    # lowercase, number and noEmail pass: 3 of 6 -> 2.5 -> 3
    result = evaluate_password("abc1", {"email": "zzzz@mail.com"})
    assert result.passedRules == ["lowercase", "number", "noEmail"]
    assert result.score == 3


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


def test_evaluation_is_idempotent():
    options = {"email": "johndoe@mail.com", "forbiddenWords": ["qwerty"]}
    assert evaluate_password("Johnqwerty!1", options) == evaluate_password("Johnqwerty!1", options)


def test_length_counts_code_points():
    # 10 code points (16 UTF-16 units) stays below the 12 character minimum
    result = evaluate_password("😀" * 6 + "Aa1!")
    assert result.failedRules == ["minLength"]
    assert evaluate_password("😀" * 8 + "Aa1!").failedRules == []
