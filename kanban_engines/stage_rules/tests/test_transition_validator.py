from kanban_engines.stage_rules.models import StageTransitionRule
from kanban_engines.stage_rules.validator import is_transition_allowed


RULES = [
    StageTransitionRule(stage_from="Requested", stage_to="Done"),
    StageTransitionRule(stage_from="Done", stage_to="Requested"),
]


def test_registered_pair_is_denied():
    assert is_transition_allowed(RULES, "Requested", "Done") is False
    assert is_transition_allowed(RULES, "Done", "Requested") is False


def test_unregistered_pairs_are_allowed():
    assert is_transition_allowed(RULES, "Requested", "InProgress")
    assert is_transition_allowed(RULES, "Done", "Archived")
    assert is_transition_allowed(RULES, "Requested", "Requested")
    assert is_transition_allowed([], "anything", "at all")


def test_match_is_exact_case_and_whitespace_sensitive():
    assert is_transition_allowed(RULES, "requested", "done")
    assert is_transition_allowed(RULES, "Requested ", "Done")
    assert is_transition_allowed(RULES, "Requested", " Done")
