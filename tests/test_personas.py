"""
回应角色注册表测试
"""
import pytest

from llm.personas import (
    DEFAULT_ROLE,
    MODE_DAILY,
    MODE_INCIDENT,
    PERSONA_TEMPLATES,
    ResponseRole,
    get_persona_template,
    resolve_role,
)


def test_every_role_has_both_modes():
    for role in ResponseRole:
        for mode in (MODE_INCIDENT, MODE_DAILY):
            template = PERSONA_TEMPLATES[(role, mode)]
            assert template.opening_lines
            assert template.tone_directives
            assert template.suggestion_directives
            assert template.escalation_directive


@pytest.mark.parametrize("role", [None, "", "grandpa", "  MOM  "])
def test_resolve_role(role):
    expected = ResponseRole.MOM if role and role.strip().lower() == "mom" else DEFAULT_ROLE
    assert resolve_role(role) == expected


def test_unknown_role_falls_back_to_supportive_friend():
    template = get_persona_template("pirate", is_incident=True)

    assert template.role == ResponseRole.SUPPORTIVE_FRIEND
    assert template.mode == MODE_INCIDENT


def test_mode_follows_incident_flag():
    assert get_persona_template("dad", is_incident=False).mode == MODE_DAILY
    assert get_persona_template("dad", is_incident=True).mode == MODE_INCIDENT


def test_opening_line_is_stable_per_entry():
    template = get_persona_template("brother", is_incident=False)
    entries = [f"Entry number {i} about a long and tiring day at work." for i in range(30)]

    picks = [template.opening_line_for(e) for e in entries]

    assert picks == [template.opening_line_for(e) for e in entries]
    assert set(picks) <= set(template.opening_lines)
    if len(template.opening_lines) > 1:
        assert len(set(picks)) > 1
