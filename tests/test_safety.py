"""
安全规则测试
"""
import pytest

from emotion.safety import (
    RESOURCE_LINES,
    RISK_ELEVATED,
    RISK_HIGH,
    RISK_NONE,
    assess_safety,
)


@pytest.mark.parametrize("text", [
    "Some days I just want to die and nobody would notice",
    "I keep thinking about self-harm again",
    "I have been feeling suicidal since the results came out",
])
def test_self_harm_is_high_risk(text):
    result = assess_safety(text)

    assert result.risk_level == RISK_HIGH
    assert "self_harm" in result.categories
    assert RESOURCE_LINES["self_harm"] in result.resource_lines
    assert result.requires_escalation


def test_exploitation_is_high_risk():
    result = assess_safety("My uncle keeps threatening me and says he will blackmail me")

    assert result.risk_level == RISK_HIGH
    assert result.categories == ("exploitation",)
    assert "blackmail" in result.matched_terms


def test_very_intense_negative_entry_is_elevated():
    result = assess_safety("everything is falling apart", intensity=9, sentiment="negative")

    assert result.risk_level == RISK_ELEVATED
    assert result.resource_lines == (RESOURCE_LINES["elevated"],)


def test_ordinary_entry_has_no_flags():
    result = assess_safety("I am very stressed about my exam", intensity=7, sentiment="negative")

    assert result.risk_level == RISK_NONE
    assert result.resource_lines == ()
    assert not result.requires_escalation
