from datetime import date

import pytest

from logic.strategy import CompareLimitError, generate_notice_template, toggle_compare, toggle_report_include
from model.models import Scenario


def _scenario(title, actions=None):
    return Scenario(title, "easy", "high", "desc", actions or [])


def test_toggle_compare_adds_and_removes():
    a, b = _scenario("A"), _scenario("B")
    selected = toggle_compare([], a)
    selected = toggle_compare(selected, b)
    assert selected == [a, b]
    assert toggle_compare(selected, a) == [b]


def test_toggle_compare_limit():
    a, b, c = _scenario("A"), _scenario("B"), _scenario("C")
    selected = [a, b]
    with pytest.raises(CompareLimitError):
        toggle_compare(selected, c)
    assert selected == [a, b]


def test_toggle_compare_returns_new_list():
    selected = []
    toggle_compare(selected, _scenario("A"))
    assert selected == []


def test_toggle_report_include():
    included, added = toggle_report_include(set(), "Case 1")
    assert added is True
    assert included == {"Case 1"}
    included, added = toggle_report_include(included, "Case 1")
    assert added is False
    assert included == set()


def test_notice_template():
    text = generate_notice_template(_scenario("Certified letter", ["Legal review", "Send by post"]),
                                    today=date(2024, 5, 20))
    assert "Date: 2024-05-20" in text
    assert "Subject: Notice regarding Certified letter" in text
    assert "  1) Legal review" in text
    assert "  2) Send by post" in text
    assert "Within 14 days" in text
