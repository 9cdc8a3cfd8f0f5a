from datetime import date
from typing import List, Optional, Set, Tuple

from model.models import Scenario

MAX_COMPARE = 2
RESPONSE_DAYS = 14


class CompareLimitError(ValueError):
    """More scenarios selected for comparison than the view can show."""


def toggle_compare(selected: List[Scenario], scenario: Scenario, limit: int = MAX_COMPARE) -> List[Scenario]:
    """Return a new selection with `scenario` toggled; adding past `limit` raises."""
    if scenario in selected:
        return [s for s in selected if s != scenario]
    if len(selected) >= limit:
        raise CompareLimitError(f"You can compare up to {limit} scenarios.")
    return selected + [scenario]


def toggle_report_include(included: Set[str], case_title: str) -> Tuple[Set[str], bool]:
    out = set(included)
    if case_title in out:
        out.discard(case_title)
        return out, False
    out.add(case_title)
    return out, True


def generate_notice_template(scenario: Scenario, today: Optional[date] = None) -> str:
    """Pre-litigation notice letter for the chosen scenario."""
    today = today or date.today()
    actions = "\n".join(f"  {i}) {a}" for i, a in enumerate(scenario.next_actions, start=1))
    return (
        "[Advance Notice of Legal Action]\n"
        "\n"
        "To: [Counterparty name/company]\n"
        "From: [Your name]\n"
        f"Date: {today.isoformat()}\n"
        "\n"
        f"Subject: Notice regarding {scenario.title}\n"
        "\n"
        "Dear Sir or Madam,\n"
        "\n"
        f"This letter is sent as part of the {scenario.title} process to resolve our dispute.\n"
        "\n"
        "1. Summary of the dispute\n"
        "[Summary of the dispute]\n"
        "\n"
        "2. Requests\n"
        f"{actions}\n"
        "\n"
        "3. Response deadline\n"
        f"Within {RESPONSE_DAYS} days of receipt of this letter\n"
        "\n"
        "4. Further steps\n"
        "If no reply is received by the deadline, we intend to proceed with legal action.\n"
        "\n"
        "Sincerely,\n"
        "\n"
        "[Signature]"
    )
