from dataclasses import dataclass, field
from typing import Dict, List, Optional

from logic.validation import ValidationError

DISPUTE_TYPES = ["civil", "labor", "family"]
DEFAULT_WEIGHT = 80

SAMPLE_TEXT = (
    "The landlord refused to renew the lease claiming they would live there, but there are signs "
    "they are actually planning a remodel. The tenant has already moved out, and the landlord has "
    "not let the unit to a third party but is remodeling it while vacant. Can I claim damages for "
    "obstruction of key money recovery?"
)


@dataclass
class SimilarCase:
    case_id: str
    case_number: str
    similarity: int
    summary: str
    fact_similarity: int
    legal_issue_similarity: int
    result: str
    winner: str
    reasoning: str
    strategic_implication: str

    @property
    def overall_similarity(self) -> int:
        return round((self.fact_similarity + self.legal_issue_similarity) / 2)


@dataclass
class Issue:
    id: str
    title: str
    weight: int
    related_law: str
    description: str


@dataclass
class ContraryCase:
    case_number: str
    key_difference: str
    result: str


@dataclass
class SimulationResult:
    win_probability: float
    matched_cases: int
    ai_analysis: str
    overall_accuracy: float
    similar_cases: List[SimilarCase] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    contrary_case: Optional[ContraryCase] = None


def sample_result() -> SimulationResult:
    return SimulationResult(
        win_probability=72.4,
        matched_cases=42,
        ai_analysis=(
            "The key to your case is whether the landlord's stated intent to live in the unit is "
            "genuine. Refusing renewal to remodel, or letting to a third party, does not satisfy "
            "the statutory grounds. The burden of proof and the damages issue therefore become "
            "central, and reviewing precedents allows an effective response on the merits."
        ),
        overall_accuracy=94.8,
        similar_cases=[
            SimilarCase(
                "case-1", "2022GaSo345***", 88, "\"Owner-occupancy pretext\"", 85, 90,
                "Plaintiff (tenant) won", "Plaintiff (tenant)",
                "Leaving the unit vacant was not treated as a transfer to a third party, but clear "
                "deception was recognised and damages were awarded.",
                "Where the landlord's occupancy claim proves false, courts have recognised damages; "
                "collect evidence of the actual use of the unit after you moved out.",
            ),
            SimilarCase(
                "case-2", "2021Da267***", 75, "\"Remodeling for occupancy accepted\"", 70, 80,
                "Defendant (landlord) won", "Defendant (landlord)",
                "The landlord's remodeling plan was reasonable and adequate compensation was offered "
                "to the tenant.",
                "This precedent favoured the landlord, but advance notice and a compensation offer "
                "set it apart.",
            ),
        ],
        issues=[
            Issue("issue-1", "Landlord's burden to prove need for occupancy", 55,
                  "Housing Lease Protection Act art. 6-3(1), damages liability requirements",
                  "To refuse renewal for owner occupancy, the landlord must prove a real intent and need."),
            Issue("issue-2", "Timing of the refusal notice", 80,
                  "Six-month advance notice for refusing renewal",
                  "Whether renewal was refused at least six months before the lease ended is a key issue."),
            Issue("issue-3", "Third-party involvement (brokerage)", 70,
                  "Whether a tort through a third party is established",
                  "Check whether a sale to a third party through a broker was attempted."),
        ],
        contrary_case=ContraryCase("2021Da267***", "\"Whether six months' notice was given\"",
                                   "Landlord not liable"),
    )


def validate_simulation_input(text: str) -> str:
    t = (text or "").strip()
    if not t:
        raise ValidationError("Please describe the dispute.")
    return t


def default_weights() -> Dict[str, int]:
    return {"fact": DEFAULT_WEIGHT, "legal": DEFAULT_WEIGHT, "conclusion": DEFAULT_WEIGHT}


def weighted_similarity(case: SimilarCase, weights: Dict[str, int]) -> float:
    """
    Blend fact, legal-issue and overall similarity by the slider weights (0-100 each).

    All-zero weights fall back to the unweighted mean of the three.
    """
    parts = [
        (case.fact_similarity, weights.get("fact", DEFAULT_WEIGHT)),
        (case.legal_issue_similarity, weights.get("legal", DEFAULT_WEIGHT)),
        (case.similarity, weights.get("conclusion", DEFAULT_WEIGHT)),
    ]
    for _, w in parts:
        if w < 0 or w > 100:
            raise ValueError("Weights must be between 0 and 100")
    total = sum(w for _, w in parts)
    if total == 0:
        return sum(v for v, _ in parts) / len(parts)
    return sum(v * w for v, w in parts) / total


def rank_cases(result: SimulationResult, weights: Dict[str, int]) -> List[SimilarCase]:
    return sorted(result.similar_cases, key=lambda c: weighted_similarity(c, weights), reverse=True)


def run_simulation(text: str) -> SimulationResult:
    validate_simulation_input(text)
    return sample_result()
