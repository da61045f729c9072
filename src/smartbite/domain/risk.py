"""Domain models for health risk evaluation."""

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum


class Severity(IntEnum):
    """Ordered risk level; comparisons follow the integer ranking."""

    SAFE = 0
    MODERATE = 1
    RISKY = 2
    HARMFUL = 3

    @property
    def label(self) -> str:
        """Lowercase label used in serialized output."""
        return self.name.lower()


class RiskKind(str, Enum):
    """Risk dimension that produced a finding."""

    ALLERGEN = "allergen"
    DISEASE = "disease"
    DRUG_INTERACTION = "drug_interaction"
    SYMPTOM_TRIGGER = "symptom_trigger"

    @property
    def subject_key(self) -> str:
        """Key naming the matched profile entry in serialized findings."""
        return _SUBJECT_KEYS[self]


_SUBJECT_KEYS = {
    RiskKind.ALLERGEN: "allergen",
    RiskKind.DISEASE: "disease",
    RiskKind.DRUG_INTERACTION: "medication",
    RiskKind.SYMPTOM_TRIGGER: "symptom",
}


@dataclass(frozen=True)
class RiskFinding:
    """One risk signal produced by a single checker for one profile entry."""

    kind: RiskKind
    severity: Severity
    subject: str
    found: str
    consequence: str
    recommendation: str
    long_term_consequence: str | None = None

    def with_severity(self, severity: Severity) -> "RiskFinding":
        """Return a copy with a different severity."""
        return replace(self, severity=severity)

    def to_dict(self) -> dict[str, object]:
        """Serialize the finding for API responses."""
        payload: dict[str, object] = {
            "type": self.kind.value,
            self.kind.subject_key: self.subject,
            "severity": self.severity.label,
            "found": self.found,
            "consequence": self.consequence,
        }
        if self.long_term_consequence:
            payload["long_term_consequence"] = self.long_term_consequence
        payload["recommendation"] = self.recommendation
        return payload


@dataclass(frozen=True)
class RiskVerdict:
    """Aggregated result of all findings for one food and profile."""

    allergens: list[RiskFinding] = field(default_factory=list)
    diseases: list[RiskFinding] = field(default_factory=list)
    drug_interactions: list[RiskFinding] = field(default_factory=list)
    symptoms: list[RiskFinding] = field(default_factory=list)
    overall_risk: Severity = Severity.SAFE
    recommendations: list[str] = field(default_factory=list)

    @property
    def findings(self) -> Iterator[RiskFinding]:
        """Iterate findings across all four dimensions."""
        yield from self.allergens
        yield from self.diseases
        yield from self.drug_interactions
        yield from self.symptoms

    @property
    def is_safe(self) -> bool:
        return self.overall_risk == Severity.SAFE

    def to_dict(self) -> dict[str, object]:
        """Serialize the verdict for API responses."""
        return {
            "allergens": [finding.to_dict() for finding in self.allergens],
            "diseases": [finding.to_dict() for finding in self.diseases],
            "drug_interactions": [
                finding.to_dict() for finding in self.drug_interactions
            ],
            "symptoms": [finding.to_dict() for finding in self.symptoms],
            "overall_risk": self.overall_risk.label,
            "recommendations": list(self.recommendations),
        }
