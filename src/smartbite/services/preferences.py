"""Severity escalation driven by dietary preferences."""

from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType

from smartbite.domain.risk import RiskFinding, RiskKind, RiskVerdict, Severity
from smartbite.services.checkers import HEURISTIC_MATCH
from smartbite.services.knowledge import KnowledgeBase
from smartbite.services.matching import contains_keyword

PreferenceRule = Callable[[RiskFinding, KnowledgeBase], Severity]


def escalate_sugar_findings(finding: RiskFinding, knowledge: KnowledgeBase) -> Severity:
    """Raise moderate sugar-related diabetes findings to risky."""
    if finding.kind != RiskKind.DISEASE:
        return finding.severity
    if finding.subject.strip().lower() != "diabetes":
        return finding.severity
    sugar_related = finding.found == HEURISTIC_MATCH or any(
        contains_keyword(finding.found, term) for term in knowledge.sugar_terms
    )
    if sugar_related and finding.severity == Severity.MODERATE:
        return Severity.RISKY
    return finding.severity


DEFAULT_PREFERENCE_RULES: Mapping[str, PreferenceRule] = MappingProxyType(
    {
        "low-sugar": escalate_sugar_findings,
        "low sugar": escalate_sugar_findings,
    }
)


def adjust_for_preferences(
    verdict: RiskVerdict,
    preferences: list[str],
    knowledge: KnowledgeBase,
    rules: Mapping[str, PreferenceRule] = DEFAULT_PREFERENCE_RULES,
) -> RiskVerdict:
    """Apply preference rules to every finding; severities never decrease."""
    active: list[PreferenceRule] = []
    for preference in preferences:
        rule = rules.get(str(preference).strip().lower())
        if rule is not None and rule not in active:
            active.append(rule)
    if not active:
        return verdict

    def adjust(findings: list[RiskFinding]) -> list[RiskFinding]:
        adjusted: list[RiskFinding] = []
        for finding in findings:
            severity = finding.severity
            for rule in active:
                severity = max(severity, rule(finding, knowledge))
            if severity != finding.severity:
                finding = finding.with_severity(severity)
            adjusted.append(finding)
        return adjusted

    return replace(
        verdict,
        allergens=adjust(verdict.allergens),
        diseases=adjust(verdict.diseases),
        drug_interactions=adjust(verdict.drug_interactions),
        symptoms=adjust(verdict.symptoms),
    )
