"""Merge findings into an overall severity and recommendation list."""

from collections.abc import Iterable

from smartbite.domain.risk import RiskFinding, Severity

HEADLINES = {
    Severity.HARMFUL: "⚠️ AVOID this product completely due to serious health risks.",
    Severity.RISKY: "⚠️ This product is not recommended for your health profile.",
    Severity.MODERATE: "⚠️ Consume with caution and in moderation.",
    Severity.SAFE: "✅ This product appears safe for your health profile.",
}


def overall_risk(findings: Iterable[RiskFinding]) -> Severity:
    """Worst severity across findings, SAFE when there are none."""
    return max((finding.severity for finding in findings), default=Severity.SAFE)


def aggregate(findings: Iterable[RiskFinding]) -> tuple[Severity, list[str]]:
    """Return the overall severity and deduplicated recommendations."""
    collected = list(findings)
    overall = overall_risk(collected)
    recommendations = [HEADLINES[overall]]
    recommendations.extend(
        finding.recommendation for finding in collected if finding.recommendation
    )
    return overall, list(dict.fromkeys(recommendations))
