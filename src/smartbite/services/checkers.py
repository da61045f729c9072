"""Independent risk checkers, one per health profile dimension."""

import logging
from collections.abc import Mapping

from smartbite.domain.nutrition import NutritionFacts
from smartbite.domain.profile import ProfileEntry
from smartbite.domain.risk import RiskFinding, RiskKind, Severity
from smartbite.services.heuristics import Heuristic
from smartbite.services.knowledge import KnowledgeBase
from smartbite.services.matching import any_token_contains

_logger = logging.getLogger(__name__)

HEURISTIC_MATCH = "heuristic"


def check_allergens(
    tokens: list[str], allergies: list[ProfileEntry], knowledge: KnowledgeBase
) -> list[RiskFinding]:
    """Return one harmful finding per matched synonym of each allergy."""
    findings: list[RiskFinding] = []
    for allergy in allergies:
        for keyword in knowledge.allergen_keywords(allergy.name):
            if not any_token_contains(tokens, keyword):
                continue
            findings.append(
                RiskFinding(
                    kind=RiskKind.ALLERGEN,
                    severity=Severity.HARMFUL,
                    subject=allergy.name,
                    found=keyword,
                    consequence=(
                        f"Contains {allergy.name} which you are allergic to. "
                        "May cause allergic reactions."
                    ),
                    recommendation=(
                        f"Avoid this product completely due to {allergy.name} allergy."
                    ),
                )
            )
    return findings


def check_diseases(  # noqa: PLR0913
    tokens: list[str],
    nutrition: NutritionFacts | None,
    diseases: list[ProfileEntry],
    knowledge: KnowledgeBase,
    heuristics: Mapping[str, Heuristic],
    *,
    name: str = "",
    category: str = "",
) -> list[RiskFinding]:
    """Check avoid and limit lists of each known disease."""
    findings: list[RiskFinding] = []
    for disease in diseases:
        rule = knowledge.disease_rule(disease.name)
        if rule is None:
            _logger.info("Unknown disease in health profile: %s", disease.name)
            continue

        avoid_findings: list[RiskFinding] = []
        for keyword in rule.avoid:
            found = _match(tokens, nutrition, keyword, knowledge)
            if found is None:
                continue
            avoid_findings.append(
                RiskFinding(
                    kind=RiskKind.DISEASE,
                    severity=Severity.RISKY,
                    subject=disease.name,
                    found=found,
                    consequence=rule.short_term,
                    long_term_consequence=rule.long_term,
                    recommendation=f"Avoid due to {disease.name}. Contains {keyword}.",
                )
            )

        heuristic = heuristics.get(disease.name.strip().lower())
        if (
            not avoid_findings
            and heuristic is not None
            and heuristic(name.lower(), category.lower(), tokens)
        ):
            avoid_findings.append(
                RiskFinding(
                    kind=RiskKind.DISEASE,
                    severity=Severity.RISKY,
                    subject=disease.name,
                    found=HEURISTIC_MATCH,
                    consequence=rule.short_term,
                    long_term_consequence=rule.long_term,
                    recommendation=(
                        f"Avoid due to {disease.name}. "
                        "Likely high in ingredients you should avoid."
                    ),
                )
            )
        findings.extend(avoid_findings)

        for keyword in rule.limit:
            found = _match(tokens, nutrition, keyword, knowledge)
            if found is None:
                continue
            findings.append(
                RiskFinding(
                    kind=RiskKind.DISEASE,
                    severity=Severity.MODERATE,
                    subject=disease.name,
                    found=found,
                    consequence=f"Should be limited due to {disease.name}",
                    recommendation=f"Consume in moderation due to {disease.name}.",
                )
            )
    return findings


def check_drug_interactions(
    tokens: list[str], medications: list[ProfileEntry], knowledge: KnowledgeBase
) -> list[RiskFinding]:
    """Check foods that interact with the user's medications."""
    findings: list[RiskFinding] = []
    for medication in medications:
        rule = knowledge.drug_rule(medication.name)
        if rule is None:
            _logger.info("Unknown medication in health profile: %s", medication.name)
            continue
        for keyword in rule.avoid:
            if any_token_contains(tokens, keyword):
                findings.append(
                    RiskFinding(
                        kind=RiskKind.DRUG_INTERACTION,
                        severity=Severity.HARMFUL,
                        subject=medication.name,
                        found=keyword,
                        consequence=rule.consequence,
                        recommendation=(
                            f"Avoid due to interaction with {medication.name}."
                        ),
                    )
                )
        for keyword in rule.limit:
            if any_token_contains(tokens, keyword):
                findings.append(
                    RiskFinding(
                        kind=RiskKind.DRUG_INTERACTION,
                        severity=Severity.MODERATE,
                        subject=medication.name,
                        found=keyword,
                        consequence=rule.consequence,
                        recommendation=(
                            f"Limit consumption due to {medication.name} interaction."
                        ),
                    )
                )
    return findings


def check_symptoms(
    tokens: list[str], symptoms: list[ProfileEntry], knowledge: KnowledgeBase
) -> list[RiskFinding]:
    """Flag ingredients known to trigger the user's symptoms."""
    findings: list[RiskFinding] = []
    for symptom in symptoms:
        triggers = knowledge.triggers_for(symptom.name)
        if triggers is None:
            _logger.info("Unknown symptom in health profile: %s", symptom.name)
            continue
        for trigger in triggers:
            if any_token_contains(tokens, trigger):
                findings.append(
                    RiskFinding(
                        kind=RiskKind.SYMPTOM_TRIGGER,
                        severity=Severity.MODERATE,
                        subject=symptom.name,
                        found=trigger,
                        consequence=f"May trigger or worsen {symptom.name}",
                        recommendation=(
                            f"Monitor consumption as it may worsen {symptom.name}."
                        ),
                    )
                )
    return findings


def nutrient_exceeds_threshold(
    nutrition: NutritionFacts | None,
    nutrient: str,
    thresholds: Mapping[str, float],
) -> bool:
    """Return True when a tracked nutrient is above its per-100 g threshold."""
    if nutrition is None:
        return False
    key = nutrient.strip().lower()
    threshold = thresholds.get(key)
    if threshold is None:
        return False
    value = nutrition.merged().get(key)
    if not value:
        return False
    return value > threshold


def _match(
    tokens: list[str],
    nutrition: NutritionFacts | None,
    keyword: str,
    knowledge: KnowledgeBase,
) -> str | None:
    """Return the traceable match label for a keyword, if it matched."""
    if any_token_contains(tokens, keyword):
        return keyword
    if nutrient_exceeds_threshold(nutrition, keyword, knowledge.nutrient_thresholds):
        return f"{keyword} (high)"
    return None
