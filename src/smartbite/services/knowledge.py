"""Static knowledge tables used by the health risk checkers."""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType


@dataclass(frozen=True)
class DiseaseRule:
    """Ingredients and nutrients to avoid or limit for a disease."""

    avoid: tuple[str, ...]
    limit: tuple[str, ...]
    short_term: str
    long_term: str


@dataclass(frozen=True)
class DrugRule:
    """Food interactions for a medication."""

    consequence: str
    avoid: tuple[str, ...] = ()
    limit: tuple[str, ...] = ()


@dataclass(frozen=True)
class KnowledgeBase:
    """Read-only lookup tables keyed by lowercase names."""

    allergen_groups: Mapping[str, tuple[str, ...]]
    diseases: Mapping[str, DiseaseRule]
    drugs: Mapping[str, DrugRule]
    symptom_triggers: Mapping[str, tuple[str, ...]]
    nutrient_thresholds: Mapping[str, float]
    sugar_terms: tuple[str, ...]

    def allergen_keywords(self, allergy: str) -> tuple[str, ...]:
        """Synonym group for an allergy, or the literal name if unknown."""
        key = allergy.strip().lower()
        return self.allergen_groups.get(key, (key,))

    def disease_rule(self, disease: str) -> DiseaseRule | None:
        return self.diseases.get(disease.strip().lower())

    def drug_rule(self, medication: str) -> DrugRule | None:
        return self.drugs.get(medication.strip().lower())

    def triggers_for(self, symptom: str) -> tuple[str, ...] | None:
        return self.symptom_triggers.get(symptom.strip().lower())


_ALLERGEN_GROUPS = {
    "nuts": (
        "nuts",
        "peanuts",
        "almonds",
        "walnuts",
        "cashews",
        "pistachios",
        "hazelnuts",
        "pecans",
        "brazil nuts",
        "macadamia",
        "pine nuts",
    ),
    "peanuts": ("peanuts", "peanut", "groundnut", "arachis"),
    "tree-nuts": (
        "almonds",
        "walnuts",
        "cashews",
        "pistachios",
        "hazelnuts",
        "pecans",
        "brazil nuts",
        "macadamia",
        "pine nuts",
    ),
    "shellfish": (
        "shellfish",
        "shrimp",
        "crab",
        "lobster",
        "oysters",
        "mussels",
        "clams",
        "scallops",
        "prawns",
    ),
    "fish": (
        "fish",
        "salmon",
        "tuna",
        "cod",
        "mackerel",
        "sardines",
        "anchovies",
        "herring",
    ),
    "dairy": (
        "milk",
        "dairy",
        "cheese",
        "butter",
        "cream",
        "yogurt",
        "lactose",
        "casein",
        "whey",
    ),
    "milk": ("milk", "cheese", "butter", "cream", "lactose", "casein", "whey"),
    "eggs": ("eggs", "egg", "albumin", "lecithin", "mayonnaise"),
    "soy": ("soy", "soya", "soybeans", "tofu", "tempeh", "miso", "edamame"),
    "gluten": (
        "gluten",
        "wheat",
        "barley",
        "rye",
        "oats",
        "spelt",
        "kamut",
        "triticale",
    ),
    "wheat": ("wheat", "spelt", "kamut", "semolina", "durum"),
    "sesame": ("sesame", "tahini"),
    "sulfites": ("sulfites", "sulfur dioxide", "sodium sulfite", "potassium sulfite"),
    "mustard": ("mustard",),
    "celery": ("celery", "celeriac"),
    "lupin": ("lupin", "lupine"),
}

_DISEASES = {
    "diabetes": DiseaseRule(
        avoid=(
            "sugar",
            "glucose",
            "fructose",
            "sucrose",
            "high fructose corn syrup",
            "honey",
            "maple syrup",
            "agave",
        ),
        limit=(
            "carbohydrates",
            "refined flour",
            "white rice",
            "white bread",
            "pasta",
            "dextrose",
        ),
        short_term="May cause blood sugar spikes and difficulty managing glucose levels",
        long_term="Can worsen diabetes control and increase risk of complications",
    ),
    "hypertension": DiseaseRule(
        avoid=(
            "sodium",
            "salt",
            "monosodium glutamate",
            "sodium chloride",
            "sodium bicarbonate",
        ),
        limit=("processed foods", "canned foods", "pickled foods", "cured meats"),
        short_term="May increase blood pressure temporarily",
        long_term="Can worsen hypertension and increase cardiovascular risk",
    ),
    "heart disease": DiseaseRule(
        avoid=("trans fats", "hydrogenated oils", "partially hydrogenated oils"),
        limit=("saturated fats", "cholesterol", "sodium", "processed meats"),
        short_term="May affect cardiovascular function",
        long_term="Can increase risk of heart attacks and strokes",
    ),
    "kidney disease": DiseaseRule(
        avoid=("phosphorus", "potassium", "sodium"),
        limit=("protein", "dairy products", "nuts", "whole grains"),
        short_term="May strain kidney function",
        long_term="Can accelerate kidney damage and disease progression",
    ),
    "liver disease": DiseaseRule(
        avoid=("alcohol", "acetaminophen", "iron supplements"),
        limit=("sodium", "protein", "fats"),
        short_term="May stress liver function",
        long_term="Can worsen liver damage and impair detoxification",
    ),
    "celiac": DiseaseRule(
        avoid=(
            "gluten",
            "wheat",
            "barley",
            "rye",
            "oats",
            "spelt",
            "kamut",
            "triticale",
        ),
        limit=(),
        short_term="May cause digestive symptoms, bloating, and discomfort",
        long_term="Can damage intestinal lining and cause malabsorption",
    ),
    "lactose intolerance": DiseaseRule(
        avoid=("lactose", "milk", "dairy products"),
        limit=("cheese", "yogurt", "ice cream"),
        short_term="May cause digestive upset, bloating, and diarrhea",
        long_term="Continued consumption may worsen symptoms",
    ),
    "gout": DiseaseRule(
        avoid=("purines", "organ meats", "anchovies", "sardines", "beer"),
        limit=("red meat", "seafood", "alcohol", "fructose"),
        short_term="May trigger gout attacks and joint pain",
        long_term="Can increase frequency and severity of gout episodes",
    ),
}

_DRUGS = {
    "warfarin": DrugRule(
        avoid=("vitamin k", "leafy greens", "broccoli", "spinach", "kale"),
        consequence="May interfere with blood clotting medication effectiveness",
    ),
    "ace inhibitors": DrugRule(
        avoid=("potassium", "salt substitutes", "bananas", "oranges"),
        consequence="May cause dangerous potassium levels",
    ),
    "calcium channel blockers": DrugRule(
        avoid=("grapefruit", "grapefruit juice"),
        consequence="May increase drug concentration and side effects",
    ),
    "statins": DrugRule(
        avoid=("grapefruit", "grapefruit juice", "alcohol"),
        consequence="May increase risk of muscle damage and liver problems",
    ),
    "monoamine oxidase inhibitors": DrugRule(
        avoid=(
            "tyramine",
            "aged cheese",
            "cured meats",
            "fermented foods",
            "alcohol",
        ),
        consequence="May cause dangerous blood pressure spikes",
    ),
    "metformin": DrugRule(
        limit=("alcohol", "high carbohydrate foods"),
        consequence="May affect blood sugar control and increase side effects",
    ),
}

_SYMPTOM_TRIGGERS = {
    "headache": (
        "msg",
        "monosodium glutamate",
        "nitrates",
        "nitrites",
        "tyramine",
        "caffeine",
    ),
    "bloating": (
        "lactose",
        "beans",
        "cabbage",
        "broccoli",
        "carbonated",
        "artificial sweeteners",
    ),
    "heartburn": (
        "spicy",
        "acidic",
        "tomato",
        "citrus",
        "chocolate",
        "coffee",
        "alcohol",
    ),
    "nausea": ("greasy", "fried", "high fat", "spicy", "strong odors"),
    "stomach pain": ("lactose", "gluten", "spicy", "acidic", "high fiber"),
    "diarrhea": (
        "lactose",
        "artificial sweeteners",
        "high fat",
        "spicy",
        "caffeine",
    ),
    "constipation": ("low fiber", "processed", "dairy", "iron supplements"),
    "rash": ("food dyes", "preservatives", "artificial colors", "sulfites"),
}

# Per 100 g: grams for macros, milligrams for sodium, potassium, phosphorus.
_NUTRIENT_THRESHOLDS = {
    "sugar": 15.0,
    "sodium": 600.0,
    "carbohydrates": 60.0,
    "protein": 20.0,
    "fat": 20.0,
    "potassium": 300.0,
    "phosphorus": 200.0,
}

_SUGAR_TERMS = ("sugar", "glucose", "dextrose", "syrup")


def build_knowledge_base(  # noqa: PLR0913
    allergen_groups: Mapping[str, tuple[str, ...]] | None = None,
    diseases: Mapping[str, DiseaseRule] | None = None,
    drugs: Mapping[str, DrugRule] | None = None,
    symptom_triggers: Mapping[str, tuple[str, ...]] | None = None,
    nutrient_thresholds: Mapping[str, float] | None = None,
    sugar_terms: tuple[str, ...] | None = None,
) -> KnowledgeBase:
    """Build a knowledge base, falling back to the bundled tables."""
    return KnowledgeBase(
        allergen_groups=_freeze(
            _ALLERGEN_GROUPS if allergen_groups is None else allergen_groups
        ),
        diseases=_freeze(_DISEASES if diseases is None else diseases),
        drugs=_freeze(_DRUGS if drugs is None else drugs),
        symptom_triggers=_freeze(
            _SYMPTOM_TRIGGERS if symptom_triggers is None else symptom_triggers
        ),
        nutrient_thresholds=_freeze(
            _NUTRIENT_THRESHOLDS if nutrient_thresholds is None else nutrient_thresholds
        ),
        sugar_terms=_SUGAR_TERMS if sugar_terms is None else tuple(sugar_terms),
    )


@lru_cache(maxsize=1)
def default_knowledge_base() -> KnowledgeBase:
    """Return the process-wide knowledge base built from the bundled tables."""
    return build_knowledge_base()


def _freeze(table: Mapping[str, object]) -> Mapping:
    return MappingProxyType(
        {key.strip().lower(): value for key, value in table.items()}
    )
