"""Static question catalog keyed by product category.

Stands in for an AI question generator: every category maps to a fixed,
ordered question set, and a small table of follow-up rules adds one extra
question when a specific answer is given.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

BOOLEAN = "boolean"
TEXT = "text"
SELECT = "select"
QUESTION_KINDS = (BOOLEAN, TEXT, SELECT)

YES_NO = ("Yes", "No")
FALLBACK_CATEGORY = "Other"


@dataclass(frozen=True)
class Question:
    id: str
    prompt: str
    kind: str
    choices: tuple[str, ...] = ()
    placeholder: str | None = None
    help: str | None = None

    def __post_init__(self) -> None:
        if self.kind not in QUESTION_KINDS:
            raise ValueError(f"Unknown question kind: {self.kind}")
        if self.kind in (BOOLEAN, SELECT) and not self.choices:
            raise ValueError(f"Question {self.id} requires choices")
        if self.kind == TEXT and self.choices:
            raise ValueError(f"Text question {self.id} must not define choices")

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"id": self.id, "question": self.prompt, "type": self.kind}
        if self.choices:
            payload["choices"] = list(self.choices)
        if self.placeholder:
            payload["placeholder"] = self.placeholder
        if self.help:
            payload["description"] = self.help
        return payload


def _yes_no(question_id: str, prompt: str, help: str) -> Question:
    return Question(id=question_id, prompt=prompt, kind=BOOLEAN, choices=YES_NO, help=help)


_CATALOG: dict[str, tuple[Question, ...]] = {
    "Food": (
        _yes_no(
            "food_preservatives",
            "Does this product contain any artificial preservatives or chemical additives?",
            "Helps consumers identify products with natural ingredients",
        ),
        _yes_no(
            "food_organic",
            "Is this product certified organic by recognized certification bodies (USDA, EU Organic, etc.)?",
            "Indicates adherence to organic farming standards",
        ),
        Question(
            id="food_allergens",
            prompt="Please list all potential allergens present in this product (nuts, dairy, gluten, soy, eggs, shellfish, etc.)",
            kind=TEXT,
            placeholder="e.g., Contains: Milk, Soy. May contain traces of: Tree nuts",
            help="Critical information for consumers with food allergies or intolerances",
        ),
        Question(
            id="food_nutritional",
            prompt="What are the key nutritional highlights of this product?",
            kind=TEXT,
            placeholder="e.g., High in protein, Low in sugar, Rich in Omega-3",
            help="Helps health-conscious consumers make informed decisions",
        ),
        Question(
            id="food_expiry",
            prompt="What is the typical shelf life and recommended storage conditions?",
            kind=SELECT,
            choices=(
                "Less than 7 days (Highly Perishable)",
                "1-4 weeks (Perishable)",
                "1-6 months (Moderate Shelf Life)",
                "6-12 months (Long Shelf Life)",
                "Over 12 months (Extended Shelf Life)",
            ),
            help="Ensures proper storage and consumption timing",
        ),
        Question(
            id="food_packaging",
            prompt="What type of environmentally-conscious packaging is used for this product?",
            kind=SELECT,
            choices=(
                "100% Recyclable Plastic",
                "Glass (Reusable)",
                "Metal/Aluminum",
                "100% Biodegradable",
                "Compostable Paper/Cardboard",
                "Multi-Material (Partially Recyclable)",
            ),
            help="Supports sustainable consumption and proper waste management",
        ),
        Question(
            id="food_certifications",
            prompt="What quality certifications or standards does this product meet?",
            kind=TEXT,
            placeholder="e.g., FDA Approved, ISO 22000, HACCP, Kosher, Halal",
            help="Demonstrates compliance with food safety and quality standards",
        ),
    ),
    "Cosmetic": (
        _yes_no(
            "cosmetic_cruelty_free",
            "Is this product cruelty-free and not tested on animals (certified by PETA, Leaping Bunny, or similar)?",
            "Important for ethical consumers and animal welfare advocates",
        ),
        _yes_no(
            "cosmetic_parabens",
            "Does this product contain parabens, sulfates, or other controversial preservatives?",
            "Helps consumers avoid potentially harmful chemicals",
        ),
        _yes_no(
            "cosmetic_vegan",
            "Is this product 100% vegan with no animal-derived ingredients?",
            "Essential for vegan lifestyle consumers",
        ),
        Question(
            id="cosmetic_ingredients",
            prompt="What are the main active ingredients and their concentrations (if applicable)?",
            kind=TEXT,
            placeholder="e.g., 10% Niacinamide, 2% Hyaluronic Acid, Vitamin C Complex",
            help="Allows consumers to understand product efficacy",
        ),
        Question(
            id="cosmetic_skin_type",
            prompt="Which skin types and conditions is this product specifically formulated for?",
            kind=SELECT,
            choices=(
                "All Skin Types",
                "Dry/Dehydrated Skin",
                "Oily/Acne-Prone Skin",
                "Combination Skin",
                "Sensitive/Reactive Skin",
                "Mature/Aging Skin",
            ),
            help="Ensures appropriate product selection for individual needs",
        ),
        _yes_no(
            "cosmetic_dermatologist",
            "Is this product dermatologically tested and hypoallergenic?",
            "Provides assurance of safety and reduced allergy risk",
        ),
        Question(
            id="cosmetic_spf",
            prompt="Does this product contain SPF protection? If yes, what level?",
            kind=TEXT,
            placeholder="e.g., SPF 30, No SPF protection",
            help="Critical information for sun protection and daily skincare",
        ),
    ),
    "Electronics": (
        Question(
            id="electronics_warranty",
            prompt="What is the manufacturer warranty period and what does it cover?",
            kind=SELECT,
            choices=(
                "No Warranty",
                "3 Months Limited",
                "6 Months Limited",
                "1 Year Comprehensive",
                "2 Years Extended",
                "3+ Years Premium Coverage",
            ),
            help="Protects consumer investment and ensures product quality",
        ),
        Question(
            id="electronics_energy_rating",
            prompt="What is the official energy efficiency rating of this product?",
            kind=SELECT,
            choices=(
                "A+++ (Most Efficient)",
                "A++ (Very Efficient)",
                "A+ (Highly Efficient)",
                "A (Efficient)",
                "B (Moderate)",
                "C or Lower (Less Efficient)",
                "Not Rated/Not Applicable",
            ),
            help="Helps consumers estimate operating costs and environmental impact",
        ),
        _yes_no(
            "electronics_recyclable",
            "Is this product designed for easy recycling with clearly marked recyclable components?",
            "Supports circular economy and proper e-waste management",
        ),
        Question(
            id="electronics_certifications",
            prompt="What safety and quality certifications does this product hold?",
            kind=TEXT,
            placeholder="e.g., CE, FCC, RoHS, UL, Energy Star, ISO 9001",
            help="Demonstrates compliance with international safety standards",
        ),
        Question(
            id="electronics_battery",
            prompt="Does this product contain rechargeable or replaceable batteries?",
            kind=SELECT,
            choices=(
                "No Batteries",
                "Replaceable AA/AAA Batteries",
                "Replaceable Button Cells",
                "Built-in Rechargeable (Non-removable)",
                "Built-in Rechargeable (User-replaceable)",
            ),
            help="Important for maintenance and environmental disposal",
        ),
        Question(
            id="electronics_connectivity",
            prompt="What connectivity and compatibility features does this product offer?",
            kind=TEXT,
            placeholder="e.g., Wi-Fi 6, Bluetooth 5.0, USB-C, Compatible with iOS/Android",
            help="Ensures integration with existing devices and systems",
        ),
    ),
    "Clothing": (
        Question(
            id="clothing_material",
            prompt="What is the complete fabric composition and material breakdown?",
            kind=TEXT,
            placeholder="e.g., 95% Organic Cotton, 5% Elastane; Lining: 100% Recycled Polyester",
            help="Helps consumers understand comfort, durability, and care requirements",
        ),
        _yes_no(
            "clothing_sustainable",
            "Is this product made from certified sustainable or eco-friendly materials (GOTS, OEKO-TEX, etc.)?",
            "Supports environmentally conscious fashion choices",
        ),
        _yes_no(
            "clothing_ethical",
            "Is this product ethically produced with fair labor practices and transparent supply chain?",
            "Ensures worker welfare and responsible manufacturing",
        ),
        Question(
            id="clothing_care",
            prompt="What are the detailed care and maintenance instructions to ensure longevity?",
            kind=SELECT,
            choices=(
                "Machine Washable (Cold/Warm)",
                "Hand Wash Only (Delicate)",
                "Dry Clean Only (Professional)",
                "Special Care Required (See Label)",
                "No Special Care (Durable)",
            ),
            help="Helps maintain product quality and extend garment life",
        ),
        Question(
            id="clothing_origin",
            prompt="Where is this product manufactured and what is the country of origin?",
            kind=TEXT,
            placeholder="e.g., Made in Italy, Fabric from Turkey, Assembled in Portugal",
            help="Provides transparency about manufacturing location",
        ),
        Question(
            id="clothing_sizing",
            prompt="What sizing standard does this product follow and is it true-to-size?",
            kind=SELECT,
            choices=(
                "US Standard (True-to-size)",
                "European Sizing",
                "Asian Sizing (Runs Small)",
                "UK Sizing",
                "Oversized/Relaxed Fit",
                "Custom/Specialty Sizing",
            ),
            help="Helps customers select the correct size for best fit",
        ),
    ),
    FALLBACK_CATEGORY: (
        _yes_no(
            "default_recyclable",
            "Is this product recyclable or does it have a take-back/recycling program?",
            "Supports responsible end-of-life product disposal",
        ),
        _yes_no(
            "default_ethical",
            "Is this product ethically sourced with transparent supply chain practices?",
            "Ensures responsible sourcing and fair trade practices",
        ),
        Question(
            id="default_materials",
            prompt="What are the primary materials and components used in this product?",
            kind=TEXT,
            placeholder="e.g., Stainless steel frame, Bamboo handle, Silicone grip",
            help="Helps consumers understand product composition and quality",
        ),
        Question(
            id="default_durability",
            prompt="What is the expected product lifespan and durability rating?",
            kind=SELECT,
            choices=(
                "Light Use (1-2 years)",
                "Moderate Use (3-5 years)",
                "Heavy Use (5-10 years)",
                "Professional Grade (10+ years)",
                "Lifetime Durability",
            ),
            help="Helps consumers assess long-term value and quality",
        ),
        Question(
            id="default_sustainability",
            prompt="What sustainability initiatives or environmental certifications does this product have?",
            kind=TEXT,
            placeholder="e.g., Carbon-neutral shipping, B-Corp certified, 1% for the Planet member",
            help="Demonstrates commitment to environmental responsibility",
        ),
        Question(
            id="default_warranty",
            prompt="What warranty or guarantee is provided with this product?",
            kind=TEXT,
            placeholder="e.g., 30-day satisfaction guarantee, 2-year limited warranty",
            help="Provides consumer protection and quality assurance",
        ),
    ),
}

CATALOG = MappingProxyType(_CATALOG)


@dataclass(frozen=True)
class FollowUpRule:
    trigger_id: str
    trigger_value: str
    question: Question


FOLLOW_UP_RULES: tuple[FollowUpRule, ...] = (
    FollowUpRule(
        trigger_id="food_preservatives",
        trigger_value="Yes",
        question=Question(
            id="food_preservative_types",
            prompt="Which preservatives does it contain?",
            kind=TEXT,
            placeholder="e.g., Sodium benzoate, Potassium sorbate...",
        ),
    ),
    FollowUpRule(
        trigger_id="cosmetic_cruelty_free",
        trigger_value="No",
        question=Question(
            id="cosmetic_testing_details",
            prompt="What type of animal testing was conducted?",
            kind=TEXT,
            placeholder="Please provide details...",
        ),
    ),
    FollowUpRule(
        trigger_id="electronics_battery",
        trigger_value="Built-in Rechargeable (Non-removable)",
        question=Question(
            id="electronics_battery_type",
            prompt="What type of battery does it use?",
            kind=SELECT,
            choices=("Lithium-ion", "Alkaline", "Rechargeable", "Solar", "Other"),
        ),
    ),
)


def all_question_ids() -> list[str]:
    ids = [question.id for questions in CATALOG.values() for question in questions]
    ids.extend(rule.question.id for rule in FOLLOW_UP_RULES)
    return ids
