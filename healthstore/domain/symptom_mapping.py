# healthstore/domain/symptom_mapping.py
"""
Symptom keyword → canonical product names.

Names are compared to catalog titles by substring containment in both
directions, so "Iron Supplements" still finds a product titled "Iron Supplement".
Keys are lowercase; lookups are exact.
"""
from types import MappingProxyType
from typing import Mapping, Tuple

SYMPTOM_MAPPING: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    # Energy & fatigue
    "tired": ("Vitamin B Complex", "Iron Supplements", "Multivitamin"),
    "fatigue": ("Iron Supplement", "Vitamin B Complex", "Multivitamin"),
    "energy": ("Vitamin B Complex", "Iron Supplement", "Multivitamin"),
    "weak": ("Iron Supplement", "Vitamin B Complex", "Multivitamin"),
    "exhausted": ("Iron Supplement", "Vitamin B Complex"),

    # Bone & joint
    "bones": ("Calcium + Vitamin D3", "Glucosamine Joint Support"),
    "joint": ("Glucosamine Joint Support", "Turmeric Curcumin"),
    "arthritis": ("Glucosamine Joint Support", "Turmeric Curcumin"),
    "osteoporosis": ("Calcium + Vitamin D3",),
    "fracture": ("Calcium + Vitamin D3",),

    # Hair & skin
    "hair": ("Multivitamin", "Collagen Skin Health"),
    "skin": ("Collagen Skin Health", "Multivitamin"),
    "wrinkles": ("Collagen Skin Health",),
    "aging": ("Collagen Skin Health", "Multivitamin"),

    # Sleep & stress
    "sleep": ("Sleep Support Melatonin", "Magnesium Glycinate"),
    "insomnia": ("Sleep Support Melatonin", "Magnesium Glycinate"),
    "stress": ("Magnesium Glycinate", "Sleep Support Melatonin"),
    "anxiety": ("Magnesium Glycinate",),

    # Digestive
    "stomach": ("Probiotic Digestive Health",),
    "digestion": ("Probiotic Digestive Health",),
    "gut": ("Probiotic Digestive Health",),
    "bloating": ("Probiotic Digestive Health",),

    # Immune
    "cold": ("Immune System Booster",),
    "flu": ("Immune System Booster",),
    "immunity": ("Immune System Booster", "Multivitamin"),
    "infection": ("Immune System Booster",),

    # Heart & circulation
    "heart": ("Omega-3 Fish Oil",),
    "cardiovascular": ("Omega-3 Fish Oil",),
    "cholesterol": ("Omega-3 Fish Oil",),

    # Pain & inflammation
    "pain": ("Turmeric Curcumin", "Glucosamine Joint Support"),
    "inflammation": ("Turmeric Curcumin", "Omega-3 Fish Oil"),
    "swelling": ("Turmeric Curcumin",),

    # Blood & anemia
    "anemia": ("Iron Supplement",),
    "blood": ("Iron Supplement",),
    "hemoglobin": ("Iron Supplement",),

    # Muscle
    "muscle": ("Magnesium Glycinate", "Multivitamin"),
    "cramps": ("Magnesium Glycinate",),
    "spasms": ("Magnesium Glycinate",),
})

# Tag substring → display category, checked in order.
CATEGORY_MAP: Tuple[Tuple[str, str], ...] = (
    ("vitamin", "Vitamins"),
    ("mineral", "Minerals"),
    ("supplement", "Supplements"),
    ("probiotic", "Digestive Health"),
    ("omega", "Heart Health"),
    ("joint", "Joint Support"),
    ("sleep", "Sleep Support"),
    ("immune", "Immune Support"),
)
DEFAULT_CATEGORY = "Health Supplements"

# Ingredient phrases that must appear both in an AI reply and in a product's tags.
REPLY_TAG_TERMS: Tuple[str, ...] = (
    "vitamin c", "zinc", "iron", "calcium", "omega", "probiotic",
    "melatonin", "magnesium", "collagen", "turmeric", "immune",
)

FOLLOW_UP_QUESTIONS: Tuple[str, ...] = (
    "How long have you been experiencing these symptoms?",
    "Are these symptoms constant or do they come and go?",
    "Have you noticed any triggers that make these symptoms worse?",
    "Are you currently taking any medications or supplements?",
    "Do these symptoms affect your daily activities?",
)

# Query substring → search keywords; handles misspellings before asking the LLM.
DIRECT_SEARCH_MATCHES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("zink", ("zinc",)),
    ("zinc", ("zinc",)),
    ("vitamin c", ("vitamin c",)),
    ("iron", ("iron",)),
    ("calcium", ("calcium",)),
    ("magnesium", ("magnesium",)),
    ("omega", ("omega-3",)),
    ("omega-3", ("omega-3",)),
    ("omega 3", ("omega-3",)),
    ("probiotic", ("probiotics",)),
    ("probiotics", ("probiotics",)),
    ("collagen", ("collagen",)),
    ("turmeric", ("turmeric",)),
    ("melatonin", ("melatonin",)),
    ("glucosamine", ("joint pain", "arthritis")),
)
