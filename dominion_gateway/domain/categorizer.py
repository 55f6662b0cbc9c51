"""Keyword-based expense categorization with per-user overrides"""

from typing import Dict, List, Optional
from dominion_gateway.domain.models import Category, KeywordOverrides

# Matched as case-insensitive substrings; first category with a hit wins
DEFAULT_CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "GROCERIES": [
        "checkers", "pick n pay", "woolworths", "spar", "shoprite", "food lover",
        "makro", "game", "pnp", "clicks", "dischem", "dis-chem", "massmart",
    ],
    "TRANSPORT": [
        "uber", "bolt", "shell", "engen", "sasol", "bp ", "caltex", "petroport",
        "petrol", "fuel", "e-toll", "sanral", "aa ", "parking", "cartrack", "total ",
    ],
    "UTILITIES": [
        "eskom", "city of", "municipality", "water", "electricity", "telkom",
        "vodacom", "mtn", "cell c", "rain ", "fibre", "dstv", "multichoice", "afrihost",
    ],
    "ENTERTAINMENT": [
        "netflix", "spotify", "apple.com", "google", "youtube", "steam",
        "playstation", "xbox", "showmax", "ster-kinekor", "nu metro",
    ],
    "DINING": [
        "restaurant", "cafe", "coffee", "mcdonald", "kfc", "nando", "spur",
        "steers", "debonairs", "pizza", "wimpy", "mugg", "vida", "starbucks", "xpresso",
    ],
    "SHOPPING": [
        "takealot", "amazon", "shein", "zara", "h&m", "mr price", "edgars",
        "foschini", "truworths", "jet ", "ackermans", "pep ", "bash", "shoe city", "leroy merlin",
    ],
    "LIVING": [
        "discovery", "medscheme", "medical", "pharmacy", "doctor", "dentist",
        "hospital", "clinic", "netcare", "mediclinic", "medirite",
    ],
    "INSURANCE": [
        "insurance", "sanlam", "old mutual", "liberty", "momentum", "outsurance",
        "santam", "dialdirect", "budget insurance", "miway",
    ],
    "HOUSING": ["levies", "rent", "bond", "home loan"],
    "DEBT": ["loan", "repayment"],
}


def effective_keywords(overrides: Optional[KeywordOverrides] = None) -> Dict[str, List[str]]:
    """Defaults minus removed plus added, per category"""
    overrides = overrides or KeywordOverrides()
    result: Dict[str, List[str]] = {}
    for category, defaults in DEFAULT_CATEGORY_KEYWORDS.items():
        removed = set(overrides.removed.get(category, []))
        result[category] = [k for k in defaults if k not in removed] + list(overrides.added.get(category, []))

    # Custom keywords may target categories without defaults
    for category, added in overrides.added.items():
        if category not in result:
            result[category] = list(added)
    return result


def categorize(description: str, overrides: Optional[KeywordOverrides] = None) -> Category:
    lowered = description.lower()
    for category, keywords in effective_keywords(overrides).items():
        for keyword in keywords:
            if keyword.lower() in lowered:
                return Category(category)
    return Category.OTHER


def clean_overrides(overrides: KeywordOverrides) -> KeywordOverrides:
    """Drop categories whose keyword lists are empty"""
    return KeywordOverrides(
        added={c: list(k) for c, k in overrides.added.items() if k},
        removed={c: list(k) for c, k in overrides.removed.items() if k},
    )
