"""Ingredient name normalization.

A free-text ingredient name is reduced to a canonical identity string by a
fixed pipeline of pure string transforms. Two names that refer to the same
grocery product should come out identical ("Fresh Minced Garlic", "garlic
cloves" and "garlic" all become "garlic").
"""

from collections.abc import Callable

from recipeclub.normalize.units import normalize_unit

Rule = tuple[Callable[[str], bool], Callable[[str], str]]

# =============================================================================
# Vocabulary
# =============================================================================

# Leading words that describe preparation or size, not the product
COSMETIC_ADJECTIVES: frozenset[str] = frozenset(
    {
        "fresh",
        "freshly",
        "dried",
        "minced",
        "diced",
        "chopped",
        "sliced",
        "grated",
        "shredded",
        "toasted",
        "roasted",
        "raw",
        "cooked",
        "frozen",
        "canned",
        "organic",
        "boneless",
        "skinless",
        "thinly",
        "finely",
        "roughly",
        "coarsely",
        "cold",
        "warm",
        "large",
        "small",
        "medium",
        "halved",
        "quartered",
        "peeled",
        "deseeded",
        "seeded",
        "trimmed",
        "unsalted",
        "unsweetened",
        "reduced-sodium",
        "low-sodium",
    }
)

# Household unit words that sometimes leak into the name ("garlic clove")
NAME_UNIT_WORDS: frozenset[str] = frozenset(
    {"head", "bunch", "stalk", "clove", "sprig", "ear", "strip", "slice", "piece", "rib"}
)

# Names where the trailing unit word is the product itself
UNIT_WORD_PRODUCTS: frozenset[str] = frozenset(
    {"short rib", "spare rib", "baby back rib", "pork rib", "beef rib", "prime rib"}
)

# Whole-word spelling variants, applied inside compounds
TOKEN_ALIASES: dict[str, str] = {
    "chilli": "chili",
    "chile": "chili",
    "chillies": "chili",
    "chilies": "chili",
    "chiles": "chili",
    "yoghurt": "yogurt",
    "tumeric": "turmeric",
}

# Phrase aliases, matched against the whole name or its trailing words.
# Order matters: later entries see the output of earlier ones.
INGREDIENT_ALIASES: dict[str, str] = {
    "corn starch": "cornstarch",
    "soy bean": "soybean",
    "green onion": "scallion",
    "spring onion": "scallion",
    "scallion green": "scallion",
    "green onion top": "scallion",
    "sea salt": "salt",
    "kosher salt": "salt",
    "table salt": "salt",
    "extra virgin olive oil": "olive oil",
    "extra-virgin olive oil": "olive oil",
    "black pepper": "pepper",
    "white pepper": "pepper",
    "ground pepper": "pepper",
    "boston lettuce": "butter lettuce",
    "garlic clove": "garlic",
    "bread crumb": "breadcrumbs",
    "breadcrumb": "breadcrumbs",
    "red pepper flake": "red pepper flakes",
    "all-purpose flour": "flour",
    "all purpose flour": "flour",
    "yellow onion": "onion",
    "sweet corn": "corn",
    "heavy whipping cream": "heavy cream",
    "cilantro leaf": "cilantro",
    "coriander leaf": "cilantro",
    "flat-leaf parsley": "parsley",
    "white sugar": "sugar",
    "granulated sugar": "sugar",
    "beef mince": "ground beef",
    "lamb mince": "ground lamb",
    "tahini paste": "tahini",
    "dark brown sugar": "brown sugar",
    "jalapeno pepper": "jalapeno",
    "star anise pod": "star anise",
    "chicken breast half": "chicken breast",
    "white rice": "rice",
    "confectioners sugar": "powdered sugar",
    "confectioners' sugar": "powdered sugar",
    "dry white wine": "white wine",
}

# Untyped oils; exact match only so "olive oil" and "sesame oil" survive
EXACT_ALIASES: dict[str, str] = {
    "oil": "vegetable oil",
    "cooking oil": "vegetable oil",
    "neutral oil": "vegetable oil",
}


# =============================================================================
# Pipeline Steps
# =============================================================================


def _apply_first(value: str, rules: list[Rule]) -> str:
    """Apply the transform of the first rule whose predicate matches."""
    for predicate, transform in rules:
        if predicate(value):
            return transform(value)
    return value


def _clean(name: str) -> str:
    return " ".join(name.lower().split())


def _strip_leading_adjectives(name: str) -> str:
    words = name.split()
    while len(words) > 1 and words[0] in COSMETIC_ADJECTIVES:
        words = words[1:]
    return " ".join(words)


def _strip_trailing_unit_word(name: str) -> str:
    words = name.split()
    if len(words) < 2:
        return name
    unit = normalize_unit(words[-1])
    if unit not in NAME_UNIT_WORDS:
        return name
    candidate = " ".join(words[:-1] + [unit])
    if any(candidate == p or candidate.endswith(f" {p}") for p in UNIT_WORD_PRODUCTS):
        return name
    return " ".join(words[:-1])


def _replace_suffix(name: str, alias: str, canonical: str) -> str:
    if name == alias:
        return canonical
    if name.endswith(f" {alias}"):
        return name[: -len(alias)] + canonical
    return name


def _apply_aliases(name: str) -> str:
    name = " ".join(TOKEN_ALIASES.get(word, word) for word in name.split())

    for alias, canonical in INGREDIENT_ALIASES.items():
        name = _replace_suffix(name, alias, canonical)

    # "<x> broth" is sold next to "<x> stock"
    if name.endswith(" broth"):
        name = name[: -len("broth")] + "stock"

    return EXACT_ALIASES.get(name, name)


SINGULAR_RULES: list[Rule] = [
    (lambda s: s.endswith("leaves"), lambda s: s[: -len("leaves")] + "leaf"),
    (lambda s: s.endswith("ies") and len(s) > 4, lambda s: s[:-3] + "y"),
    # -ses, -ches, -shes, -kes, -ves fall through to the plain -s rule
    (
        lambda s: s.endswith("es")
        and len(s) > 4
        and not s.endswith(("ses", "ches", "shes", "kes", "ves")),
        lambda s: s[:-2],
    ),
    (
        lambda s: s.endswith("s") and not s.endswith(("ss", "us")) and len(s) > 3,
        lambda s: s[:-1],
    ),
]


def singularize(name: str) -> str:
    """Reduce a plural ingredient name to its singular form."""
    return _apply_first(name, SINGULAR_RULES)


NAME_PIPELINE: tuple[Callable[[str], str], ...] = (
    _clean,
    _strip_leading_adjectives,
    _strip_trailing_unit_word,
    _apply_aliases,
    singularize,
    _apply_aliases,
)


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name for grouping.

    - Lowercase, collapse whitespace
    - Strip leading preparation adjectives (identity words like "crushed",
      "ground" and "whole" are kept)
    - Strip a trailing unit word ("celery stalk" -> "celery")
    - Apply synonym aliases, singularize, apply aliases again
    """
    if not name:
        return ""
    for step in NAME_PIPELINE:
        name = step(name)
    return name
