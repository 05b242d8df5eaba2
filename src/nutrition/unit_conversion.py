"""Unit-to-grams conversion for French cooking units.

Ingredient quantities are stored with French cooking units
("Kilogramme", "Cuillère à soupe", "Pièce", ...). This module converts
them to grams so per-100g macro data can be applied.

DESIGN DECISIONS:
- Accented and unaccented unit spellings are both direct keys; any other
  accent variant matches through an accent-stripped comparison
- "Pièce" is resolved from the ingredient name, longest fragment first
  (e.g. "citron vert" before "citron", "tomate cerise" before "tomate")
- Unknown pieces fall back to DEFAULT_PIECE_WEIGHT, unknown units to None
"""

import unicodedata
from typing import List, Optional, Tuple


# Grams per 1 unit. Volumes use water density.
UNIT_TO_GRAMS = {
    # Weight
    "Kilogramme": 1000.0,
    # Volume
    "Litre": 1000.0,
    # Spoons
    "Cuillere a soupe": 15.0,
    "Cuillère à soupe": 15.0,
    "Cuillere a cafe": 5.0,
    "Cuillère à café": 5.0,
    # Small units
    "Gousse": 5.0,
    "Bouquet": 25.0,
    "Brin": 2.0,
    "Pincee": 0.5,
    "Pincée": 0.5,
    "Noisette": 5.0,
    "Poignee": 30.0,
    "Poignée": 30.0,
    "Tranche": 30.0,
    "Boule": 60.0,
    # Misc
    "Centimetre": 5.0,
    "Centimètre": 5.0,
    "Sachet": 10.0,
    "Quartier": 30.0,
    "Portion": 100.0,
    "Leaf": 1.0,
}

PIECE_UNIT = "Piece"

# Lowercase, accent-stripped name fragments -> grams per piece.
PIECE_WEIGHTS_MAP = {
    # Eggs/dairy
    "oeuf": 55.0,
    "petit suisse": 60.0,
    "mozzarella": 125.0,
    "yaourt": 125.0,
    # Vegetables
    "oignon": 100.0,
    "echalote": 25.0,
    "tomate cerise": 15.0,
    "tomate": 130.0,
    "pomme de terre": 140.0,
    "carotte": 125.0,
    "courgette": 200.0,
    "aubergine": 300.0,
    "poivron": 150.0,
    "concombre": 200.0,
    "avocat": 200.0,
    "ail": 5.0,
    # Fruits
    "citron vert": 100.0,
    "citron": 120.0,
    "pomme": 150.0,
    "poire": 120.0,
    "orange": 200.0,
    "banane": 150.0,
    "abricot": 45.0,
    "peche": 150.0,
    "kiwi": 100.0,
    "mangue": 400.0,
    # Meat/other
    "escalope": 150.0,
    "filet": 150.0,
    "saucisse": 100.0,
    "tortilla": 50.0,
    "galette": 50.0,
}

# Sorted once, longest fragment first. sorted() is stable, so equal-length
# fragments keep table order.
PIECE_WEIGHTS: List[Tuple[str, float]] = sorted(
    PIECE_WEIGHTS_MAP.items(), key=lambda item: -len(item[0])
)

DEFAULT_PIECE_WEIGHT = 100.0


def strip_accents(text: str) -> str:
    """Remove diacritics via NFD decomposition ("Pièce" -> "Piece")."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def singularize(text: str) -> str:
    """Naive French singular: drop a trailing 's' from each word.

    "tomates cerises" -> "tomate cerise", "pommes de terre" -> "pomme de terre"
    """
    words = []
    for word in text.split():
        if len(word) > 1 and word.endswith("s"):
            word = word[:-1]
        words.append(word)
    return " ".join(words)


# Accent-stripped unit keys, for the secondary lookup pass
_STRIPPED_UNITS = [(strip_accents(key), factor) for key, factor in UNIT_TO_GRAMS.items()]


def piece_weight(ingredient_name: str) -> float:
    """Grams per piece for an ingredient name (DEFAULT_PIECE_WEIGHT if unknown)."""
    normalized = strip_accents(ingredient_name).lower()
    singular = singularize(normalized)

    for fragment, weight in PIECE_WEIGHTS:
        if fragment in normalized or fragment in singular:
            return weight

    return DEFAULT_PIECE_WEIGHT


def convert_to_grams(
    quantity: float,
    unit: Optional[str],
    ingredient_name: str,
) -> Optional[float]:
    """Convert an ingredient quantity+unit to grams.

    Args:
        quantity: Numeric quantity (e.g. 0.15, 2, 3)
        unit: French unit string (e.g. "Kilogramme", "Pièce"), or None
        ingredient_name: Ingredient name, used for piece lookups

    Returns:
        Weight in grams, or None if the unit is missing or unrecognized
    """
    if unit is None:
        return None

    normalized_unit = strip_accents(unit)

    if normalized_unit == PIECE_UNIT:
        return quantity * piece_weight(ingredient_name)

    if unit in UNIT_TO_GRAMS:
        return quantity * UNIT_TO_GRAMS[unit]

    for key, factor in _STRIPPED_UNITS:
        if key == normalized_unit:
            return quantity * factor

    return None
