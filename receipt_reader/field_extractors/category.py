"""Keyword based expense category inference."""
from __future__ import annotations

from typing import List, Optional, Tuple

# Order matters: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    (
        "Alimentación",
        ("supermercado", "mercado", "alimentación", "comida", "carrefour", "mercadona", "dia", "lidl", "aldi"),
    ),
    ("Restaurante", ("restaurante", "bar", "cafe", "cafeteria", "mcdonald", "burger", "pizza")),
    ("Farmacia", ("farmacia", "medicina", "medicamento", "salud")),
    ("Transporte", ("gasolina", "combustible", "metro", "bus", "taxi", "uber", "parking")),
    ("Ropa", ("moda", "ropa", "zara", "h&m", "tienda")),
    ("Hogar", ("ferreteria", "bricomart", "ikea", "decoración", "muebles")),
]

CATEGORIES = [label for label, _ in CATEGORY_KEYWORDS]


def infer_category(text: str) -> Optional[str]:
    """Return the first category whose keywords appear anywhere in ``text``."""

    lowered = text.lower()
    for label, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return label
    return None


__all__ = ["CATEGORIES", "CATEGORY_KEYWORDS", "infer_category"]
