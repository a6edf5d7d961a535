"""Identifier slugging for cell labels"""

import re
import unicodedata


def slugify_label(label: str) -> str:
    """
    Derive a cell identifier from its label

    Lower-cases, strips accents and collapses every run of characters
    outside ``[a-z0-9]`` into a single underscore.

    Example:
        "Diamètre de la yourte" -> "diametre_de_la_yourte"
    """
    text = unicodedata.normalize("NFD", label.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"[^a-z0-9]+", "_", text)
    return text.strip("_")
