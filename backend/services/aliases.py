"""Category and color alias tables.

Keys are normalized surface forms (English and Portuguese, singular and
plural; accented spellings fold onto their plain form); values are the
canonical tokens used in the catalog. Lookups are exact on the whole string.
"""

from __future__ import annotations

from types import MappingProxyType

from ..utils.text import normalize_text

_CATEGORY_GROUPS: dict[str, tuple[str, ...]] = {
    # Clothing
    "vestido": ("dress", "dresses", "vestido", "vestidos", "vest"),
    "camiseta": ("shirt", "tshirt", "t-shirt", "camiseta", "camisetas"),
    "biquini": ("bikini", "biquini", "biquinis"),
    "maio": ("swimsuit", "swimsuits", "maio", "maios", "maiô", "maiôs"),
    "short": ("short", "shorts"),
    "saia": ("skirt", "skirts", "saia", "saias"),
    "canga": ("beach towel", "towel", "beachtowel", "canga", "cangas"),
    # Footwear
    "sandalia": ("sandal", "sandals", "sandalia", "sandálias", "sandalias"),
    "chinelo": ("flip flop", "flip-flop", "flipflop", "flip", "chinelo", "chinelos"),
    # Accessories
    "sombrinha": ("umbrella", "beach umbrella", "beachumbrella", "sombrinha", "sombrinhas"),
    "bolsa": ("bag", "bags", "beach bag", "beachbag", "bolsa", "bolsas"),
    # Broad groups
    "praia": ("beachwear", "swimwear", "beach", "praia"),
    "roupas": ("clothing", "clothes", "roupas"),
    "calçados": ("shoes", "footwear", "calçados", "calcados"),
    "acessorios": ("accessories", "acessórios", "acessorios"),
    "novidades": ("new", "news", "novelty", "novelties", "novidades"),
}

CATEGORY_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {normalize_text(alias): canonical for canonical, aliases in _CATEGORY_GROUPS.items() for alias in aliases}
)

COLOR_ALIASES: MappingProxyType[str, str] = MappingProxyType(
    {
        # Basic colors
        "red": "Vermelho",
        "blue": "Azul",
        "green": "Verde",
        "yellow": "Amarelo",
        "black": "Preto",
        "white": "Branco",
        "pink": "Rosa",
        "purple": "Roxo",
        "orange": "Laranja",
        "brown": "Marrom",
        "gray": "Cinza",
        "grey": "Cinza",
        # Palette shades
        "coral": "Coral",
        "cinnamon": "Canela",
        "wine": "Vinho",
        "daffodil": "Narciso",
        "lime": "Lima",
        "moss": "Musgo",
        "pool": "Piscina",
        "marine": "Marine",
        "lilac": "Lilás",
        "beige": "Bege",
    }
)

CANONICAL_CATEGORIES = frozenset(CATEGORY_ALIASES.values())


def resolve_category(term: str) -> str | None:
    """Canonical category for an exact alias, else None."""
    return CATEGORY_ALIASES.get(term)


def resolve_color(term: str) -> str | None:
    """Canonical (localized) color for an exact English color name, else None."""
    return COLOR_ALIASES.get(term)
