"""Curated concept palettes (moods, nature, seasons, activities)."""

from __future__ import annotations

import re
from dataclasses import dataclass

from defaults.models import EnergyLevel, Mood
from utils.colors import RGB, hex_to_rgb


@dataclass(frozen=True)
class ConceptPalette:
    concept_id: str
    display_name: str
    colors: tuple[tuple[str, str], ...]  # (name, hex)
    keywords: frozenset[str] = frozenset()
    mood: Mood | None = None
    energy: EnergyLevel | None = None

    @property
    def rgb_values(self) -> tuple[RGB, ...]:
        return tuple(hex_to_rgb(h) for _name, h in self.colors)

    @property
    def color_names(self) -> tuple[str, ...]:
        return tuple(name for name, _hex in self.colors)


def _p(concept_id, display_name, keywords, mood, energy, *colors) -> ConceptPalette:
    return ConceptPalette(concept_id, display_name, tuple(colors),
                          frozenset(keywords), mood, energy)


M = Mood
E = EnergyLevel

PALETTES: tuple[ConceptPalette, ...] = (
    # Moods
    _p("cozy", "Cozy Cabin", {"cozy", "cabin", "snug", "homey", "hygge", "warm and cozy"},
       M.COZY, E.LOW,
       ("Amber Glow", "FFB347"), ("Candlelight", "FFD89B"),
       ("Burnt Sienna", "CC5500"), ("Soft Linen", "FFF4E0")),
    _p("romantic-blush", "Romantic Blush", {"romantic", "blush", "love", "intimate", "date night"},
       M.ROMANTIC, E.LOW,
       ("Rose Petal", "FF6B8A"), ("Blush Pink", "FFB6C1"), ("Champagne", "F7E7CE"),
       ("Soft Mauve", "D4A5A5"), ("Pearl White", "FFF5EE")),
    _p("zen", "Zen Garden", {"zen", "meditation", "mindful", "peaceful", "serene", "tranquil"},
       M.CALM, E.VERY_LOW,
       ("Sage Green", "87AE73"), ("Stone Gray", "B8B8AA"), ("Bamboo", "D4C5A9"),
       ("Still Water", "7FAABD")),
    _p("dreamy", "Dreamy Pastel", {"dreamy", "dream", "soft", "pastel", "cloud", "floating"},
       M.CALM, E.LOW,
       ("Cloud Lilac", "C8A2C8"), ("Sky Rose", "F4C2C2"), ("Powder Blue", "B0E0E6"),
       ("Vanilla Cream", "FFF8DC"), ("Mint Mist", "B2F0D1")),
    _p("sultry", "Sultry Night", {"sultry", "sensual", "seductive", "lounge"},
       M.ROMANTIC, E.LOW,
       ("Deep Wine", "722F37"), ("Burgundy Velvet", "800020"), ("Smoky Rose", "C08081"),
       ("Dark Plum", "4B0033")),
    _p("ethereal", "Ethereal Glow", {"ethereal", "angelic", "heavenly", "otherworldly"},
       M.MAGICAL, E.LOW,
       ("Moonbeam", "F0EDE5"), ("Ice Lavender", "E6E6FA"), ("Starlight Silver", "D0D0E0"),
       ("Opal White", "F8F4FF"), ("Pale Aqua", "BFE6E2")),
    _p("mysterious", "Mysterious Shadows", {"mysterious", "enigma", "gothic", "dark", "moody"},
       M.MYSTERIOUS, E.MEDIUM,
       ("Midnight Purple", "2E0854"), ("Dark Emerald", "004B49"),
       ("Obsidian Blue", "0D1B2A"), ("Blood Moon", "8B0000")),
    _p("vintage", "Vintage Charm", {"vintage", "retro", "antique", "nostalgic", "classic"},
       M.ELEGANT, E.LOW,
       ("Dusty Rose", "DCAE96"), ("Antique Gold", "CDA434"), ("Faded Olive", "8B8B6A"),
       ("Parchment", "F1E9D2"), ("Worn Copper", "B87333")),
    # Nature
    _p("aurora-borealis", "Aurora Borealis", {"aurora", "borealis", "northern lights", "arctic glow"},
       M.MAGICAL, E.MEDIUM,
       ("Emerald Wave", "00FF87"), ("Cosmic Teal", "00CED1"), ("Violet Arc", "8B5CF6"),
       ("Arctic Blue", "00B4D8"), ("Solar Pink", "FF6B9D")),
    _p("deep-sea", "Deep Sea", {"deep sea", "underwater", "abyss", "marine", "aquatic"},
       M.MYSTERIOUS, E.LOW,
       ("Abyssal Blue", "003B5C"), ("Bioluminescent", "00FFCC"), ("Deep Teal", "014D4E"),
       ("Jellyfish Glow", "7B68EE")),
    _p("mountain-mist", "Mountain Mist", {"mountain", "mist", "fog", "alpine", "summit"},
       M.CALM, E.VERY_LOW,
       ("Slate Peak", "708090"), ("Cloud Cover", "C8D0D4"), ("Pine Shadow", "4A6741"),
       ("Morning Frost", "E8EDF0")),
    _p("tropical-reef", "Tropical Reef", {"tropical", "reef", "coral", "island", "caribbean", "paradise"},
       M.PLAYFUL, E.MEDIUM,
       ("Coral Reef", "FF7F50"), ("Turquoise Lagoon", "40E0D0"), ("Tropical Lime", "32CD32"),
       ("Sea Foam", "98FB98"), ("Sunshine Yellow", "FFD700")),
    _p("cherry-blossom", "Cherry Blossom", {"cherry blossom", "sakura", "hanami", "blossom"},
       M.ELEGANT, E.LOW,
       ("Sakura Pink", "FFB7C5"), ("Petal White", "FFF0F5"), ("Branch Brown", "8B7355"),
       ("Blossom Blush", "FF9EAA")),
    _p("thunderstorm", "Thunderstorm", {"thunderstorm", "storm", "lightning", "thunder", "tempest"},
       M.DRAMATIC, E.HIGH,
       ("Storm Cloud", "2C3E50"), ("Lightning Flash", "F0E68C"), ("Electric Blue", "7DF9FF"),
       ("Thunder Gray", "4A4A4A")),
    # Seasons
    _p("autumn-harvest", "Autumn Harvest", {"autumn", "fall", "harvest", "pumpkin", "foliage", "leaves"},
       M.COZY, E.LOW,
       ("Maple Red", "C0392B"), ("Pumpkin Orange", "FF8C00"), ("Golden Leaf", "DAA520"),
       ("Forest Brown", "5D4037"), ("Harvest Gold", "F5C518")),
    _p("winter-frost", "Winter Frost", {"winter", "frost", "icy", "frozen", "snow", "cold"},
       M.ELEGANT, E.LOW,
       ("Ice Crystal", "E0F7FA"), ("Glacier Blue", "80DEEA"), ("Frost White", "F5F5F5"),
       ("Silver Ice", "C0C0C0"), ("Winter Violet", "9FA8DA")),
    _p("golden-hour", "Golden Hour", {"golden hour", "golden", "magic hour", "warm glow"},
       M.ROMANTIC, E.LOW,
       ("Honey Gold", "FFB300"), ("Amber Light", "FFCA28"), ("Peach Horizon", "FFAB91"),
       ("Rose Gold", "B76E79")),
    # Activities
    _p("movie-night", "Movie Night", {"movie", "cinema", "film", "theater", "popcorn", "movie night"},
       M.COZY, E.VERY_LOW,
       ("Screen Blue", "1A237E"), ("Dim Amber", "FFB74D"), ("Velvet Red", "8B0000"),
       ("Soft Charcoal", "37474F")),
    _p("dinner-party", "Dinner Party", {"dinner", "supper", "dinner party", "table setting", "feast"},
       M.ELEGANT, E.LOW,
       ("Candlelit Amber", "FFCC80"), ("Burgundy Wine", "6D1B2A"), ("Ivory Linen", "FFF8E1"),
       ("Aged Gold", "BFA95F")),
    _p("gaming", "Gaming Den", {"gaming", "game", "gamer", "esports", "video game", "game room"},
       M.ENERGETIC, E.HIGH,
       ("Neon Cyan", "00F0FF"), ("Electric Purple", "7C4DFF"), ("Toxic Green", "39FF14"),
       ("Hot Magenta", "FF00FF")),
    _p("neon-nights", "Neon Nights", {"neon", "cyberpunk", "synthwave", "retrowave", "vaporwave", "cyber"},
       M.ENERGETIC, E.HIGH,
       ("Hot Pink Neon", "FF1493"), ("Electric Blue", "00BFFF"), ("Acid Green", "39FF14"),
       ("UV Purple", "9400D3"), ("Laser Red", "FF073A")),
    _p("bohemian", "Bohemian", {"bohemian", "boho", "eclectic", "free spirit", "wanderlust"},
       M.PLAYFUL, E.MEDIUM,
       ("Terracotta", "E07A5F"), ("Mustard Gold", "E6B422"), ("Teal Dream", "3D8B8B"),
       ("Burnt Coral", "CD5C5C"), ("Sage", "81C784")),
)

WARM_WHITE_FALLBACK = _p(
    "warm-white", "Warm White", (), M.CALM, E.VERY_LOW,
    ("Warm White", "FFF4E0"), ("Soft Amber", "FFE0B2"), ("Natural White", "FFFAF0"),
)

_MULTI_WORD = sorted(
    ((kw, p) for p in PALETTES for kw in p.keywords if " " in kw),
    key=lambda item: len(item[0]),
    reverse=True,
)
_SINGLE_WORD = {kw: p for p in reversed(PALETTES) for kw in p.keywords if " " not in kw}


def find_for_query(text: str) -> ConceptPalette | None:
    """Find the palette for a free-form request.

    Multi-word keywords are checked first, longest first; then each word of
    the request in order against single-word keywords.
    """
    lowered = text.lower()
    for keyword, palette in _MULTI_WORD:
        if re.search(rf"\b{re.escape(keyword)}\b", lowered):
            return palette
    for word in re.findall(r"[a-z']+", lowered):
        palette = _SINGLE_WORD.get(word)
        if palette is not None:
            return palette
    return None


def find_for_mood(mood: Mood) -> ConceptPalette | None:
    """First palette whose suggested mood matches."""
    for palette in PALETTES:
        if palette.mood is mood:
            return palette
    return None
