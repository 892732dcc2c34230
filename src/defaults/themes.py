"""Sports team colours and event/holiday themes matched from free text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from utils.colors import RGB, hex_to_rgb

# -- Sports teams --------------------------------------------------------------


@dataclass(frozen=True)
class SportsTeam:
    name: str
    league: str
    city: str
    colors: tuple[str, ...]
    nickname: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.city} {self.name}"

    @property
    def rgb_values(self) -> tuple[RGB, ...]:
        return tuple(hex_to_rgb(c) for c in self.colors)


def _t(name, league, city, *colors, nickname=None) -> SportsTeam:
    return SportsTeam(name, league, city, tuple(colors), nickname)


TEAMS: tuple[SportsTeam, ...] = (
    # NFL
    _t("Chiefs", "NFL", "Kansas City", "E31837", "FFB81C", nickname="KC"),
    _t("49ers", "NFL", "San Francisco", "AA0000", "B3995D", nickname="SF"),
    _t("Cowboys", "NFL", "Dallas", "003594", "869397"),
    _t("Eagles", "NFL", "Philadelphia", "004C54", "A5ACAF"),
    _t("Bills", "NFL", "Buffalo", "00338D", "C60C30"),
    _t("Dolphins", "NFL", "Miami", "008E97", "F58220"),
    _t("Patriots", "NFL", "New England", "002244", "C60C30"),
    _t("Jets", "NFL", "New York", "125740", "FFFFFF", nickname="NY"),
    _t("Ravens", "NFL", "Baltimore", "241773", "9E7C0C"),
    _t("Steelers", "NFL", "Pittsburgh", "FFB612", "101820"),
    _t("Bengals", "NFL", "Cincinnati", "FB4F14", "000000"),
    _t("Broncos", "NFL", "Denver", "FB4F14", "002244"),
    _t("Chargers", "NFL", "Los Angeles", "0080C6", "FFC20E", nickname="LA"),
    _t("Raiders", "NFL", "Las Vegas", "000000", "A5ACAF"),
    _t("Bears", "NFL", "Chicago", "0B162A", "C83803"),
    _t("Lions", "NFL", "Detroit", "0076B6", "B0B7BC"),
    _t("Packers", "NFL", "Green Bay", "203731", "FFB612"),
    _t("Vikings", "NFL", "Minnesota", "4F2683", "FFC62F"),
    _t("Seahawks", "NFL", "Seattle", "002244", "69BE28"),
    _t("Rams", "NFL", "Los Angeles", "003594", "FFA300"),
    _t("Giants", "NFL", "New York", "0B2265", "A71930"),
    # NBA
    _t("Lakers", "NBA", "Los Angeles", "552583", "FDB927", nickname="LA"),
    _t("Celtics", "NBA", "Boston", "007A33", "BA9653"),
    _t("Warriors", "NBA", "Golden State", "1D428A", "FFC72C"),
    _t("Bulls", "NBA", "Chicago", "CE1141", "000000"),
    _t("Heat", "NBA", "Miami", "98002E", "F9A01B"),
    _t("Knicks", "NBA", "New York", "006BB6", "F58426"),
    _t("Mavericks", "NBA", "Dallas", "00538C", "002B5E"),
    _t("Nuggets", "NBA", "Denver", "0E2240", "FEC524"),
    _t("Suns", "NBA", "Phoenix", "1D1160", "E56020"),
    # MLB
    _t("Royals", "MLB", "Kansas City", "004687", "BD9B60", nickname="KC"),
    _t("Yankees", "MLB", "New York", "003087", "E4002C", nickname="NY"),
    _t("Dodgers", "MLB", "Los Angeles", "005A9C", "EF3E42", nickname="LA"),
    _t("Cubs", "MLB", "Chicago", "0E3386", "CC3433"),
    _t("Cardinals", "MLB", "St. Louis", "C41E3A", "0C2340"),
    _t("Astros", "MLB", "Houston", "002D62", "EB6E1F"),
    # NHL / MLS
    _t("Blackhawks", "NHL", "Chicago", "CF0A2C", "000000"),
    _t("Bruins", "NHL", "Boston", "FFB81C", "000000"),
    _t("Penguins", "NHL", "Pittsburgh", "000000", "FCB514"),
    _t("Sporting KC", "MLS", "Kansas City", "91B0D5", "002F65"),
)


def find_team_in_query(text: str) -> SportsTeam | None:
    """Best-scoring team mentioned in text.

    Full display name beats city + name, which beats nickname + name, which
    beats the bare team name on a word boundary.
    """
    if not text:
        return None
    lowered = text.lower()
    best: tuple[int, SportsTeam] | None = None
    for team in TEAMS:
        name = team.name.lower()
        city = team.city.lower()
        score = 0
        if team.display_name.lower() in lowered:
            score = 100 + len(team.display_name)
        elif city in lowered and name in lowered:
            score = 80 + len(city) + len(name)
        elif team.nickname and team.nickname.lower() in lowered and name in lowered:
            score = 70 + len(name)
        elif re.search(rf"\b{re.escape(name)}\b", lowered):
            score = 50 + len(name)
        if score and (best is None or score > best[0]):
            best = (score, team)
    return best[1] if best else None


# -- Event and holiday themes ---------------------------------------------------


class EventContext(str, Enum):
    NEUTRAL = "neutral"
    PARTY = "party"
    ELEGANT = "elegant"
    ROMANTIC = "romantic"
    CELEBRATION = "celebration"
    SIMPLE = "simple"


@dataclass(frozen=True)
class ThemePattern:
    name: str
    colors: tuple[tuple[str, str], ...]  # (name, hex)
    effect_id: int
    effect_name: str
    speed: int = 0

    @property
    def is_static(self) -> bool:
        return self.effect_id == 0

    @property
    def rgb_values(self) -> tuple[RGB, ...]:
        return tuple(hex_to_rgb(h) for _n, h in self.colors)

    @property
    def color_names(self) -> tuple[str, ...]:
        return tuple(n for n, _h in self.colors)


@dataclass(frozen=True)
class EventTheme:
    """A theme with pattern variants ordered neutral, party, elegant, static."""

    id: str
    name: str
    patterns: tuple[ThemePattern, ...]

    def pattern_for(self, context: EventContext) -> ThemePattern:
        p = self.patterns

        def pick(predicate, fallback_index: int) -> ThemePattern:
            for pattern in p:
                if predicate(pattern):
                    return pattern
            return p[fallback_index] if len(p) > fallback_index else p[0]

        if context is EventContext.PARTY:
            return pick(lambda x: x.speed > 120 or x.effect_id in (52, 12, 41), 1)
        if context is EventContext.ELEGANT:
            return pick(lambda x: x.effect_id in (2, 43) or (x.speed < 80 and not x.is_static), 2)
        if context is EventContext.ROMANTIC:
            return pick(lambda x: x.effect_id == 2 or (x.speed < 60 and not x.is_static), 2)
        if context is EventContext.CELEBRATION:
            return pick(lambda x: x.effect_id in (43, 72) or 80 <= x.speed <= 140, 1)
        if context is EventContext.SIMPLE:
            return pick(lambda x: x.is_static, 3)
        return p[0]


def _pat(name, effect_id, effect_name, speed, *colors) -> ThemePattern:
    return ThemePattern(name, tuple(colors), effect_id, effect_name, speed)


WEDDING = EventTheme("wedding", "Wedding", (
    _pat("Wedding Elegance", 2, "Breathe", 50,
         ("Champagne", "F7E7CE"), ("Soft White", "FFFAFA"), ("Misty Rose", "FFE4E1")),
    _pat("Wedding Party", 20, "Sparkle", 140,
         ("Rose Gold", "B76E79"), ("White", "FFFFFF"), ("Gold", "FFD700")),
    _pat("Wedding Romance", 2, "Breathe", 30,
         ("Champagne", "F7E7CE"), ("Misty Rose", "FFE4E1"), ("Soft White", "FFFAFA")),
    _pat("Wedding Classic", 0, "Solid", 0, ("Pure White", "FFFFFF"), ("Champagne", "F7E7CE")),
))

BIRTHDAY = EventTheme("birthday", "Birthday", (
    _pat("Birthday Celebration", 17, "Twinkle", 100,
         ("Hot Pink", "FF69B4"), ("Turquoise", "00CED1"), ("Gold", "FFD700"), ("Purple", "9370DB")),
    _pat("Birthday Bash", 28, "Chase", 180,
         ("Hot Pink", "FF69B4"), ("Lime", "32CD32"), ("Sky Blue", "00BFFF")),
    _pat("Birthday Glow", 2, "Breathe", 60, ("Pink", "FFB6C1"), ("Gold", "FFD700")),
    _pat("Birthday Classic", 0, "Solid", 0, ("Hot Pink", "FF69B4"), ("Gold", "FFD700")),
))

BABY_SHOWER = EventTheme("baby_shower", "Baby Shower", (
    _pat("Baby Shower Pastels", 2, "Breathe", 50,
         ("Baby Pink", "FFC0CB"), ("Baby Blue", "89CFF0"), ("Mint", "98FF98")),
    _pat("Baby Shower Sparkle", 20, "Sparkle", 130, ("Baby Pink", "FFC0CB"), ("Baby Blue", "89CFF0")),
    _pat("Baby Shower Glow", 49, "Fairy", 40, ("Cream", "FFFDD0"), ("Baby Blue", "89CFF0")),
    _pat("Baby Shower Classic", 0, "Solid", 0, ("Baby Pink", "FFC0CB"), ("Baby Blue", "89CFF0")),
))

ANNIVERSARY = EventTheme("anniversary", "Anniversary", (
    _pat("Anniversary Glow", 2, "Breathe", 50, ("Ruby", "E0115F"), ("Gold", "FFD700")),
    _pat("Anniversary Toast", 20, "Sparkle", 130, ("Champagne", "F7E7CE"), ("Gold", "FFD700")),
    _pat("Anniversary Romance", 2, "Breathe", 30, ("Ruby", "E0115F"), ("Blush", "FFB6C1")),
    _pat("Anniversary Classic", 0, "Solid", 0, ("Ruby", "E0115F"), ("Champagne", "F7E7CE")),
))

GRADUATION = EventTheme("graduation", "Graduation", (
    _pat("Graduation Cheer", 17, "Twinkle", 100, ("Gold", "FFD700"), ("Black", "202020"), ("White", "FFFFFF")),
    _pat("Graduation Party", 52, "Fireworks Starburst", 160, ("Gold", "FFD700"), ("White", "FFFFFF")),
    _pat("Graduation Honors", 2, "Breathe", 50, ("Gold", "FFD700"), ("Ivory", "FFFFF0")),
    _pat("Graduation Classic", 0, "Solid", 0, ("Gold", "FFD700"), ("White", "FFFFFF")),
))

ENGAGEMENT = EventTheme("engagement", "Engagement", (
    _pat("Engagement Sparkle", 49, "Fairy", 60, ("Diamond", "F0F8FF"), ("Blush", "FFB6C1")),
    _pat("Engagement Party", 20, "Sparkle", 140, ("Rose Gold", "B76E79"), ("White", "FFFFFF")),
    _pat("Engagement Romance", 2, "Breathe", 30, ("Blush", "FFB6C1"), ("Champagne", "F7E7CE")),
    _pat("Engagement Classic", 0, "Solid", 0, ("Diamond", "F0F8FF"), ("Rose Gold", "B76E79")),
))

RETIREMENT = EventTheme("retirement", "Retirement", (
    _pat("Retirement Sunset", 95, "Flow", 60, ("Sunset Orange", "FF8C42"), ("Gold", "FFD700")),
    _pat("Retirement Party", 28, "Chase", 150, ("Gold", "FFD700"), ("Navy", "000080")),
    _pat("Retirement Glow", 2, "Breathe", 40, ("Gold", "FFD700"), ("Amber", "FFBF00")),
    _pat("Retirement Classic", 0, "Solid", 0, ("Gold", "FFD700"), ("Navy", "000080")),
))

HOUSEWARMING = EventTheme("housewarming", "Housewarming", (
    _pat("Housewarming Welcome", 2, "Breathe", 50, ("Warm White", "FFF4E0"), ("Amber", "FFBF00")),
    _pat("Housewarming Party", 17, "Twinkle", 130, ("Amber", "FFBF00"), ("Sage", "87AE73")),
    _pat("Housewarming Hearth", 88, "Candle Multi", 40, ("Candlelight", "FFD28E"), ("Amber", "FFBF00")),
    _pat("Housewarming Classic", 0, "Solid", 0, ("Warm White", "FFF4E0")),
))

PARTY = EventTheme("party", "Party", (
    _pat("Party Lights", 28, "Chase", 150, ("Magenta", "FF00FF"), ("Cyan", "00FFFF"), ("Yellow", "FFFF00")),
    _pat("Party Fireworks", 52, "Fireworks Starburst", 180, ("Red", "FF0000"), ("Gold", "FFD700"), ("Blue", "0000FF")),
    _pat("Cocktail Glow", 2, "Breathe", 60, ("Violet", "7F00FF"), ("Gold", "FFD700")),
    _pat("Party Classic", 0, "Solid", 0, ("Magenta", "FF00FF"), ("Cyan", "00FFFF")),
))

CHRISTMAS = EventTheme("christmas", "Christmas", (
    _pat("Classic Christmas", 17, "Twinkle", 90, ("Christmas Red", "FF0000"), ("Christmas Green", "00A650"), ("Warm White", "FFF4E0")),
    _pat("Christmas Chase", 28, "Chase", 150, ("Christmas Red", "FF0000"), ("Christmas Green", "00A650")),
    _pat("Silent Night", 2, "Breathe", 40, ("Warm White", "FFF4E0"), ("Gold", "FFD700")),
    _pat("Christmas Classic", 0, "Solid", 0, ("Christmas Red", "FF0000"), ("Christmas Green", "00A650")),
))

HALLOWEEN = EventTheme("halloween", "Halloween", (
    _pat("Classic Halloween", 42, "Halloween", 80, ("Pumpkin Orange", "FF7518"), ("Witch Purple", "6A0DAD"), ("Slime Green", "39FF14")),
    _pat("Haunted Chase", 28, "Chase", 160, ("Pumpkin Orange", "FF7518"), ("Witch Purple", "6A0DAD")),
    _pat("Candle Haunt", 38, "Fire", 60, ("Pumpkin Orange", "FF7518"), ("Blood Red", "8B0000")),
    _pat("Halloween Classic", 0, "Solid", 0, ("Pumpkin Orange", "FF7518"), ("Witch Purple", "6A0DAD")),
))

JULY_4TH = EventTheme("july4", "Fourth of July", (
    _pat("Stars and Stripes", 17, "Twinkle", 100, ("Red", "B22234"), ("White", "FFFFFF"), ("Blue", "3C3B6E")),
    _pat("Fireworks Finale", 52, "Fireworks Starburst", 180, ("Red", "B22234"), ("White", "FFFFFF"), ("Blue", "3C3B6E")),
    _pat("Liberty Glow", 2, "Breathe", 50, ("Red", "B22234"), ("Blue", "3C3B6E")),
    _pat("Patriotic Classic", 0, "Solid", 0, ("Red", "B22234"), ("White", "FFFFFF"), ("Blue", "3C3B6E")),
))

VALENTINES = EventTheme("valentines", "Valentine's Day", (
    _pat("Sweetheart", 2, "Breathe", 50, ("Valentine Red", "E0115F"), ("Pink", "FF69B4"), ("Blush", "FFB6C1")),
    _pat("Cupid's Chase", 28, "Chase", 140, ("Valentine Red", "E0115F"), ("Pink", "FF69B4")),
    _pat("Candlelit Love", 88, "Candle Multi", 40, ("Rose", "FF6B8A"), ("Candlelight", "FFD28E")),
    _pat("Valentine Classic", 0, "Solid", 0, ("Valentine Red", "E0115F"), ("Pink", "FF69B4")),
))

ST_PATRICKS = EventTheme("stpatricks", "St. Patrick's Day", (
    _pat("Lucky Shamrock", 17, "Twinkle", 100, ("Shamrock", "009A49"), ("Gold", "FFD700"), ("White", "FFFFFF")),
    _pat("Irish Jig", 28, "Chase", 160, ("Shamrock", "009A49"), ("Gold", "FFD700")),
    _pat("Emerald Glow", 2, "Breathe", 50, ("Emerald", "50C878"), ("Gold", "FFD700")),
    _pat("Shamrock Classic", 0, "Solid", 0, ("Shamrock", "009A49")),
))

THANKSGIVING = EventTheme("thanksgiving", "Thanksgiving", (
    _pat("Harvest Table", 38, "Fire", 60, ("Pumpkin", "FF8C00"), ("Maple", "C0392B"), ("Harvest Gold", "F5C518")),
    _pat("Harvest Dance", 28, "Chase", 130, ("Pumpkin", "FF8C00"), ("Harvest Gold", "F5C518")),
    _pat("Thankful Glow", 2, "Breathe", 40, ("Amber", "FFBF00"), ("Maple", "C0392B")),
    _pat("Harvest Classic", 0, "Solid", 0, ("Pumpkin", "FF8C00"), ("Harvest Gold", "F5C518")),
))

EASTER = EventTheme("easter", "Easter", (
    _pat("Easter Pastels", 17, "Twinkle", 80, ("Lilac", "C8A2C8"), ("Mint", "98FF98"), ("Butter", "FFF44F"), ("Pink", "FFB6C1")),
    _pat("Egg Hunt", 28, "Chase", 140, ("Lilac", "C8A2C8"), ("Mint", "98FF98"), ("Pink", "FFB6C1")),
    _pat("Spring Morning", 2, "Breathe", 50, ("Lilac", "C8A2C8"), ("Butter", "FFF44F")),
    _pat("Easter Classic", 0, "Solid", 0, ("Lilac", "C8A2C8"), ("Mint", "98FF98")),
))

NEW_YEAR = EventTheme("newyear", "New Year's Eve", (
    _pat("Midnight Countdown", 20, "Sparkle", 120, ("Gold", "FFD700"), ("Silver", "C0C0C0"), ("Midnight", "191970")),
    _pat("New Year Fireworks", 52, "Fireworks Starburst", 190, ("Gold", "FFD700"), ("Silver", "C0C0C0")),
    _pat("Champagne Toast", 2, "Breathe", 50, ("Champagne", "F7E7CE"), ("Gold", "FFD700")),
    _pat("New Year Classic", 0, "Solid", 0, ("Gold", "FFD700"), ("Silver", "C0C0C0")),
))

HOLIDAY = EventTheme("holiday", "Holiday", CHRISTMAS.patterns)

THEMES_BY_KEYWORD: dict[str, EventTheme] = {
    "wedding": WEDDING, "wed": WEDDING, "marriage": WEDDING, "bride": WEDDING,
    "groom": WEDDING, "nuptial": WEDDING, "bridal": WEDDING, "matrimony": WEDDING,
    "birthday": BIRTHDAY, "bday": BIRTHDAY,
    "babyshower": BABY_SHOWER, "baby": BABY_SHOWER, "shower": BABY_SHOWER,
    "infant": BABY_SHOWER, "newborn": BABY_SHOWER,
    "anniversary": ANNIVERSARY, "anniv": ANNIVERSARY,
    "graduation": GRADUATION, "grad": GRADUATION, "graduate": GRADUATION,
    "commencement": GRADUATION,
    "engagement": ENGAGEMENT, "engaged": ENGAGEMENT, "propose": ENGAGEMENT,
    "proposal": ENGAGEMENT,
    "retirement": RETIREMENT, "retire": RETIREMENT,
    "housewarming": HOUSEWARMING, "housewarm": HOUSEWARMING, "newhome": HOUSEWARMING,
    "holiday": HOLIDAY, "holidays": HOLIDAY,
    "party": PARTY, "celebrate": PARTY, "celebration": PARTY,
    "christmas": CHRISTMAS, "xmas": CHRISTMAS,
    "halloween": HALLOWEEN, "spooky": HALLOWEEN,
    "july": JULY_4TH, "patriotic": JULY_4TH, "independence": JULY_4TH,
    "valentine": VALENTINES, "valentines": VALENTINES,
    "patrick": ST_PATRICKS, "patricks": ST_PATRICKS, "stpatricks": ST_PATRICKS,
    "thanksgiving": THANKSGIVING,
    "easter": EASTER,
    "newyear": NEW_YEAR, "newyears": NEW_YEAR,
}

_CONTEXT_RULES: tuple[tuple[EventContext, tuple[str, ...]], ...] = (
    (EventContext.PARTY, ("party", "fun", "energetic", "dance", "bash", "wild", "crazy")),
    (EventContext.ELEGANT, ("elegant", "formal", "classy", "sophisticated", "upscale", "fancy", "gala")),
    (EventContext.ROMANTIC, ("romantic", "intimate", "cozy", "date")),
    (EventContext.SIMPLE, ("static", "solid", "simple", "still", "calm")),
    (EventContext.CELEBRATION, ("celebrat", "festive", "special", "occasion")),
)


@dataclass(frozen=True)
class EventThemeMatch:
    theme: EventTheme
    context: EventContext

    @property
    def pattern(self) -> ThemePattern:
        return self.theme.pattern_for(self.context)


def _normalize(text: str) -> str:
    text = re.sub(r"[^\w\s]", "", text.lower())
    return re.sub(r"\s+", " ", text).strip()


def detect_context(normalized: str) -> EventContext:
    for context, needles in _CONTEXT_RULES:
        if any(n in normalized for n in needles):
            return context
    return EventContext.NEUTRAL


def match_event_theme(text: str) -> EventThemeMatch | None:
    """Match a request to an event or holiday theme plus a context modifier.

    Exact word match first, then prefix overlap with keywords of at least 5
    characters ("weddings" -> "wedding", "birthd" -> "birthday"), then the whole phrase with spaces removed
    ("baby shower" -> "babyshower", "new year" -> "newyear").
    """
    normalized = _normalize(text)
    if not normalized:
        return None
    words = normalized.split(" ")

    theme = None
    for word in words:
        if word in THEMES_BY_KEYWORD:
            theme = THEMES_BY_KEYWORD[word]
            break

    if theme is None:
        for word in words:
            if len(word) < 5:
                continue
            for keyword, candidate in THEMES_BY_KEYWORD.items():
                if len(keyword) >= 5 and (word.startswith(keyword) or keyword.startswith(word)):
                    theme = candidate
                    break
            if theme is not None:
                break

    if theme is None:
        compact = normalized.replace(" ", "")
        theme = THEMES_BY_KEYWORD.get(compact)
        if theme is None:
            for keyword in ("babyshower", "newyears", "newyear", "stpatricks", "newhome"):
                if keyword in compact:
                    theme = THEMES_BY_KEYWORD[keyword]
                    break

    if theme is None:
        return None
    return EventThemeMatch(theme, detect_context(normalized))
