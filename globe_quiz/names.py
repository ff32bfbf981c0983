import re
from types import MappingProxyType

# Keys are in normalize() form. Values are the NAME_EN strings of the
# Natural Earth admin-0 countries, which is what canonical_name() returns.
# A value must never itself be a key pointing somewhere else.
NAME_ALIASES = MappingProxyType({
    "usa": "United States of America",
    "us": "United States of America",
    "united states": "United States of America",
    "america": "United States of America",
    "uk": "United Kingdom",
    "great britain": "United Kingdom",
    "britain": "United Kingdom",
    "the gambia": "The Gambia",
    "congo": "Republic of the Congo",
    "congo-brazzaville": "Republic of the Congo",
    "drc": "Democratic Republic of the Congo",
    "dr congo": "Democratic Republic of the Congo",
    "congo-kinshasa": "Democratic Republic of the Congo",
    "côte d'ivoire": "Ivory Coast",
    "cote d'ivoire": "Ivory Coast",
    "vatican": "Vatican City",
    "holy see": "Vatican City",
    "republic of korea": "South Korea",
    "dprk": "North Korea",
    "russian federation": "Russia",
    "lao pdr": "Laos",
    "united republic of tanzania": "Tanzania",
    "brunei darussalam": "Brunei",
    "czechia": "Czech Republic",
    "uae": "United Arab Emirates",
    "png": "Papua New Guinea",
    "car": "Central African Republic",
    "bosnia": "Bosnia and Herzegovina",
    "timor-leste": "East Timor",
    "burma": "Myanmar",
    "swaziland": "eSwatini",
})

_WHITESPACE = re.compile(r"\s+")
_ARTICLE = "the "


def normalize(raw):
    """Lower-case, trim and collapse whitespace runs to one space."""
    return _WHITESPACE.sub(" ", raw.strip().lower())


def normalize_canonical(name):
    # also drop a leading "the": "The Bahamas" == "Bahamas"
    n = normalize(name)
    if n.startswith(_ARTICLE):
        n = n[len(_ARTICLE):]
    return n


def resolve_alias(raw):
    """Canonical name for a known alias, else the input unchanged."""
    return NAME_ALIASES.get(normalize(raw), raw)


def canonical_name(feature):
    name = getattr(feature, "name_en", None) or getattr(feature, "admin", None) or ""
    return name.strip()
