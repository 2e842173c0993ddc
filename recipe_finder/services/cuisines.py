"""Static cuisine lookup tables for TheMealDB areas.

TheMealDB areas: American, Argentinian, Australian, British, Canadian,
Chinese, Croatian, Dutch, Egyptian, Filipino, French, Greek, Indian,
Irish, Italian, Jamaican, Japanese, Kenyan, Malaysian, Mexican,
Moroccan, Norwegian, Polish, Portuguese, Russian, Saudi Arabian,
Slovakian, Spanish, Syrian, Thai, Tunisian, Turkish, Ukrainian,
Uruguayan, Venezulan, Vietnamese
"""

from typing import Optional

# Search keyword (lowercase, no whitespace) -> area
AREA_KEYWORDS = {
    "italian": "Italian",
    "mexican": "Mexican",
    "chinese": "Chinese",
    "indian": "Indian",
    "japanese": "Japanese",
    "thai": "Thai",
    "french": "French",
    "greek": "Greek",
    "turkish": "Turkish",
    "british": "British",
    "american": "American",
    "vietnamese": "Vietnamese",
    "moroccan": "Moroccan",
    "spanish": "Spanish",
    "croatian": "Croatian",
    "polish": "Polish",
    "russian": "Russian",
    "malaysian": "Malaysian",
    "filipino": "Filipino",
    "jamaican": "Jamaican",
    "egyptian": "Egyptian",
    "irish": "Irish",
    "dutch": "Dutch",
    "canadian": "Canadian",
    "portuguese": "Portuguese",
    "kenyan": "Kenyan",
    "ukrainian": "Ukrainian",
    "norwegian": "Norwegian",
}

# Country code -> areas, best match first
COUNTRY_TO_AREAS = {
    # Exact matches
    "US": ["American"],
    "AR": ["Argentinian"],
    "AU": ["Australian"],
    "GB": ["British"],
    "CA": ["Canadian"],
    "CN": ["Chinese"],
    "HR": ["Croatian"],
    "NL": ["Dutch"],
    "EG": ["Egyptian"],
    "PH": ["Filipino"],
    "FR": ["French"],
    "GR": ["Greek"],
    "IN": ["Indian"],
    "IE": ["Irish"],
    "IT": ["Italian"],
    "JM": ["Jamaican"],
    "JP": ["Japanese"],
    "KE": ["Kenyan"],
    "MY": ["Malaysian"],
    "MX": ["Mexican"],
    "MA": ["Moroccan"],
    "NO": ["Norwegian"],
    "PL": ["Polish"],
    "PT": ["Portuguese"],
    "RU": ["Russian"],
    "SA": ["Saudi Arabian"],
    "SK": ["Slovakian"],
    "ES": ["Spanish"],
    "SY": ["Syrian"],
    "TH": ["Thai"],
    "TN": ["Tunisian"],
    "TR": ["Turkish"],
    "UA": ["Ukrainian"],
    "UY": ["Uruguayan"],
    "VE": ["Venezulan"],  # TheMealDB spelling
    "VN": ["Vietnamese"],

    # Balkans
    "RS": ["Croatian", "Turkish", "Greek"],
    "BA": ["Croatian", "Turkish"],
    "ME": ["Croatian", "Greek"],
    "MK": ["Croatian", "Turkish", "Greek"],
    "SI": ["Croatian"],
    "AL": ["Croatian", "Greek", "Turkish"],
    "XK": ["Croatian", "Turkish"],

    # DACH
    "DE": ["Dutch", "French", "Polish"],
    "AT": ["Dutch", "Croatian", "Polish"],
    "CH": ["French", "Italian", "Dutch"],

    # Nordics
    "SE": ["Norwegian", "British"],
    "DK": ["Norwegian", "Dutch"],
    "FI": ["Norwegian", "Russian"],
    "IS": ["Norwegian", "British"],

    # Other European
    "BE": ["Dutch", "French"],
    "LU": ["French", "Dutch"],
    "CZ": ["Slovakian", "Polish"],
    "HU": ["Croatian", "Polish"],
    "RO": ["Croatian", "Turkish", "Greek"],
    "BG": ["Turkish", "Greek", "Croatian"],
    "LT": ["Polish", "Russian"],
    "LV": ["Polish", "Russian"],
    "EE": ["Russian", "Norwegian"],

    # Middle East
    "LB": ["Syrian", "Turkish"],
    "JO": ["Syrian", "Egyptian"],
    "IQ": ["Turkish", "Syrian"],
    "IR": ["Turkish", "Indian"],
    "AE": ["Saudi Arabian", "Indian"],
    "QA": ["Saudi Arabian", "Indian"],
    "KW": ["Saudi Arabian", "Syrian"],
    "BH": ["Saudi Arabian"],
    "OM": ["Saudi Arabian", "Indian"],
    "YE": ["Saudi Arabian", "Egyptian"],
    "PS": ["Syrian", "Egyptian"],

    # Africa
    "NG": ["Kenyan", "Moroccan"],
    "GH": ["Kenyan"],
    "ZA": ["Kenyan", "Indian", "British"],
    "ET": ["Kenyan"],
    "TZ": ["Kenyan", "Indian"],
    "LY": ["Tunisian", "Egyptian"],
    "DZ": ["Moroccan", "Tunisian"],

    # Americas
    "BR": ["Argentinian", "Portuguese"],
    "CO": ["Mexican", "Venezulan"],
    "CL": ["Argentinian", "Mexican"],
    "PE": ["Mexican", "Argentinian"],
    "PR": ["Jamaican", "Mexican"],
    "CU": ["Jamaican", "Mexican"],

    # Asia
    "KR": ["Japanese", "Chinese"],
    "TW": ["Chinese", "Japanese"],
    "HK": ["Chinese"],
    "SG": ["Malaysian", "Chinese", "Indian"],
    "ID": ["Malaysian", "Indian"],
    "PK": ["Indian"],
    "BD": ["Indian"],
    "LK": ["Indian"],
    "NP": ["Indian"],
    "MM": ["Thai", "Indian"],
    "KH": ["Thai", "Vietnamese"],
    "LA": ["Thai", "Vietnamese"],

    # Oceania
    "NZ": ["Australian", "British"],
}

DEFAULT_AREAS = ["Italian", "Mexican", "Indian", "Chinese"]

FALLBACK_AREA = "Italian"


def area_for_term(term: str) -> Optional[str]:
    """Match a search term like "Italian" or " thai " to a TheMealDB area."""
    key = "".join(term.lower().split())
    return AREA_KEYWORDS.get(key)


def areas_for_country(country_code: Optional[str]) -> list[str]:
    """Areas for a country code, or the default list when unknown."""
    if not country_code:
        return list(DEFAULT_AREAS)
    return list(COUNTRY_TO_AREAS.get(country_code.upper(), DEFAULT_AREAS))
