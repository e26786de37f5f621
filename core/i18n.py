"""Two-language (fr/en) strings for lobby placeholders and labels."""

from config import DISPLAY_LOCALE

_STRINGS: dict[str, dict[str, str]] = {
    "metar_server_error": {
        "fr": "METAR/LWIS indisponible (erreur serveur)",
        "en": "METAR/LWIS unavailable (server error)",
    },
    "metar_http_error": {
        "fr": "METAR/LWIS indisponible (code {status}) pour {station}",
        "en": "METAR/LWIS unavailable (code {status}) for {station}",
    },
    "taf_server_error": {
        "fr": "TAF indisponible (erreur serveur)",
        "en": "TAF unavailable (server error)",
    },
    "taf_http_error": {
        "fr": "TAF indisponible (code {status}) pour {station}",
        "en": "TAF unavailable (code {status}) for {station}",
    },
    "taf_not_available": {
        "fr": "TAF non disponible pour {station}",
        "en": "TAF not available for {station}",
    },
    "load_error": {
        "fr": "Erreur lors du chargement des données météo.",
        "en": "Error while loading weather data.",
    },
    "slide_weather": {
        "fr": "Météo (METAR / TAF / PIREPs)",
        "en": "Weather (METAR / TAF / PIREPs)",
    },
    "slide_circuits": {
        "fr": "Circuits CYJN",
        "en": "CYJN circuits",
    },
    "pirep_demo_suffix": {
        "fr": "(données démo)",
        "en": "(demo data)",
    },
}


def t(key: str, lang: str = "", **kwargs) -> str:
    """Return the translated string for key in lang, formatted with kwargs.

    Falls back to 'fr', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    text = entry.get(lang or DISPLAY_LOCALE) or entry.get("fr") or key
    return text.format(**kwargs) if kwargs else text
