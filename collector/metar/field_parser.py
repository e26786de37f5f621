"""
Decode display fields from a raw METAR line.

Key rule:
- Each field is found by scanning tokens for the first one matching its
  pattern, not by position. Group order varies between stations and any
  group may be missing; a missing group only leaves its own field empty.
- Sky layers are the exception: every matching token is kept, in order.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from core.models import ParsedMetar, SkyCover, SkyLayer


_WIND_DIR_RE = re.compile(r"^(\d{3})")
_WIND_SPEED_RE = re.compile(r"(\d{2,3})KT$")
_VISIBILITY_RE = re.compile(r"^(\d*\.?\d+)SM$")
_TEMP_SIDE_RE = re.compile(r"^(M?)(\d+)$")
_ALTIMETER_RE = re.compile(r"^A(\d{4})$")
_SKY_RE = re.compile(r"^(FEW|SCT|BKN|OVC)(\d{3})")
_DIGIT_RE = re.compile(r"\d")


def _first(tokens: List[str], predicate: Callable[[str], bool]) -> Optional[str]:
    for token in tokens:
        if predicate(token):
            return token
    return None


def _decode_metar_signed(part: Optional[str]) -> Optional[int]:
    # M05 -> -5
    if not part:
        return None
    m = _TEMP_SIDE_RE.match(part)
    if not m:
        return None
    value = int(m.group(2))
    return -value if m.group(1) else value


def _apply_wind(result: ParsedMetar, token: str) -> None:
    if not token.startswith("VRB"):
        m = _WIND_DIR_RE.match(token)
        if m:
            result.wind_dir_degrees = int(m.group(1))
    speed = _WIND_SPEED_RE.search(token)
    if speed:
        result.wind_speed_kt = int(speed.group(1))


def _apply_visibility(result: ParsedMetar, token: str) -> None:
    # Plain decimals only; 1/2SM, NANSM and the like leave visibility empty.
    m = _VISIBILITY_RE.match(token)
    if m:
        result.visibility_statute_mi = float(m.group(1))


def _apply_temperature(result: ParsedMetar, token: str) -> None:
    temp_part, _, dewp_part = token.partition("/")
    result.temp_c = _decode_metar_signed(temp_part)
    result.dewpoint_c = _decode_metar_signed(dewp_part)


def _apply_altimeter(result: ParsedMetar, token: str) -> None:
    inches = int(_ALTIMETER_RE.match(token).group(1))
    result.altim_in_hg = f"{inches / 100:.2f}"


# (predicate, extractor) per single-valued field; first matching token wins.
_FIELD_RULES = (
    (lambda tok: tok.endswith("KT"), _apply_wind),
    (lambda tok: tok.endswith("SM"), _apply_visibility),
    (lambda tok: "/" in tok and bool(_DIGIT_RE.search(tok)), _apply_temperature),
    (lambda tok: bool(_ALTIMETER_RE.match(tok)), _apply_altimeter),
)


def parse_sky_condition(tokens: List[str]) -> List[SkyLayer]:
    """Every FEW/SCT/BKN/OVC layer in token order. Cloud-type suffixes are ignored."""
    layers: List[SkyLayer] = []
    for token in tokens:
        m = _SKY_RE.match(token)
        if m:
            layers.append(SkyLayer(sky_cover=SkyCover(m.group(1)), cloud_base_ft_agl=int(m.group(2)) * 100))
    return layers


def parse_metar(raw_text: Optional[str], observation_time: Optional[str] = None) -> ParsedMetar:
    """
    Parse a raw METAR line into display fields.

    Never raises; unmatched groups stay None.
    """
    result = ParsedMetar(raw_text=raw_text, observation_time=observation_time)
    raw = (raw_text or "").strip()
    if not raw:
        return result

    tokens = raw.split()
    for predicate, apply in _FIELD_RULES:
        token = _first(tokens, predicate)
        if token is not None:
            apply(result, token)

    result.sky_condition = parse_sky_condition(tokens)
    return result
