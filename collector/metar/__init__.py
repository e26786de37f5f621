from .tgftp_fetcher import MetarNormalizer
from .field_parser import parse_metar, parse_sky_condition

__all__ = ["MetarNormalizer", "parse_metar", "parse_sky_condition"]
