from .tgftp_fetcher import TafNormalizer

__all__ = ["TafNormalizer"]
