from .cache import CachePort
from .catalog import CrossReferenceSearchPort, FeatureSearchPort, SuggestionSearchPort

__all__ = [
    "CachePort",
    "CrossReferenceSearchPort",
    "FeatureSearchPort",
    "SuggestionSearchPort",
]
