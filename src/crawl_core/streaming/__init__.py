from .segment_index import SegmentIndex
from .streamer import Streamer, WarcParserStreamer
from .extractor import ItemExtractor, ExtractItems
from .wat import WatUrlExtractor, extract_wat_urls, Lookup, MISSING

__all__ = [
    "SegmentIndex",
    "Streamer",
    "WarcParserStreamer",
    "ItemExtractor",
    "ExtractItems",
    "WatUrlExtractor",
    "extract_wat_urls",
    "Lookup",
    "MISSING",
]
