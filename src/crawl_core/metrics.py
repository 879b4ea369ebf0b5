from __future__ import annotations

from prometheus_client import Counter

# Segments
segments_opened_total = Counter(
    "crawl_segments_opened_total", "Total data segments opened for streaming"
)

# Records
records_streamed_total = Counter(
    "crawl_records_streamed_total", "Total segment records emitted by the streamer"
)

# Items
items_extracted_total = Counter(
    "crawl_items_extracted_total", "Total items emitted by the item extractor"
)

# Parser problems routed to the parse log
parse_problems_total = Counter(
    "crawl_parse_problems_total", "Parse problems reported by kind", labelnames=("kind",)
)
