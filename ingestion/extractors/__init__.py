from ingestion.extractors.json_extractor import StationCatalogExtractor, read_json_document
from ingestion.extractors.streamflow_extractor import StreamflowExtractor

__all__ = [
    "StationCatalogExtractor",
    "StreamflowExtractor",
    "read_json_document",
]
