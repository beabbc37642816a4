from ingestion.transformers.normalizer import StationNormalizer, StreamflowNormalizer

__all__ = [
    "StationNormalizer",
    "StreamflowNormalizer",
]
