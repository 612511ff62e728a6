"""
Data Ingestion

Modules:
- models: Typed views over ScoreSaber player and score payloads
- scoresaber: ScoreSaber REST client
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "ScoreSaberClient":
        from src.ingestion.scoresaber import ScoreSaberClient
        return ScoreSaberClient
    if name == "FetchError":
        from src.ingestion.scoresaber import FetchError
        return FetchError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
