from .results_repository import WordleResultsRepository, build_idempotency_key

__all__ = [
    "WordleResultsRepository",
    "build_idempotency_key",
]
