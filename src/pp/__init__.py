"""
PP Re-ranking

Modules:
- aggregator: Weighted PP recomputation with map-author exclusion
- reconciler: Re-ranking and rank-delta computation
- report: Console report rendering
- engine: End-to-end batch pipeline
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "aggregate_scores":
        from src.pp.aggregator import aggregate_scores
        return aggregate_scores
    if name == "reconcile":
        from src.pp.reconciler import reconcile
        return reconcile
    if name == "run_report":
        from src.pp.engine import run_report
        return run_report
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
