"""
Services package - Translation pipeline and supporting modules.
"""

from . import (
    batch_scheduler,
    diff_selector,
    i18n_store,
    languages,
    pipeline,
    rate_limiter,
    token_protector,
    tree_merger,
    tree_walker,
)

__all__ = [
    "batch_scheduler",
    "diff_selector",
    "i18n_store",
    "languages",
    "pipeline",
    "rate_limiter",
    "token_protector",
    "tree_merger",
    "tree_walker",
]
