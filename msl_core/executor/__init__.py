from msl_core.executor.session import Page, SessionState
from msl_core.executor.media_filter import DestinationResolver, filter_media, matches_filter
from msl_core.executor.msl_executor import (
    MSLExecutor,
    ExecutionReport,
    evaluate_value,
    run_script,
)

__all__ = [
    'Page',
    'SessionState',
    'DestinationResolver',
    'filter_media',
    'matches_filter',
    'MSLExecutor',
    'ExecutionReport',
    'evaluate_value',
    'run_script',
]
