"""Logging package exports."""
from daily_brief.logging_cfg.logger import (
    configure_logging,
    print_metrics_summary,
    reset_metrics,
    setup_logger,
    update_metrics
)

__all__ = [
    'configure_logging',
    'print_metrics_summary',
    'reset_metrics',
    'setup_logger',
    'update_metrics'
]
