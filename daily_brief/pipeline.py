"""
Daily brief pipeline.

One invocation runs, in order:
1. Section collection and prompt assembly (feeds, markets, launches)
2. Brief generation with the OpenAI API
3. Email delivery

Nothing is kept between invocations. Collection problems degrade single
sections; generation or delivery failures fail the whole run and no email
is sent.
"""
import os
import time
from datetime import datetime, timezone

from daily_brief.brief.aggregator import build_prompt
from daily_brief.core.types import BriefRun, RunState
from daily_brief.email.sender import deliver_brief
from daily_brief.formatting.date_utils import brief_now, format_brief_date
from daily_brief.formatting.layout import wrap_document
from daily_brief.llm.summarize import summarize_brief
from daily_brief.logging_cfg.logger import (
    configure_logging,
    print_metrics_summary,
    reset_metrics,
    setup_logger,
    update_metrics
)

logger = setup_logger()


def save_brief_html(document: str, settings, now: datetime) -> str:
    """Write the brief to the output directory and return the file path."""
    os.makedirs(settings.output_dir, exist_ok=True)
    output_path = os.path.join(settings.output_dir, f"brief_{now.strftime('%Y-%m-%d')}.html")
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(wrap_document(document, date=format_brief_date(now)))
    logger.info(f"Brief HTML saved to {output_path}")
    return output_path


def run_daily_brief(settings, dry_run: bool = False) -> BriefRun:
    """Run one invocation and return its final state.

    Errors are recorded on the returned run rather than raised.
    """
    configure_logging(settings.log_level, settings.log_dir)
    run = BriefRun()
    run.state = RunState.RUNNING
    run.started_at = datetime.now(timezone.utc)
    start_time = time.time()
    reset_metrics()

    try:
        logger.info("--- Starting daily brief generation ---")
        prompt = build_prompt(settings)

        logger.info("Generating brief...")
        run.document = summarize_brief(prompt, settings)

        if dry_run:
            run.output_path = save_brief_html(run.document, settings, brief_now(settings.timezone))
            logger.info("Dry run: email not sent")
        else:
            logger.info("Brief generated, sending email...")
            run.message_id = deliver_brief(run.document, settings)

        run.state = RunState.SUCCEEDED
        logger.info("--- Daily brief finished ---")

    except Exception as e:
        run.state = RunState.FAILED
        run.error = e
        logger.error(f"Daily brief failed: {e}", exc_info=True)

    finally:
        run.finished_at = datetime.now(timezone.utc)
        update_metrics('processing_time', time.time() - start_time)
        logger.info(print_metrics_summary())

    return run
