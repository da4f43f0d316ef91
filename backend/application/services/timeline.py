"""
Timeline Service.

Progress upkeep for project timelines.
"""

import logging

from domain.shared.value_objects import Progress

logger = logging.getLogger(__name__)


def refresh_progress(timeline) -> Progress:
    """Set timeline progress to the average progress of its tasks."""
    progress = Progress.average(timeline.tasks.values_list('progress', flat=True))
    if timeline.progress != progress.percent:
        timeline.progress = progress.percent
        timeline.save(update_fields=['progress', 'updated_at'])
        logger.debug(f"Timeline {timeline.id} progress -> {progress}")
    return progress
