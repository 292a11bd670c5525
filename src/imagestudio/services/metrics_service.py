"""Metrics service for tracking generation metrics across calls."""

import logging
from typing import Any

from imagestudio.models.metrics import GenerationMetrics

logger = logging.getLogger(__name__)


class MetricsService:
    """In-memory collector for generation metrics."""

    def __init__(self):
        self._metrics: list[GenerationMetrics] = []

    def record(self, metrics: GenerationMetrics) -> None:
        """Record a generation metrics object."""
        self._metrics.append(metrics)
        logger.debug(
            f"Recorded generation metrics: duration={metrics.duration_ms}ms, "
            f"images={metrics.image_count}, attempts={metrics.attempt_count}"
        )

    def summary(self) -> dict[str, Any]:
        """Get a summary of recorded metrics."""
        if not self._metrics:
            return {
                "count": 0,
                "total_duration_ms": 0,
                "total_images": 0,
                "avg_duration_ms": 0,
            }

        total_duration = sum(m.duration_ms for m in self._metrics)

        return {
            "count": len(self._metrics),
            "total_duration_ms": total_duration,
            "total_images": sum(m.image_count for m in self._metrics),
            "avg_duration_ms": total_duration / len(self._metrics),
        }
