import random
from abc import ABC, abstractmethod
from typing import Optional

from app.core.config import settings


class MetricSource(ABC):
    """Display-only figures that are not derived from stored activity."""

    @abstractmethod
    def course_progress(self) -> int:
        ...

    @abstractmethod
    def study_hours(self) -> int:
        ...


class RandomMetricSource(MetricSource):
    """Draws fresh values on every call, from inclusive ranges."""

    def __init__(
        self,
        progress_range=(settings.PROGRESS_MIN, settings.PROGRESS_MAX),
        study_hours_range=(settings.STUDY_HOURS_MIN, settings.STUDY_HOURS_MAX),
        rng: Optional[random.Random] = None,
    ):
        self.progress_range = progress_range
        self.study_hours_range = study_hours_range
        self.rng = rng or random.Random()

    def course_progress(self) -> int:
        return min(100, self.rng.randint(*self.progress_range))

    def study_hours(self) -> int:
        return self.rng.randint(*self.study_hours_range)


class FixedMetricSource(MetricSource):
    def __init__(self, progress: int = 80, study_hours: int = 40):
        self.progress = progress
        self.hours = study_hours

    def course_progress(self) -> int:
        return self.progress

    def study_hours(self) -> int:
        return self.hours
