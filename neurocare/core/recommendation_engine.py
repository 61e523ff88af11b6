"""
Rule-based therapy recommendations.

Maps each past session to a suggested vibration frequency and session
length for the next session, with a short justification. Pure and
deterministic: no I/O, no randomness, input is never mutated.

Dependencies: neurocare.models
System role: Recommendation business logic
"""

import logging
from collections.abc import Iterable

from neurocare.core.formatting import format_session_date
from neurocare.models.citation import Citation
from neurocare.models.recommendation import RecommendationReport, SessionRecommendation
from neurocare.models.session import SessionRecord

logger = logging.getLogger(__name__)

MIN_FREQUENCY_HZ = 40
MAX_FREQUENCY_HZ = 166
DEFAULT_DURATION_MIN = 15

JUSTIFICATION_CIRCULATORY_BALANCE = (
    "Elevated heart rate detected; frequency adjusted to support circulatory "
    "balance and avoid overstimulation."
)
JUSTIFICATION_HEAT_BUILDUP = (
    "Skin temperature ran above 37.5°C; settings chosen to minimise heat "
    "build-up during the next session."
)
JUSTIFICATION_FREQUENCY_COUNTERBALANCE = (
    "High vibration intensity was used; a lower frequency counterbalances "
    "the intensity to keep stimulation comfortable."
)
JUSTIFICATION_DEFAULT = (
    "Standard frequency band to stimulate peripheral circulation and "
    "provide neuropathic pain relief."
)


class RecommendationEngine:
    """
    Session history to recommendation converter.

    Sessions are ranked newest first; rank 1 is the most recent session.

    Example:
        >>> engine = RecommendationEngine()
        >>> report = engine.build_report(sessions)
        >>> report.recommendations[0].frequency
        150
    """

    CITATIONS: tuple[Citation, ...] = (
        Citation(
            title="Vibration therapy for peripheral neuropathy: frequency-dependent effects",
            reference="NeuroCare clinical reference library, entry VT-01",
        ),
        Citation(
            title="Local vibration and cutaneous blood flow in diabetic neuropathy",
            reference="NeuroCare clinical reference library, entry VT-02",
        ),
        Citation(
            title="Session dosing guidance for home vibrotactile therapy",
            reference="NeuroCare clinical reference library, entry VT-03",
        ),
    )

    def generate(self, sessions: Iterable[SessionRecord]) -> list[SessionRecommendation]:
        """
        Build one recommendation per session.

        Args:
            sessions: Past session records in any order

        Returns:
            list[SessionRecommendation]: Ordered newest session first, numbered from 1
        """
        # sorted() is stable under reverse=True, so equal timestamps keep input order
        ranked = sorted(sessions, key=lambda s: s.timestamp, reverse=True)
        recommendations = [
            self._recommend(session, rank) for rank, session in enumerate(ranked, start=1)
        ]
        logger.debug("Generated %d recommendations", len(recommendations))
        return recommendations

    def build_report(self, sessions: Iterable[SessionRecord]) -> RecommendationReport:
        """
        Build recommendations plus the static citation list.

        Citations are only attached when there is at least one recommendation.
        """
        recommendations = self.generate(sessions)
        citations = list(self.CITATIONS) if recommendations else []
        return RecommendationReport(recommendations=recommendations, citations=citations)

    def _recommend(self, session: SessionRecord, rank: int) -> SessionRecommendation:
        return SessionRecommendation(
            session_number=rank,
            session_date=format_session_date(session.timestamp),
            frequency=recommend_frequency(
                session.vibration_intensity, session.average_heart_rate
            ),
            duration=recommend_duration(session.duration),
            justification=choose_justification(session),
        )


def base_frequency(intensity: int | None) -> int:
    """
    Frequency band for an intensity level.

    Low intensity maps to high frequency and vice versa. A missing intensity
    counts as 0.
    """
    intensity = intensity or 0
    if intensity <= 30:
        # floor(v * 1.5)
        return min(MAX_FREQUENCY_HZ, 120 + intensity * 3 // 2)
    if intensity <= 70:
        return 80 + (intensity - 30)
    # floor((v - 70) * 1.3)
    return 40 + (intensity - 70) * 13 // 10


def recommend_frequency(intensity: int | None, heart_rate: float | None = None) -> int:
    """Base frequency shifted by the heart-rate adjustment."""
    frequency = base_frequency(intensity)
    if heart_rate is None:
        return frequency
    if heart_rate > 90:
        return max(MIN_FREQUENCY_HZ, frequency - 15)
    if heart_rate < 60:
        return min(MAX_FREQUENCY_HZ, frequency + 10)
    return frequency


def recommend_duration(previous_seconds: int | None) -> int:
    """
    Next session length in minutes from the previous session length.

    Short sessions grow by five minutes up to 20, mid-length sessions by two
    up to 25, and long sessions are held, capped at 30.
    """
    if not previous_seconds:
        return DEFAULT_DURATION_MIN
    previous_minutes = previous_seconds // 60
    if previous_minutes < 10:
        return min(20, previous_minutes + 5)
    if previous_minutes < 20:
        return min(25, previous_minutes + 2)
    return min(30, previous_minutes)


def choose_justification(session: SessionRecord) -> str:
    """First matching rule wins: heart rate, temperature, intensity, default."""
    if session.average_heart_rate is not None and session.average_heart_rate > 80:
        return JUSTIFICATION_CIRCULATORY_BALANCE
    if session.average_temperature is not None and session.average_temperature > 37.5:
        return JUSTIFICATION_HEAT_BUILDUP
    if (session.vibration_intensity or 0) > 70:
        return JUSTIFICATION_FREQUENCY_COUNTERBALANCE
    return JUSTIFICATION_DEFAULT
