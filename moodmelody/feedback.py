"""
Recording of user feedback on detected moods.

Feedback is kept as a bounded history in the key-value store and summarized
into simple accuracy insights. Recording feedback never affects the result
cache.
"""

from collections import Counter

import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import FEEDBACK_HISTORY_LIMIT
from .models import FeedbackAction, Mood, UserFeedback
from .presentation import display_name
from .store import KeyValueStore, StoreError

logger = structlog.get_logger(__name__)

FEEDBACK_KEY = "user_feedback_data"

_history_adapter = TypeAdapter(list[UserFeedback])


class FeedbackInsights(BaseModel):
    total_sessions: int
    corrections_count: int
    search_again_count: int
    not_good_count: int
    accepted_count: int
    accuracy_rate: float


class FeedbackRecorder:
    """Bounded feedback history on top of a KeyValueStore."""

    def __init__(
        self, store: KeyValueStore, *, limit: int = FEEDBACK_HISTORY_LIMIT
    ) -> None:
        self._store = store
        self.limit = limit

    def record(self, feedback: UserFeedback) -> bool:
        """
        Append feedback, keeping only the newest entries.

        Returns:
            True when the history was written, False when the store failed
        """
        history = self.all_feedback()
        history.append(feedback)
        history = history[-self.limit :]

        try:
            self._store.set(FEEDBACK_KEY, _history_adapter.dump_json(history))
        except StoreError as e:
            logger.error("feedback_write_failed", error=str(e))
            return False

        logger.info(
            "feedback_recorded",
            action=feedback.user_action.value,
            original_input=feedback.original_input,
        )
        return True

    def record_mood_accepted(
        self, original_input: str, detected_mood: Mood, session_id: str
    ) -> bool:
        return self.record(
            UserFeedback(
                original_input=original_input,
                detected_mood=detected_mood,
                user_action=FeedbackAction.MOOD_ACCEPTED,
                session_id=session_id,
            )
        )

    def record_mood_corrected(
        self,
        original_input: str,
        detected_mood: Mood,
        corrected_mood: Mood,
        session_id: str,
    ) -> bool:
        return self.record(
            UserFeedback(
                original_input=original_input,
                detected_mood=detected_mood,
                corrected_mood=corrected_mood,
                user_action=FeedbackAction.MOOD_CORRECTED,
                session_id=session_id,
            )
        )

    def record_search_again(
        self, original_input: str, detected_mood: Mood, session_id: str
    ) -> bool:
        return self.record(
            UserFeedback(
                original_input=original_input,
                detected_mood=detected_mood,
                user_action=FeedbackAction.SEARCH_AGAIN,
                session_id=session_id,
            )
        )

    def record_results_not_good(
        self, original_input: str, detected_mood: Mood, session_id: str
    ) -> bool:
        return self.record(
            UserFeedback(
                original_input=original_input,
                detected_mood=detected_mood,
                user_action=FeedbackAction.RESULTS_NOT_GOOD,
                session_id=session_id,
            )
        )

    def all_feedback(self) -> list[UserFeedback]:
        try:
            payload = self._store.get(FEEDBACK_KEY)
        except StoreError as e:
            logger.warning("feedback_read_failed", error=str(e))
            return []

        if payload is None:
            return []

        try:
            return _history_adapter.validate_json(payload)
        except ValidationError as e:
            logger.warning("feedback_corrupt", errors=e.error_count())
            return []

    def export_json(self) -> str:
        return _history_adapter.dump_json(self.all_feedback(), indent=2).decode(
            "utf-8"
        )

    def correction_stats(self) -> dict[str, int]:
        """Count corrections per "detected → corrected" pair."""
        stats: Counter[str] = Counter()
        for feedback in self.all_feedback():
            if feedback.user_action is not FeedbackAction.MOOD_CORRECTED:
                continue
            corrected = (
                display_name(feedback.corrected_mood)
                if feedback.corrected_mood is not None
                else "Unknown"
            )
            stats[f"{display_name(feedback.detected_mood)} → {corrected}"] += 1
        return dict(stats)

    def insights(self) -> FeedbackInsights:
        history = self.all_feedback()
        actions = Counter(feedback.user_action for feedback in history)
        total_sessions = len({feedback.session_id for feedback in history})
        accepted = actions[FeedbackAction.MOOD_ACCEPTED]

        return FeedbackInsights(
            total_sessions=total_sessions,
            corrections_count=actions[FeedbackAction.MOOD_CORRECTED],
            search_again_count=actions[FeedbackAction.SEARCH_AGAIN],
            not_good_count=actions[FeedbackAction.RESULTS_NOT_GOOD],
            accepted_count=accepted,
            accuracy_rate=(accepted / total_sessions * 100) if total_sessions else 0.0,
        )

    def clear(self) -> None:
        try:
            self._store.remove(FEEDBACK_KEY)
        except StoreError as e:
            logger.error("feedback_clear_failed", error=str(e))
            return
        logger.info("feedback_cleared")
