import logging
from enum import Enum

from globe_quiz.features import index_by_iso, is_selectable
from globe_quiz.guess import check_guess, is_blank_guess
from globe_quiz.hints import get_hint
from globe_quiz.scoring import build_points_map, points_for_guess

logger = logging.getLogger(__name__)


class GuessOutcome(Enum):
    NONE = "none"
    PENDING = "pending"
    CORRECT = "correct"
    WRONG = "wrong"


class GuessSession:
    """
    Score and the current question for one player.

    The selected country is kept as its ISO code and looked up in the
    feature index, never copied.
    """

    def __init__(self, features):
        self.features = tuple(f for f in features if is_selectable(f))
        self.index = index_by_iso(self.features)
        self.points_map = build_points_map(self.features)
        self.score = 0
        self.close()

    @property
    def selected(self):
        if self.selected_iso is None:
            return None
        return self.index.get(self.selected_iso)

    def select(self, feature):
        if feature is None or feature.iso not in self.index:
            return
        self.selected_iso = feature.iso
        self.outcome = GuessOutcome.PENDING
        self.last_points = None
        self.hint = None
        self.corrected_spelling = None
        self.message = ""
        logger.debug("Selected %s", feature.iso)

    def submit(self, text):
        feature = self.selected
        if feature is None or is_blank_guess(text) or self.outcome == GuessOutcome.CORRECT:
            return None

        result = check_guess(text, feature)
        if result.correct:
            pts = points_for_guess(self.points_map, feature.iso,
                                   result.spelling_corrected, self.hint_shown)
            self.score += pts
            self.last_points = pts
            self.corrected_spelling = result.corrected_spelling
            self.outcome = GuessOutcome.CORRECT
            if result.spelling_corrected:
                self.message = f"✅ Correct! +{pts} points. It's spelled {result.corrected_spelling}."
            else:
                self.message = f"✅ Correct! +{pts} points."
            logger.info("Correct guess for %s: +%d (score %d)", feature.iso, pts, self.score)
        else:
            self.outcome = GuessOutcome.WRONG
            self.message = "❌ Wrong, try again!"
        return result

    @property
    def hint_shown(self):
        return self.hint is not None

    @property
    def spelling_corrected(self):
        return self.corrected_spelling is not None

    @property
    def can_request_hint(self):
        return self.outcome == GuessOutcome.WRONG and not self.hint_shown

    def request_hint(self):
        feature = self.selected
        if feature is None or self.outcome != GuessOutcome.WRONG:
            return None
        self.hint = get_hint(feature)
        logger.debug("Hint shown for %s", feature.iso)
        return self.hint

    def close(self):
        self.selected_iso = None
        self.outcome = GuessOutcome.NONE
        self.last_points = None
        self.hint = None
        self.corrected_spelling = None
        self.message = ""

    def reset(self):
        self.close()
        self.score = 0
