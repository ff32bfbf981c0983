import logging
from dataclasses import dataclass
from typing import Optional

from globe_quiz.fuzzy import is_similar_enough
from globe_quiz.names import canonical_name, normalize, normalize_canonical, resolve_alias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuessResult:
    correct: bool
    # set only when the guess was accepted despite a spelling mistake
    corrected_spelling: Optional[str] = None

    @property
    def spelling_corrected(self):
        return self.corrected_spelling is not None


def is_blank_guess(text):
    return text is None or not text.strip()


def check_guess(text, feature):
    """
    Compare a typed guess with the feature's canonical name.

    Tries, in order: exact match ignoring a leading "the", exact match as-is,
    then the same two comparisons with typo tolerance. The first hit wins.
    """
    canonical = canonical_name(feature)
    resolved = resolve_alias(text)

    stripped_pair = (normalize_canonical(resolved), normalize_canonical(canonical))
    plain_pair = (normalize(resolved), normalize(canonical))

    if stripped_pair[0] == stripped_pair[1] or plain_pair[0] == plain_pair[1]:
        logger.debug("Exact match for %r -> %s", text, canonical)
        return GuessResult(correct=True)

    if is_similar_enough(*stripped_pair) or is_similar_enough(*plain_pair):
        logger.debug("Fuzzy match for %r -> %s", text, canonical)
        return GuessResult(correct=True, corrected_spelling=canonical)

    return GuessResult(correct=False)
