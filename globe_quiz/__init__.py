from globe_quiz.errors import FeatureDataError, GlobeQuizError
from globe_quiz.features import CountryFeature, load_features
from globe_quiz.guess import GuessResult, check_guess
from globe_quiz.resolver import Camera, resolve, view_rotation
from globe_quiz.session import GuessOutcome, GuessSession

__all__ = [
    "Camera",
    "CountryFeature",
    "FeatureDataError",
    "GlobeQuizError",
    "GuessOutcome",
    "GuessResult",
    "GuessSession",
    "check_guess",
    "load_features",
    "resolve",
    "view_rotation",
]
