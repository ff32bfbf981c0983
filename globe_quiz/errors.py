class GlobeQuizError(Exception):
    """Base class for errors raised by globe_quiz."""


class FeatureDataError(GlobeQuizError):
    """The country feature collection could not be fetched or parsed."""
