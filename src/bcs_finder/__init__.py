"""Public exports for the dog body condition scoring package."""

from .errors import PredictionError
from .image_utils import EncodedImage
from .questionnaire import score_answers
from .recommendations import BCSCategory, interpret
from .scorers import BCSScorer, LocalHeuristicScorer, RemoteVisionScorer, build_scorer
from .types import PredictionResult

__all__ = [
    "BCSCategory",
    "BCSScorer",
    "EncodedImage",
    "LocalHeuristicScorer",
    "PredictionError",
    "PredictionResult",
    "RemoteVisionScorer",
    "build_scorer",
    "interpret",
    "score_answers",
]
