"""
Services Layer

Scoring logic for swing kinetics.
These services turn domain inputs into scores and diagnoses.
"""

from .momentum_extractor import MomentumExtractor
from .sequence_analyzer import SequenceAnalyzer
from .contact_scorer import ContactScorer
from .percentile_engine import PercentileEngine
from .fingerprint import FingerprintAggregator
from .ball_flight import BallFlightPredictor
from .synthetic import SyntheticDataGenerator, mock_sequence_analysis

__all__ = [
    "MomentumExtractor",
    "SequenceAnalyzer",
    "ContactScorer",
    "PercentileEngine",
    "FingerprintAggregator",
    "BallFlightPredictor",
    "SyntheticDataGenerator",
    "mock_sequence_analysis",
]
