"""vibecheck - Farcaster reputation score, tiers and daily check-in streaks."""

from vibecheck.models.profile import NormalizedProfile, Tier
from vibecheck.models.normalization import NormalizationResult, RejectionReason
from vibecheck.models.streak import StreakState
from vibecheck.models.result import ProfileResult
from vibecheck.config import VibeCheckConfig
from vibecheck.core.normalizer import ScoreNormalizer, normalize_profile
from vibecheck.core.streak import StreakTracker, advance_streak, peek_streak
from vibecheck.core.orchestrator import VibeCheck
from vibecheck.core.share import format_share_text
from vibecheck.core.exporter import to_json, to_dict, save_json, load_json

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "VibeCheck",
    "VibeCheckConfig",
    # Core
    "ScoreNormalizer",
    "normalize_profile",
    "StreakTracker",
    "advance_streak",
    "peek_streak",
    "format_share_text",
    # Models
    "NormalizedProfile",
    "Tier",
    "NormalizationResult",
    "RejectionReason",
    "StreakState",
    "ProfileResult",
    # Export utilities
    "to_json",
    "to_dict",
    "save_json",
    "load_json",
    "__version__",
]
