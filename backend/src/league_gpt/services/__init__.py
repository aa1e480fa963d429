"""Champion select and ready check services."""

from league_gpt.services.league_client import LeagueClient, LeagueClientError
from league_gpt.services.ready_check_automator import AutomatorStatus, ReadyCheckAutomator
from league_gpt.services.recommendation_client import (
    ChatGPTClient,
    MockRecommendationClient,
    RecommendationError,
    get_recommendation_client,
)
from league_gpt.services.session_controller import (
    PollOutcome,
    SessionLifecycleController,
    TriggerReason,
)
from league_gpt.services.session_normalizer import SessionNormalizer
from league_gpt.services.session_recorder import SessionRecorder
from league_gpt.services.snapshot_poller import SnapshotPoller

__all__ = [
    "LeagueClient",
    "LeagueClientError",
    "AutomatorStatus",
    "ReadyCheckAutomator",
    "ChatGPTClient",
    "MockRecommendationClient",
    "RecommendationError",
    "get_recommendation_client",
    "PollOutcome",
    "SessionLifecycleController",
    "TriggerReason",
    "SessionNormalizer",
    "SessionRecorder",
    "SnapshotPoller",
]
