"""Champion recommendation client.

Provides the OpenAI chat-completions implementation and a mock for
testing/development.
"""

import logging
from typing import Optional

import httpx

from league_gpt.config import PLACEHOLDER_API_KEY, ConfigurationError
from league_gpt.models.champ_select import ChampionRef, NormalizedView

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a League of Legends expert and coach. Your job is to analyze team "
    "compositions and recommend the best champion picks. Provide concise, strategic "
    "advice focused on synergy, counters, and win conditions."
)


class RecommendationError(Exception):
    """The recommendation provider failed.

    ``cause`` is one of ``network``, ``empty_response`` or ``error_status``.
    """

    def __init__(self, message: str, cause: str):
        super().__init__(message)
        self.cause = cause


def build_prompt(view: NormalizedView) -> str:
    """Build the user prompt describing the current champion select."""
    lines = [
        "# League of Legends Champion Select Analysis",
        "",
        "## Pick Phase",
        f"My role: {view.local_role or 'Not specified'}",
        "",
    ]

    if view.allies:
        lines.append("## Allied Team:")
        lines.extend(_format_champion(c) for c in view.allies)
        lines.append("")

    if view.enemies:
        lines.append("## Enemy Team:")
        lines.extend(_format_champion(c) for c in view.enemies)
        lines.append("")

    if view.bans:
        lines.append("## Banned Champions:")
        lines.extend(f"- {b.display_name or f'Champion ID: {b.champion_id}'}" for b in view.bans)
        lines.append("")

    lines.extend([
        "Based on the team compositions above, recommend the top 3 champions I should pick. Consider:",
        "1. Synergy with my team composition",
        "2. Countering enemy champions",
        "3. Win conditions and team fight dynamics",
        "",
        "Provide a brief explanation for each recommendation.",
        "At the end of your response, list only the recommended champion names in a "
        "comma-separated format prefixed by 'Recommended Picks:'.",
        "If I have already picked a champion and my role is jungle, tell me whether I should "
        "path from top to bot or from bot to top based on the current team compositions and enemy picks.",
    ])
    return "\n".join(lines) + "\n"


def _format_champion(champ: ChampionRef) -> str:
    name = champ.display_name or f"Champion ID: {champ.champion_id}"
    return f"- {name} ({champ.position or 'Unknown role'})"


class MockRecommendationClient:
    """Mock recommendation client returning canned advice.

    Use this for development when you don't want to spend API calls.
    """

    async def recommend(self, view: NormalizedView) -> str:
        """Return a fixed recommendation regardless of the view."""
        logger.info(f"MockRecommendation: returning canned advice for phase {view.phase}")
        return (
            "1. **Ornn** - frontline that scales with the team.\n"
            "2. **Orianna** - safe teamfight mage.\n"
            "3. **Jinx** - late game carry.\n\n"
            "Recommended Picks: Ornn, Orianna, Jinx"
        )

    async def close(self):
        pass


class ChatGPTClient:
    """Recommendation client backed by the OpenAI chat-completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            api_key: OpenAI API key
            model: Chat model to use
            base_url: API base URL (OpenAI-compatible providers work too)
            timeout: Request timeout in seconds
            transport: Optional httpx transport override
        """
        if not api_key:
            raise ConfigurationError("OpenAI API key is required")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def recommend(self, view: NormalizedView) -> str:
        """Get a champion recommendation for the given view.

        Raises:
            RecommendationError: on network failure, error status or empty content
        """
        prompt = build_prompt(view)
        client = await self._get_client()

        try:
            response = await client.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                },
            )
        except httpx.HTTPError as e:
            raise RecommendationError(f"OpenAI request failed: {e}", cause="network") from e

        if response.is_error:
            raise RecommendationError(
                f"OpenAI API error: {response.status_code} - {_error_message(response)}",
                cause="error_status",
            )

        choice = _first_choice(response)
        message = choice.get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, str) and content.strip():
            return content

        raise RecommendationError(
            f"No content in OpenAI response. Finish reason: {choice.get('finish_reason')}",
            cause="empty_response",
        )


def _first_choice(response: httpx.Response) -> dict:
    try:
        data = response.json()
    except ValueError:
        return {}
    choices = data.get("choices") if isinstance(data, dict) else None
    if isinstance(choices, list) and choices and isinstance(choices[0], dict):
        return choices[0]
    return {}


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return error["message"]
    return response.text


def get_recommendation_client(
    api_key: Optional[str] = None,
    model: str = "gpt-4o-mini",
    base_url: str = "https://api.openai.com/v1",
    timeout: float = 60.0,
    use_mock: bool = False,
) -> MockRecommendationClient | ChatGPTClient:
    """Factory function to get appropriate recommendation client.

    Raises:
        ConfigurationError: if no usable API key is configured and mock is not requested
    """
    if use_mock:
        logger.info("Using MockRecommendationClient")
        return MockRecommendationClient()
    if not api_key or api_key == PLACEHOLDER_API_KEY:
        raise ConfigurationError("OpenAI API key not configured (set OPENAI_API_KEY)")
    logger.info(f"Using ChatGPTClient with model {model}")
    return ChatGPTClient(api_key, model=model, base_url=base_url, timeout=timeout)
