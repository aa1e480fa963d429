"""Saves recommendations of a champion select session as markdown files.

Layout::

    <output_dir>/<session handle>/query-01-your-turn.md
    <output_dir>/<session handle>/query-02-manual-query.md
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from league_gpt.models.champ_select import NormalizedView

logger = logging.getLogger(__name__)


def query_filename(sequence: int, reason: str) -> str:
    slug = "-".join(reason.lower().split())
    return f"query-{sequence:02d}-{slug}.md"


def render_markdown(
    view: NormalizedView,
    recommendation: str,
    reason: str,
    timestamp: Optional[datetime] = None,
) -> str:
    """Render one saved recommendation."""
    timestamp = timestamp or datetime.now()
    lines = [
        "# Champion Select Recommendation",
        "",
        f"**Timestamp:** {timestamp.strftime('%Y-%m-%d %H:%M:%S')}  ",
        f"**Query Type:** {reason}  ",
        f"**Phase:** {view.phase}",
        "",
    ]
    if view.local_role:
        lines += [f"**Your Role:** {view.local_role}", ""]
    lines += ["---", ""]

    if view.allies:
        lines += ["## Allied Team", ""]
        for champ in view.allies:
            marker = " **(YOU)**" if champ.is_local_player else ""
            lines.append(f"- **{champ.display_name}** - {champ.position}{marker}")
        lines.append("")

    if view.enemies:
        lines += ["## Enemy Team", ""]
        lines += [f"- **{c.display_name}** - {c.position}" for c in view.enemies]
        lines.append("")

    if view.bans:
        lines += ["## Banned Champions", ""]
        lines.append(", ".join(f"**{b.display_name}**" for b in view.bans))
        lines.append("")

    lines += ["---", "", "## AI Recommendation", "", recommendation, ""]
    return "\n".join(lines)


class SessionRecorder:
    """Persistence sink for successful recommendations."""

    def __init__(self, output_dir: Optional[Path] = None, enabled: bool = True):
        """Initialize the recorder.

        Args:
            output_dir: Directory holding one subdirectory per session. Defaults to ./sessions
            enabled: Whether files are written at all
        """
        self.output_dir = Path(output_dir) if output_dir else Path("sessions")
        self.enabled = enabled

    def session_dir(self, session_handle: str) -> Path:
        return self.output_dir / session_handle

    def record(
        self,
        session_handle: Optional[str],
        view: NormalizedView,
        recommendation: str,
        reason: str,
        sequence: int,
    ) -> Optional[Path]:
        """Write one recommendation.

        Returns:
            Path of the written file, or None if disabled
        """
        if not self.enabled or not session_handle:
            return None

        directory = self.session_dir(session_handle)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / query_filename(sequence, reason)
        path.write_text(render_markdown(view, recommendation, reason), encoding="utf-8")
        logger.info(f"Recommendation saved: {path}")
        return path
