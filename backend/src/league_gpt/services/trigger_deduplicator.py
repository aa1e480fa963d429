"""Fingerprinting and duplicate suppression for recommendation triggers."""

from typing import Optional

from league_gpt.models.champ_select import NormalizedView, TriggerFingerprint


def fingerprint(view: NormalizedView, is_local_turn: bool) -> TriggerFingerprint:
    """Build the trigger fingerprint of a view.

    Roster order is kept: the same champions in a different order are a
    different state, since slot order follows assigned positions.
    """
    return TriggerFingerprint(
        ally_ids=tuple(c.champion_id for c in view.allies),
        enemy_ids=tuple(c.champion_id for c in view.enemies),
        ban_ids=tuple(b.champion_id for b in view.bans),
        phase=view.phase,
        is_local_turn=bool(is_local_turn),
    )


def should_trigger(
    previous: Optional[TriggerFingerprint],
    current: TriggerFingerprint,
    manual_override: bool = False,
) -> bool:
    """Whether a fingerprint warrants a new recommendation."""
    if manual_override:
        return True
    return previous is None or previous != current
