"""Utility modules for league_gpt."""

from league_gpt.utils.champion_directory import ChampionDirectory

__all__ = [
    "ChampionDirectory",
]
