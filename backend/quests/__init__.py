"""Quests — the quest tree and its HTTP routes."""
