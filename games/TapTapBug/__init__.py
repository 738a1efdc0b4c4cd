"""Tap Tap Bug - squash the bugs before they eat the picnic."""
