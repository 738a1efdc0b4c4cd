"""
Tap Tap Bug platform package.

Provides:
- logging: Console logging with per-module levels and JSONL record sinks
- games: BaseGame, the standard GameState enum, and pointer input handling
"""
