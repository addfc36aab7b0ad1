"""Protocol-independent building blocks for chat-bot features: request flags, drift
bottles, emoji mixing, gacha draws, fortune slips, song guessing and more."""

__version__ = "0.1.0"