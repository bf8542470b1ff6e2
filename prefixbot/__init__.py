"""
PrefixBot - prefix-command dispatch layer for a Discord bot.

This package recognizes a command prefix on inbound messages, resolves the
command name to a registered handler, and turns whatever the handler replies
with into a well-formed Discord message.
"""

__version__ = "0.1.0"
