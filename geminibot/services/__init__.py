"""Adapters for the external HTTP services the bot talks to."""
