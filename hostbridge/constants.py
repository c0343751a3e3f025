"""Identifiers shared verbatim by the host and the embedded runtime."""

CHANNEL_NAME = "app.channel"

METHOD_GET_DEMO_MODE = "getDemoMode"

EXTRA_DEMO_MODE = "DEMO_MODE"
DEMO_MODE_DEFAULT = False
