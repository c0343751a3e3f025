"""hostbridge - method-channel bridge between a host container and an embedded runtime."""

__version__ = "0.1.0"
__logo__ = "🌉"
