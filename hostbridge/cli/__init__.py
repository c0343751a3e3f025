"""Command-line interface for hostbridge."""
