"""Notifier Errors - Exception hierarchy for configuration and Slack failures."""


class NotifierError(Exception):
    """Base class for every failure the notifier reports."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(NotifierError):
    """Raised when invocation inputs are invalid. Detected before any remote call."""
    pass


class RemoteError(NotifierError):
    """Raised when a Slack API call (or its transport) fails."""
    pass


class ChannelResolutionError(RemoteError):
    """Raised when the channel list could not be fetched."""
    pass


class ChannelNotFoundError(ChannelResolutionError):
    """Raised when no visible channel matches the configured name."""

    def __init__(self, channel_name: str):
        super().__init__(f"Channel '{channel_name}' not found.")
        self.channel_name = channel_name
