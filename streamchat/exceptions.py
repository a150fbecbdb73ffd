"""Exception hierarchy for streamchat.

Stream-level faults (malformed events, bad status codes, dropped
connections) are reported as diagnostics, not raised. These exceptions
cover the collaborators around the stream consumer.
"""


class StreamChatError(Exception):
    """Base exception for all streamchat errors."""


class ConfigurationError(StreamChatError):
    """Settings are missing or cannot be parsed."""


class ClientError(StreamChatError):
    """The chat client was used outside of its context manager."""


class SessionError(StreamChatError):
    """A streaming session was reused after it consumed its response."""
