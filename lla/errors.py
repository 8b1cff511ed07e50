"""Error types surfaced by the assistant."""


class BackendError(RuntimeError):
    """A text-generation call failed in transport or while decoding the reply."""


class ConfigurationFault(RuntimeError):
    """Startup configuration is unusable (missing values, no agents registered)."""
