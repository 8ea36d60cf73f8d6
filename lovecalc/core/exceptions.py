"""Error types raised inside the love calculator core."""


class NameValidationError(ValueError):
    """One or both names were empty after trimming."""


class ProviderUnavailable(RuntimeError):
    """The message backend has no credential configured."""


class ProviderCallFailed(RuntimeError):
    """The message backend call failed or returned an unusable response."""
