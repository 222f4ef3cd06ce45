"""
Exceptions for simplecrypt
Every error raised by the package derives from SimpleCryptError so callers have one catch-all
"""


class SimpleCryptError(Exception):
    # general container for errors
    pass


class ConfigurationError(SimpleCryptError, ValueError):
    # raised when a cipher is built from an invalid configuration
    pass


class UnsupportedMethodError(ConfigurationError):
    # raised when the method identifier is unknown
    def __init__(self, method, available=()):
        self.method = method
        self.available = tuple(available)
        super().__init__(method)

    def __str__(self):
        msg = f"unsupported cipher method: {self.method!r}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        return msg


class UnsupportedEncodingError(ConfigurationError):
    # raised when a plaintext or digest encoding is unknown
    pass


class InvalidDigestError(SimpleCryptError, ValueError):
    # raised when a digest cannot be decoded with the digest encoding
    pass


class IntegrityCheckFailedError(SimpleCryptError):
    # raised on bad padding, bad tag, wrong key or salt mismatch
    pass
