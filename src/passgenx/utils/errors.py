class PassgenxError(Exception):
    """Base class for errors raised by the derivation engine."""


class ConfigurationError(PassgenxError, ValueError):
    """The selected options leave no characters to build a password from."""


class InvalidArgumentError(PassgenxError, ValueError):
    """A length or case type the engine cannot work with."""
