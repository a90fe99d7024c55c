"""
Fair Dice - Error Taxonomy

All errors derive from ValueError so callers that only care about bad
input can keep catching ValueError.
"""


class FairDiceError(ValueError):
    """Base class for all Fair Dice errors."""


class ConfigurationError(FairDiceError):
    """Startup dice specification or protocol parameters are malformed."""


class ValidationError(FairDiceError):
    """An interactive input token is malformed or out of range."""


class ProtocolError(FairDiceError):
    """A commitment failed verification or the game cannot advance."""
