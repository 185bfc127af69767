"""Error taxonomy for the diet optimizer."""


class DietOptimizerError(Exception):
    """Base class for recoverable diet optimizer failures."""


class ProviderUnavailable(DietOptimizerError):
    """A catalog or preference lookup failed."""


class MalformedRecord(DietOptimizerError):
    """A persisted cache record could not be parsed."""


class PersistenceFailure(DietOptimizerError):
    """Writing the persisted cache failed."""
