"""Exception hierarchy for beam-file generation."""


class BeamGenerationError(Exception):
    """Base exception class for beam generation errors."""
    pass


class InvalidConfiguration(BeamGenerationError):
    """Raised when a beam configuration cannot be sampled."""
    pass


class SinkUnavailable(BeamGenerationError):
    """Raised when the output beam file cannot be opened or written."""
    pass


class RejectionLimitExceeded(BeamGenerationError):
    """Raised when a particle exhausts the rejection-sampling attempt cap."""
    pass
