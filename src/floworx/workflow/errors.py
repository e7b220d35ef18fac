"""Error and degraded-input types raised or recorded during synthesis."""

from pydantic import BaseModel


class PreconditionError(ValueError):
    """Raised when a required tenant identifier is missing.

    This is a caller bug, not a business error: an artifact without a tenant
    binding cannot be deployed, so synthesis refuses to produce one.
    """

    def __init__(self, message: str, field: str):
        self.field = field
        super().__init__(message)


class ArtifactInvariantError(RuntimeError):
    """Raised when an assembled graph breaks its own structural guarantees."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("; ".join(problems))


class DegradedInput(BaseModel):
    """An optional input that was missing or malformed and replaced by a default."""

    field: str
    reason: str
