"""Personalized email-automation workflow synthesis."""

from .errors import ArtifactInvariantError, DegradedInput, PreconditionError
from .pipeline import synthesize, synthesize_async
from .schema import BusinessProfile, SynthesisOptions, WorkflowArtifact

__all__ = [
    "ArtifactInvariantError",
    "BusinessProfile",
    "DegradedInput",
    "PreconditionError",
    "SynthesisOptions",
    "WorkflowArtifact",
    "synthesize",
    "synthesize_async",
]
