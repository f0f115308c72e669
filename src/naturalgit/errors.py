"""Application-level exception types for naturalgit."""

from __future__ import annotations


class NaturalGitError(Exception):
    """Base exception for naturalgit."""


class ConfigurationError(NaturalGitError):
    """Base exception for configuration and startup validation errors."""


class ModelNotConfiguredError(ConfigurationError):
    """Raised when model configuration is missing."""


class GenerationError(NaturalGitError):
    """Raised when the text generator does not produce usable text."""


class NoResponseError(GenerationError):
    """Raised when the generator returns no response at all."""


class EmptyResponseError(GenerationError):
    """Raised when the generator returns an empty response."""


class WorkspaceNotFoundError(NaturalGitError):
    """Raised when an operation needs a workspace folder and none is open."""


class VcsProbeError(NaturalGitError):
    """Raised when a version-control command fails."""
