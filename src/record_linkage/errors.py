"""Configuration errors raised while compiling a scoring session.

Every error here is permanent: it is raised before any document is
scored and names the offending property, mode or measure verbatim so
the caller can surface it as-is.
"""

from __future__ import annotations


class ScoringConfigError(ValueError):
    """Base class for all scoring configuration faults."""


class InvalidScoreMode(ScoringConfigError):
    """The requested ``score_mode`` is not one of the supported modes."""

    def __init__(self, mode: str, valid: tuple[str, ...] = ()) -> None:
        self.mode = mode
        message = f"Invalid score_mode [{mode}]"
        if valid:
            message += f". Method can only be one of: {', '.join(valid)}"
        super().__init__(message)


class MissingProperty(ScoringConfigError):
    """A required configuration key is absent."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Missing parameter [{name}]")


class MissingSessionProperty(MissingProperty):
    """``score_mode``, ``matchers`` or a mode-level key is absent."""


class MissingFieldProperty(MissingProperty):
    """A per-field matcher entry lacks a key its score mode requires."""

    def __init__(self, name: str, mode: str | None = None) -> None:
        self.mode = mode
        scope = f" for {mode}" if mode else ""
        super().__init__(
            name,
            f"Invalid matcher configuration{scope}. Missing: [{name}] property.",
        )


class UnknownMeasure(ScoringConfigError):
    """The measure name is not in the registry's recognised set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"The matcher [{name}] is not supported.")


class InvalidMatchers(ScoringConfigError):
    """``matchers`` is not a list of mappings."""

    def __init__(self, detail: str) -> None:
        self.name = "matchers"
        super().__init__(f"Invalid parameter [matchers]: {detail}")
