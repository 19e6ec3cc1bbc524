"""Custom exceptions for the provider matching engine.

These exceptions provide clear error handling and enable testing of error paths.
"""

from __future__ import annotations


class MatchingError(Exception):
    """Base exception for all matching engine errors."""

    pass


class CandidateIdentifierError(MatchingError):
    """Raised when a candidate record has no usable identifier."""

    def __init__(self) -> None:
        super().__init__("Candidate record is missing a required identifier.")


class WeightTableError(MatchingError):
    """Raised when the dimension weight table is not usable.

    This is a configuration error and should surface at startup.
    """

    def __init__(self, total: float) -> None:
        self.total = total
        super().__init__(f"Dimension weights must sum to exactly 100 (got {total:g}).")


class TierTableError(MatchingError):
    """Raised when the tier requirements table is inconsistent."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid tier requirements table: {detail}")


class UnknownTierError(MatchingError):
    """Raised when a tier name is not defined in the tier table."""

    def __init__(self, tier: str, available: tuple[str, ...]) -> None:
        self.tier = tier
        self.available = available
        super().__init__(f"Unknown tier '{tier}'. Available tiers: {', '.join(available)}.")


class InputFileNotFoundError(MatchingError):
    """Raised when a required input file does not exist."""

    def __init__(self, label: str, path: str) -> None:
        super().__init__(f"{label} file not found: {path}")


class ConfigFileNotFoundError(MatchingError):
    """Raised when the TOML config file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(MatchingError):
    """Raised when the TOML config file cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(MatchingError):
    """Raised when the TOML config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} failed validation: {detail}")


class MatchingProfileFileNotFoundError(MatchingError):
    """Raised when a matching profile catalogue path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Matching profile file not found: {path}")


class MatchingProfileValidationError(MatchingError):
    """Raised when a matching profile catalogue fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Matching profile {path} failed validation: {detail}")


class BadgeNotFoundError(MatchingError):
    """Raised when an update targets a badge the store does not hold."""

    def __init__(self, badge_id: str) -> None:
        self.badge_id = badge_id
        super().__init__(f"Badge not found: {badge_id}")
