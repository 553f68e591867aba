# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for mhskills."""


class MhSkillsError(Exception):
    """Base exception for all mhskills errors."""


class ConfigurationError(MhSkillsError):
    """Invalid or missing configuration."""


class SourceError(MhSkillsError):
    """The source string is empty, unresolvable or unsupported."""


class ParseError(MhSkillsError):
    """Failed to parse a document."""


class FrontmatterError(ParseError):
    """The front-matter block of a SKILL.md could not be parsed."""


class FetchError(MhSkillsError):
    """Failed to fetch a URL."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchTimeoutError(FetchError):
    """A fetch did not complete within its time budget."""


class ValidationError(MhSkillsError):
    """Fetched data failed validation."""


class SkillValidationError(ValidationError):
    """A SKILL.md is missing required front-matter fields."""


class ProviderMismatchError(SkillValidationError):
    """A provider matched a URL but the fetched document is not one it serves."""


class WellKnownValidationError(ValidationError):
    """A well-known skills index or one of its entries is malformed."""


class WellKnownIndexError(MhSkillsError):
    """No valid well-known skills index could be found."""


class SkillNotFoundError(MhSkillsError):
    """No skill (or no skill with the requested name) exists at the source."""


class GitError(MhSkillsError):
    """A git operation failed."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class InstallError(MhSkillsError):
    """Copying a skill into its install location failed."""
