"""Exceptions raised while turning OFX content into a statement document."""

from __future__ import annotations


class OfxError(Exception):
    """Base class for every failure raised by the parsing pipeline."""


class UnsupportedAccountType(OfxError):
    """Raised when no bank or credit-card message set can be identified."""


class UnsupportedSection(OfxError):
    """Raised when a section outside the known set is requested."""


class MissingSection(OfxError):
    """Raised when a required statement section is absent from the document."""

    def __init__(self, section: str) -> None:
        self.section = section
        super().__init__(f'Required {section} section not found')


class MalformedDate(OfxError, ValueError):
    """Raised when a required OFX date is missing or cannot be parsed."""


class MalformedAmount(OfxError, ValueError):
    """Raised when a required OFX amount is missing or cannot be parsed."""


class NormalizationFailure(OfxError):
    """Raised when the content cannot be turned into a well-formed tree."""
