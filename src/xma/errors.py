from __future__ import annotations


class AddressError(ValueError):
    """Raised when a string cannot be parsed as an XMPP address."""

    reason = "invalid address"

    def __init__(self, text: str | None) -> None:
        self.text = text
        super().__init__(f"{self.reason}: {text!r}")


class EmptyInput(AddressError):
    reason = "empty address"


class DuplicateDelimiter(AddressError):
    reason = "more than one '@' in address"


class MisplacedDelimiter(AddressError):
    reason = "misplaced delimiter in address"


class InsufficientComponents(AddressError):
    reason = "address is missing required components"
