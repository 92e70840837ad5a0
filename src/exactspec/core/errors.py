"""Exceptions raised by exactspec."""


class ExactSpecError(Exception):
    """Base class for all exactspec errors."""


class TransportError(ExactSpecError):
    """A documentation page could not be fetched."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class PageParseError(ExactSpecError):
    """A detail page lacks a structural element extraction depends on."""


class UnrecognizedMethodError(PageParseError):
    """A detail page declares an HTTP method outside the known vocabulary."""

    def __init__(self, endpoint: str, method: str) -> None:
        super().__init__(f"Unrecognized method in Endpoint {endpoint}: {method}")
        self.endpoint = endpoint
        self.method = method


class PropertyParseError(ExactSpecError):
    """A single property row could not be extracted."""
