class LeadProcessingError(Exception):
    """Base for failures that abort a single lead.

    The message is user-facing: it is returned verbatim as `{"error": ...}`.
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ScrapeEmptyError(LeadProcessingError):
    status_code = 404

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "Scraper finished but returned no profiles. "
            "Profile might be private or the URL invalid."
        )


class ScrapeError(LeadProcessingError):
    status_code = 502


class GenerationError(LeadProcessingError):
    status_code = 502

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


class MissingCredentialsError(LeadProcessingError):
    status_code = 400


class UnsupportedProviderError(LeadProcessingError):
    status_code = 400
