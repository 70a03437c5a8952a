# =============================================================================
# vocab/errors.py  —  Exception taxonomy
# =============================================================================
#
#   VocabError
#   ├── ConfigurationError        missing/invalid settings (fatal at startup)
#   ├── ArgumentValidationError   caller input failed the tool schema
#   ├── ModelServiceError         the Gemini call produced no usable text
#   │   ├── ModelUnavailableError     SDK or transport failure
#   │   └── EmptyResponseError        call succeeded, no text came back
#   └── MalformedResponseError    text is not JSON, or has the wrong shape
#
# Field-level problems inside a well-formed response are never errors; the
# parser coerces them to defaults instead.
# =============================================================================


class VocabError(Exception):
    """Base class for every error this project raises on purpose."""


class ConfigurationError(VocabError):
    """Required configuration is missing or unusable."""


class ArgumentValidationError(VocabError):
    """Tool arguments did not match the tool's input schema."""


class ModelServiceError(VocabError):
    """The generative model service did not return usable text."""


class ModelUnavailableError(ModelServiceError):
    """The call to the model service failed outright."""


class EmptyResponseError(ModelServiceError):
    """The model service answered with an empty body."""


class MalformedResponseError(VocabError):
    """The model's answer could not be parsed into the expected envelope."""
