"""Error types raised by the taxwise core."""


class TaxwiseError(Exception):
    """Base class for all taxwise errors."""


class InvalidInputError(TaxwiseError, ValueError):
    """Raised for values the domain rejects, such as negative amounts."""


class SchemaError(TaxwiseError):
    """Raised when an imported document is missing a required field."""


class ParseError(TaxwiseError):
    """Raised when document text is not valid in its claimed format."""


class DocumentReadError(TaxwiseError):
    """Raised when the underlying file cannot be read."""


class UnsupportedFormatError(TaxwiseError):
    """Raised for files whose suffix is neither JSON nor a spreadsheet."""


class ConfigError(TaxwiseError):
    """Raised for invalid configuration values."""
