class PreviewError(Exception):
    """Base class for failures while previewing a columnar file."""


class OpenFailure(PreviewError):
    """Path missing, unreadable, or not a supported file type."""


class MetadataFailure(PreviewError):
    """File footer/schema is corrupt or unsupported."""


class ReadFailure(PreviewError):
    """I/O failed while reading row data."""


class DecodeFailure(PreviewError):
    """Row data could not be decoded."""
