"""
Run-level failures. Per-file problems never raise; they degrade to an
unmatched result.
"""


class RenameError(Exception):
    """Base class for errors that abort a rename run."""


class TableExtractionError(RenameError):
    """Raised when the summary table image could not be read"""
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not read table image '{source}': {reason}")


class EmptyRecordSetError(RenameError):
    """Raised when the table text yields no usable records"""
    def __init__(self, variant: str):
        self.variant = variant
        super().__init__(
            f"No valid rows found in the {variant} table. Check the image."
        )


class ExportError(RenameError):
    """Raised when the output folder for renamed copies cannot be used"""
    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot write renamed files to '{target}': {reason}")
