"""
Custom exception class for isdacds library errors.

Provides a specialized exception type to distinguish errors originating
from the isdacds library from other Python exceptions. All validation
failures of the CDS engine (missing inputs, unsupported curve or recovery
types, inconsistent curve conventions) are raised as LibError.

Example:
    >>> from isdacds.utils.error import LibError
    >>>
    >>> # Raise library-specific error
    >>> if recovery < 0:
    ...     raise LibError("Recovery rate must be non-negative")
    >>>
    >>> # Catch library errors specifically
    >>> try:
    ...     pricer.par_spread(expired_cds, model, settle_dt)
    ... except LibError as e:
    ...     print(f"isdacds error: {e._message}")
"""

class LibError(Exception):
    """ Class to understand if the error is coming from this library """

    def __init__(self,
                 message: str):
        """ Create error object """
        super().__init__(message)
        self._message = message

    def _print(self):
        print("LibError:", self._message)
