#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Solo Insight project.

None of these are fatal to the process. Each maps to a visible but
non-blocking state for the user.

Exception Hierarchy:
    Exception (built-in)
    ├── StorageError - Base for all persistence-related errors
    │   ├── SyncError - Remote document connectivity/permission failures
    │   └── BackupError - Invalid or unreadable backup files
    ├── ValidationError - User input validation failures
    │   └── EntryValidationError - Entry draft validation failures
    └── AccessLockedError - Passphrase gate permanently locked

Usage:
    from soloinsight.core.exceptions import SyncError, ValidationError

    try:
        db.log_entry(draft)
    except EntryValidationError as e:
        logger.log_warning(f"Invalid entry: {e}")
"""


class StorageError(Exception):
    """
    Base exception for persistence-related errors.

    Local storage never raises this to callers (corrupt or missing slots
    recover to defaults). Remote storage and backup files do.

    Examples:
        >>> raise StorageError("Storage slot could not be written")

    See Also:
        SyncError, BackupError
    """

    pass


class SyncError(StorageError):
    """
    Exception for remote document store failures.

    Raised when:
    - Connectivity to the remote store is lost
    - No authenticated user is bound to the backend
    - The user document does not exist where an update is attempted

    Managers catch this on mutations and turn it into a dismissable
    notice; the optimistic local update is kept.

    Examples:
        >>> raise SyncError("Remote store unreachable: database is locked")
        >>> raise SyncError("Permission denied: no authenticated user")
    """

    pass


class BackupError(StorageError):
    """
    Exception for invalid backup imports.

    Raised when a backup file:
    - Is not valid JSON
    - Is not a JSON object
    - Has neither 'entries' nor 'tags'
    - Carries a collection with the wrong shape

    Nothing is applied when this is raised.

    Examples:
        >>> raise BackupError("Invalid backup file format")
    """

    pass


class ValidationError(Exception):
    """
    Exception for data validation failures.

    Examples:
        >>> raise ValidationError("Tag cannot be empty")
        >>> raise ValidationError("Unsupported language: 'fr'")
    """

    pass


class EntryValidationError(ValidationError):
    """
    Exception for entry-specific validation failures.

    Raised when an entry draft breaks an invariant:
    - duration below 1 minute
    - intensity outside [1, 5]
    - unknown outcome
    - note longer than 500 characters

    Examples:
        >>> raise EntryValidationError("Intensity must be between 1 and 5, got 7")
    """

    pass


class AccessLockedError(Exception):
    """
    Exception for the AI feature passphrase gate lockout.

    Raised once the maximum number of failed attempts has been reached.
    The locked state is terminal.

    Examples:
        >>> raise AccessLockedError("Maximum attempts exceeded. Feature locked.")
    """

    pass
