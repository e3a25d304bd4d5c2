# SPDX-License-Identifier: MIT


class ValidationError(Exception):
    """Raised when an edit is rejected. The data it was applied to is unchanged."""

    pass


class NotFoundError(ValidationError):
    """Raised when an edit names a trackable, chartable or chart that does not exist."""

    pass


class InUseError(ValidationError):
    """Raised when deleting something that is still referenced or still holds answers."""

    pass


class ReferentialIntegrityError(Exception):
    """
    Describes a reference to a trackable or chartable that no longer exists.

    The edit functions never produce these; they can only come from a document
    written elsewhere. They are reported and logged, not raised at the user.
    """

    pass


class StorageError(Exception):
    """Raised when the user data document cannot be loaded or saved."""

    pass
