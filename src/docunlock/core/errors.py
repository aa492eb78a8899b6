class DocUnlockError(Exception):
    """Base exception for docunlock."""

class PasswordMismatch(DocUnlockError):
    """The candidate password does not unlock the document."""

class CorruptOrUnsupportedDocument(DocUnlockError):
    """The input cannot be parsed as a document at all."""

class PasswordSourceError(DocUnlockError):
    pass
