"""Exception classes for neaparse."""


class NeaparseError(Exception):
    """Base exception for neaparse."""


class StructuralError(NeaparseError):
    """The document lacks the anchor node needed to parse it."""


class PayloadDecodeError(NeaparseError):
    """The payload text is not valid JSON."""
