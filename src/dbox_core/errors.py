"""Exceptions raised while reading box-format tables."""


class BoxFormatError(ValueError):
    """Base class for box-format parsing errors."""


class MissingRulerError(BoxFormatError):
    """No horizontal ruler line near the top: not box-format data."""


class MissingInputError(BoxFormatError):
    """Neither an input file nor input text was supplied."""
