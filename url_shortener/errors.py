class ShortenerError(Exception):
    pass


class EmptyInputError(ShortenerError, ValueError):
    pass


class DecodeError(ShortenerError, ValueError):
    pass


class TableMismatchError(DecodeError):
    """Packed bytes cannot be consumed against the given code table."""
