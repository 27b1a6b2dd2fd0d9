"""
Exceptions raised while decoding a class file.
"""


class ClassFileError(Exception):
    """Base class for all class file decoding errors."""
    pass


class RawError(ClassFileError):
    """Error while decoding the raw byte layout."""
    pass


class ReadPastEnd(RawError):
    """The cursor ran out of bytes before a read could be satisfied."""

    def __init__(self, tried: int, left: int):
        self.tried = tried
        self.left = left
        super().__init__(f"tried to read {tried} byte(s) with only {left} left")


class UnexpectedConstantTag(RawError):
    """A constant pool tag byte that matches no known constant kind."""

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"unexpected constant tag {tag}")


class UnsupportedConstantTag(RawError):
    """A known constant pool tag whose payload is not decoded."""

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"unsupported constant tag {tag}")


class ResolveError(ClassFileError):
    """Error while validating constant pool references."""
    pass


class OutOfRangeIndex(ResolveError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"out of range constant pool index {index}")


class UnexpectedConstantKind(ResolveError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {expected} constant, but instead got a {actual} constant"
        )


class Utf8DecodeError(ResolveError):
    """A Utf8 constant whose bytes are not valid UTF-8."""

    def __init__(self, slot: int, reason: str):
        self.slot = slot
        super().__init__(f"invalid utf-8 in constant pool slot {slot}: {reason}")


class DescriptorError(ClassFileError):
    """A field or method descriptor that does not match the grammar."""

    def __init__(self, descriptor: str, reason: str = ""):
        self.descriptor = descriptor
        message = f"invalid descriptor {descriptor!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class WriteError(ClassFileError):
    """A constant pool that cannot be encoded in the class file layout."""
    pass
