"""Custom exceptions for optspec."""


class OptspecError(Exception):
    """Base exception for optspec errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigError(OptspecError):
    """Raised when an option table cannot be compiled."""

    def __init__(self, descriptor: str, reason: str):
        super().__init__(f"Invalid option descriptor {descriptor!r}: {reason}")
        self.descriptor = descriptor
        self.reason = reason


class MalformedDescriptorError(ConfigError):
    """Raised when a descriptor string does not follow the descriptor syntax."""


class DuplicateShortOptionError(ConfigError):
    """Raised when two descriptors declare the same printable short character."""

    def __init__(self, descriptor: str, short_char: str):
        super().__init__(descriptor, f"duplicate short option '-{short_char}'")
        self.short_char = short_char


class DuplicateLongOptionError(ConfigError):
    """Raised when two descriptors declare the same long name (case-insensitive)."""

    def __init__(self, descriptor: str, long_name: str):
        super().__init__(descriptor, f"duplicate long option '--{long_name}'")
        self.long_name = long_name


class DescriptorFileError(OptspecError):
    """Raised when a descriptor file cannot be read."""

    def __init__(
        self,
        path: str,
        line_num: int | None = None,
        message: str = "Invalid descriptor file",
    ):
        full_message = f"Invalid descriptor file {path}"
        if line_num:
            full_message += f" at line {line_num}"
        full_message += f": {message}"
        super().__init__(full_message)
        self.path = path
        self.line_num = line_num


class ParseError(OptspecError):
    """Raised by strict parsers when a token cannot be parsed."""

    def __init__(self, token: str, message: str):
        super().__init__(message)
        self.token = token


class UnmatchedOptionError(ParseError):
    """Raised when a token looks like an option but matches no table entry."""


class MissingRequiredValueError(ParseError):
    """Raised when an option that needs a value did not get one."""

    def __init__(self, token: str, message: str, option_char: str):
        super().__init__(token, message)
        self.option_char = option_char
