"""Custom exceptions for the comparer engine."""


class ComparerError(Exception):
    """Base exception for comparer errors."""
    pass


class InvalidOptionError(ComparerError):
    """Raised when an option was configured with parameters the engine cannot use."""
    def __init__(self, option: str, message: str):
        super().__init__(f"Invalid option '{option}': {message}")
        self.option = option
        self.message = message


class AmbiguousOptionsError(ComparerError):
    """Raised when more than one transformer or comparer applies to the same value pair."""
    def __init__(self, path: str, options: list):
        names = ", ".join(repr(o) for o in options)
        super().__init__(f"Ambiguous set of applicable options at {path}: {names}")
        self.path = path
        self.options = options


class UnexportedFieldError(ComparerError):
    """Raised when a private field is reached without an ignore or allow option for its type."""
    def __init__(self, struct_type: type, field_name: str, path: str):
        super().__init__(
            f"Cannot handle private field at {path}: "
            f"consider using AllowUnexported or IgnoreUnexported for "
            f"{struct_type.__module__}.{struct_type.__qualname__}"
        )
        self.struct_type = struct_type
        self.field_name = field_name
        self.path = path


class ProfileError(ComparerError):
    """Raised when a comparer profile cannot be loaded."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
