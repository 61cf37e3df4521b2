class IncludeError(Exception):
    """Base class for every failure that aborts a transformation."""


class ReadError(IncludeError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"error reading {path}: {reason}")
        self.path = path


class ParseError(IncludeError):
    def __init__(self, filename: str, line: int, column: int) -> None:
        super().__init__(f"failed to parse source file {filename}: syntax error at {line}:{column}")
        self.filename = filename
        self.line = line
        self.column = column


class UnsupportedArgumentError(IncludeError):
    def __init__(self, selector: str, filename: str) -> None:
        super().__init__(
            f"unsupported argument when calling include.{selector} in {filename}: only strings are supported"
        )
        self.selector = selector


class UnsupportedFunctionError(IncludeError):
    def __init__(self, selector: str, filename: str) -> None:
        super().__init__(f"unsupported function call include.{selector} in {filename}")
        self.selector = selector


class FormatError(IncludeError):
    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"failed to process imports of {filename}: {reason}")
        self.filename = filename
