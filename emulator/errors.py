class TuringError(Exception):
    pass


class DescriptionError(TuringError):
    """Raised when a machine description is malformed or inconsistent."""

    def __init__(self, line, reason="", line_number=None):
        self.line = line
        self.reason = reason
        self.line_number = line_number
        if line is None:
            message = f"syntax error: {reason}"
        else:
            message = f"syntax error: cannot accept {line}"
        super().__init__(message)


ParseError = DescriptionError


class IllegalInputError(TuringError):
    """Raised when the input string uses a symbol outside the input alphabet."""

    def __init__(self, symbol, position, input_string):
        self.symbol = symbol
        self.position = position
        self.input = input_string
        super().__init__(
            f'Symbol "{symbol}" in input is not defined in the set of input symbols '
            f"(position {position})"
        )
