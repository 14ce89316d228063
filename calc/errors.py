

class CalcError(Exception):
    """ Base class for all calc errors"""
    pass


class UnknownVariable(CalcError):
    """ Raised when an expression references a variable missing from the bindings"""

    def __init__(self, name: str):
        super().__init__(f"calc: unknown variable: {name}")
        self.name = name


class UnprovidedVariable(CalcError):
    """ Raised when a formula is replayed without a binding it needs"""

    def __init__(self, name: str):
        super().__init__(f"calc: unprovided variable: {name}")
        self.name = name


class UnsupportedVariableType(CalcError):
    """ Raised when a bound value cannot be coerced to a number or a string"""

    def __init__(self, name: str, value):
        super().__init__(f"calc: unsupported variable type, name: {name}, type: {type(value).__name__}")
        self.name = name
        self.value = value


class UnsupportedToken(CalcError):
    """ Raised when the input holds a token the engine does not understand"""

    def __init__(self, text: str, pos: int | None = None):
        where = "" if pos is None else f" at {pos}"
        super().__init__(f"calc: unsupported token: '{text}'{where}")
        self.text = text
        self.pos = pos


class CalcSyntaxError(UnsupportedToken):
    """ Raised by the lexer for malformed literals"""

    def __init__(self, message: str, pos: int):
        CalcError.__init__(self, f"calc: {message} at {pos}")
        self.text = message
        self.pos = pos


class DivisionByZero(CalcError):
    """ Raised when dividing (or taking a remainder or reciprocal) by zero"""

    def __init__(self, token: str = "/"):
        super().__init__("calc/operator: division by zero")
        self.token = token


class InvalidArguments(CalcError):
    """ Raised when an operator receives operands of the wrong type or shape"""

    def __init__(self, token: str, detail: str | None = None):
        message = f"calc/operator: invalid arguments for code: {token}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
        self.token = token


class InsufficientOperands(CalcError):
    """ Raised when an operator is reduced with fewer operands than its arity"""

    def __init__(self, token: str):
        super().__init__(f"calc: no enough params for operator: {token}")
        self.token = token


class Unexecutable(CalcError):
    """ Raised when a non-executable operator is left over after the final drain"""

    def __init__(self, token: str, message: str | None = None):
        super().__init__(message or f"calc: unexecutable operator: {token}")
        self.token = token


class UnmatchedParenthesis(Unexecutable):
    """ Raised when a bracket has no partner"""

    def __init__(self, token: str):
        super().__init__(token, f"calc: can not find matching parenthesis for '{token}'")


class NoResult(CalcError):
    """ Raised when reduction does not end with exactly one value"""

    def __init__(self, remaining: int):
        super().__init__(f"calc: unable to parse expressions ({remaining} values left)")
        self.remaining = remaining
