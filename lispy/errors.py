class LispyError(Exception):
    """ Base class for all Lispy errors"""
    pass

class LispyUnboundSymbol(LispyError):
    """ Raised when a symbol is looked up before it is bound"""
    pass

class LispyArityError(LispyError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class LispyTypeError(LispyError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class LispyDivisionByZero(LispyError):
    """ Raised when a numeric builtin divides by zero"""

class LispySyntaxError(LispyError):
    """ Raised when source text cannot be parsed"""

    def __init__(self, message: str, line: int = 0, column: int = 0, filename: str = "<input>"):
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.line = line
        self.column = column
        self.filename = filename

class LispyLoadError(LispyError):
    """ Raised when a source file cannot be found or read"""
