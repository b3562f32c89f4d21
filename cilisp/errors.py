

class CilispError(Exception):
    """ Base class for all cilisp errors"""
    # Results of the expressions that completed before the error, if any
    results = ()

class CilispFatalError(CilispError):
    """ Raised when the session cannot continue"""
    pass

class CilispInvariantError(CilispFatalError):
    """ Raised when a null or released node reaches the evaluator or lifecycle manager"""

class CilispRecursionError(CilispError):
    """ Raised when evaluation nests deeper than the configured limit"""

class CilispSyntaxError(CilispError):
    """ Raised when the reader cannot build an expression from the input"""

class CilispQuit(CilispError):
    """ Raised by the interpreter when the input asks to quit"""

    def __init__(self, results=None):
        super().__init__("quit")
        # Results produced before the quit keyword was read
        self.results = list(results or [])
