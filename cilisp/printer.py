from cilisp.types.number import NumType, TypedResult

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_ERROR = "\033[31m"
COLOR_WARNING = "\033[31m"


def format_value(result: TypedResult) -> str:
    if result.kind == NumType.INT:
        # Int values can carry a fraction (e.g. div 7 2); round only for display
        return f"{result.value:.0f}"
    # shortest text that reads back as the same double
    return repr(result.value)


def format_result(result: TypedResult) -> str:
    """Render a result the way the REPL prints it."""
    match result.kind:
        case NumType.INT:
            label = "Integer"
        case NumType.DOUBLE:
            label = "Double"
        case _:
            label = "No Type"
    return f"{label} : {format_value(result)}"


def colorize(text: str, color: str, enabled: bool = True) -> str:
    return f"{color}{text}{RESET}" if enabled else text
