import sys
from typing import Optional, TextIO

COLORS = {
    "RESET": "\033[0m",
    "RED": "\033[91m",
}


def color(text: str, color_name: str, stream: TextIO, use_colors: bool = False) -> str:
    isatty = getattr(stream, "isatty", None)
    if not use_colors or isatty is None or not isatty():
        return text
    return f"{COLORS.get(color_name, '')}{text}{COLORS['RESET']}"


def print_error(
    message: str, stream: Optional[TextIO] = None, use_colors: bool = False
) -> None:
    """
    Writes one error line to the stream. Red only when colors were asked for
    and the stream is a terminal.
    """
    stream = stream if stream is not None else sys.stderr
    print(color(message, "RED", stream, use_colors), file=stream, flush=True)
