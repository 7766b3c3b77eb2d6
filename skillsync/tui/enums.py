from enum import Enum

from skillsync.security.patterns import Severity


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


SEVERITY_STYLE = {
    Severity.ERROR: UIStyle.RED.value,
    Severity.WARNING: UIStyle.YELLOW.value,
}


def score_style(score: float) -> str:
    if score >= 0.9:
        return UIStyle.RED.value
    if score >= 0.75:
        return UIStyle.YELLOW.value
    return UIStyle.CYAN.value
