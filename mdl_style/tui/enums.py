from enum import Enum

from mdl_style.models import IssueSeverity


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


ISSUE_SEVERITY_STYLE = {
    IssueSeverity.ERROR: UIStyle.RED.value,
    IssueSeverity.WARNING: UIStyle.YELLOW.value,
}
