from mdl_style.tui.renderers import StyleConsoleUI

__all__ = ["StyleConsoleUI"]
