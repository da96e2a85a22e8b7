from pathlib import Path
from typing import Optional


class StyleAppError(Exception):
    """Base user-facing application error."""


class StyleFileError(StyleAppError):
    def __init__(self, path: Optional[Path], message: str) -> None:
        self.path = path
        self.message = message
        location = str(path) if path is not None else "<string>"
        super().__init__(f"{message}: {location}")


class MissingStyleFileError(StyleFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Missing style file")


class StyleSyntaxError(StyleFileError):
    def __init__(self, path: Optional[Path], line: int, detail: str) -> None:
        self.line = line
        self.detail = detail
        super().__init__(path=path, message=f"Invalid style syntax on line {line} ({detail})")


class InvalidStyleDocumentError(StyleFileError):
    def __init__(self, path: Optional[Path], detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid style document ({detail})")


class UnknownRuleError(StyleAppError):
    def __init__(self, rule_id: str) -> None:
        self.rule_id = rule_id
        super().__init__(f"Unknown rule: {rule_id}")


class InvalidConfigError(StyleFileError):
    def __init__(self, path: Path, line: int, detail: str) -> None:
        self.line = line
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config on line {line} ({detail})")
