from typing import Final


MDLRC_FILENAME: Final[str] = ".mdlrc"
DEFAULT_STYLE_FILENAME: Final[str] = "markdown.rb"
YAML_STYLE_FILENAME: Final[str] = "mdl-style.yaml"
MARKDOWNLINT_FILENAME: Final[str] = ".markdownlint.json"

RULE_ID_PREFIX: Final[str] = "MD"

MDLRC_LIST_KEYS: Final[tuple[str, ...]] = (
    "rules",
    "exclude_rules",
)
