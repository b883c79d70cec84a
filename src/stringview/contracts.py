"""Public option models for stringview."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stringview.codes import DEFAULT_SETTLE_FLAG, TEMPLATE_KEY


class RedactionRule(BaseModel):
    """A key name paired with the text that replaces its value."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str
    replacement: str

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        if not v:
            raise ValueError("Redaction rule key must be a non-empty string")
        return v


RedactionEntry = Union[str, RedactionRule]


def _coerce_rule_entries(v: Any) -> Any:
    """Accept (key, replacement) pairs alongside bare keys and rule dicts."""
    if v is None:
        return []
    if isinstance(v, (str, dict, RedactionRule)):
        v = [v]
    entries = []
    for entry in v:
        if isinstance(entry, tuple):
            if len(entry) != 2:
                raise ValueError(
                    f"Redaction pair must be (key, replacement), got {len(entry)} items"
                )
            entry = {"key": entry[0], "replacement": entry[1]}
        elif isinstance(entry, str) and not entry:
            raise ValueError("Redaction rule key must be a non-empty string")
        entries.append(entry)
    return entries


class StringifyOptions(BaseModel):
    """Options for a single stringify call.

    - revisit_budget: extra expansions allowed for a truly circular container
      before the circular marker is written
    - redaction_rules: bare key names (generic message) or RedactionRule
      entries, checked in order, first match wins
    - settle_flag: mapping key forced to False on visit; None disables it
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    revisit_budget: int = Field(1, ge=0)
    redaction_rules: List[RedactionEntry] = Field(default_factory=list)
    settle_flag: Optional[str] = DEFAULT_SETTLE_FLAG

    @field_validator("redaction_rules", mode="before")
    @classmethod
    def validate_redaction_rules(cls, v: Any) -> Any:
        return _coerce_rule_entries(v)


class ViewerOptions(BaseModel):
    """Presentation options for the HTML tree viewer."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    show_types: bool = False
    show_counts: bool = False
    default_expanded: bool = False
    paths_on_hover: bool = False
    show_controls: bool = True
    indent: int = Field(4, ge=0)  # px per depth level
    redaction_rules: List[RedactionEntry] = Field(default_factory=lambda: [TEMPLATE_KEY])
    show_template: bool = False  # show the conventional template key anyway

    @field_validator("redaction_rules", mode="before")
    @classmethod
    def validate_redaction_rules(cls, v: Any) -> Any:
        return _coerce_rule_entries(v)
