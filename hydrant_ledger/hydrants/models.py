"""Hydrant and history ledger models.

Field names are snake_case in Python and camelCase on the wire
(``checked_by`` <-> ``checkedBy``); input accepts either spelling.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Largest value of a BIGINT identifier column
MAX_ID = 2**63 - 1


class HistoryAction(str, Enum):
    """Kind of change a ledger entry records."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class LedgerModel(BaseModel):
    """Base for immutable models serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class HydrantFields(LedgerModel):
    """The editable part of a hydrant record.

    ``name`` and ``location`` must be present and non-blank. The optional
    fields default to None when absent, and a blank string is stored as None.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("name", "hydrant"),
        description="Hydrant label",
    )
    location: str = Field(..., min_length=1, max_length=255, description="Where the hydrant stands")
    inspection_date: date | None = Field(default=None, description="Date of last inspection")
    defects: str | None = Field(default=None, description="Free-text defect notes")
    checked_by: str | None = Field(default=None, max_length=255, description="Inspector")

    @field_validator("inspection_date", "defects", "checked_by", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Hydrant(HydrantFields):
    """A live hydrant row."""

    id: int = Field(..., gt=0, description="Store-assigned identifier")
    history_entry_id: int = Field(..., gt=0, description="Ledger entry holding the current values")

    def to_fields(self) -> HydrantFields:
        """The editable values without the identifiers."""
        return HydrantFields.model_validate(
            self.model_dump(include=set(HydrantFields.model_fields))
        )


class HistoryEntry(LedgerModel):
    """One immutable ledger row.

    ``create`` and ``update`` entries carry a snapshot of the hydrant's
    fields; ``delete`` entries carry only the link to the entry they close.
    """

    id: int = Field(..., gt=0, description="Store-assigned identifier")
    action: HistoryAction = Field(..., description="Change recorded by this entry")
    previous_entry_id: int | None = Field(
        default=None, description="Entry this one supersedes; None for a create"
    )
    name: str | None = Field(default=None, description="Snapshot of the hydrant label")
    location: str | None = Field(default=None)
    inspection_date: date | None = Field(default=None)
    defects: str | None = Field(default=None)
    checked_by: str | None = Field(default=None)
    created_at: datetime = Field(..., description="When the entry was appended")

    @property
    def is_root(self) -> bool:
        """True for the first entry of a lineage."""
        return self.action is HistoryAction.CREATE and self.previous_entry_id is None

    def snapshot(self) -> HydrantFields | None:
        """Field values recorded by this entry, None for delete entries."""
        if self.action is HistoryAction.DELETE:
            return None
        return HydrantFields(
            name=self.name,
            location=self.location,
            inspection_date=self.inspection_date,
            defects=self.defects,
            checked_by=self.checked_by,
        )


class HistoryDaySummary(LedgerModel):
    """Number of ledger entries appended on one calendar day."""

    date: date
    total_changes: int = Field(..., ge=0)
