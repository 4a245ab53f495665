"""Configuration models (Pydantic classes)."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.membership.table import ITEM_COL, OTHERS_COL, OWNER_COL
from domain.rows import VALUE_DELIMITER
from domain.taxonomy.classification import ClassificationTable
from domain.taxonomy.node import NodeKind, check_attributes
from infrastructure.constants import CLASSIFICATION_FILE
from infrastructure.io.datasets import symbolize_header


class TaxonomyColumnsConfig(BaseModel):
    """Column names in the discipline-matrix CSV, symbolized like the file headers ('FOR Title' -> 'for_title')."""

    group_code_col: str = "cluster_abbrev"
    leaf_code_col: str = "for_code"
    leaf_title_col: str = "for_title"

    @field_validator("group_code_col", "leaf_code_col", "leaf_title_col")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = symbolize_header(v)
        if not v:
            raise ValueError("column names must not be empty")
        return v


class TemplatesConfig(BaseModel):
    """
    Attribute templates per node kind ('name' is implicit and must not appear).
    Values may contain {{CSV_FIELD_<col>}} and {{LOOKUP_<NAME>}} tokens.
    """

    group: dict[str, str] = Field(default_factory=dict)
    leaf: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate(self) -> "TemplatesConfig":
        check_attributes(NodeKind.GROUP, "<group template>", self.group)
        check_attributes(NodeKind.LEAF, "<collection template>", self.leaf)
        return self


class StructureConfig(BaseModel):
    """
    Settings for building the structure-builder XML.
    - Loaded from structure.yaml
    - Classification table resolved by the loader
    """

    root_name: str = Field(..., description="Name of the top community that owns every group.")
    root_attributes: dict[str, str] = Field(default_factory=dict)
    columns: TaxonomyColumnsConfig = Field(default_factory=TaxonomyColumnsConfig)
    skip_code_length: int | None = Field(
        default=2,
        description="Rows whose collection code has this many characters are skipped. None keeps every row.",
    )
    templates: TemplatesConfig = Field(default_factory=TemplatesConfig)

    classification_file: Path = Field(default_factory=lambda: CLASSIFICATION_FILE)
    classification: ClassificationTable = Field(default_factory=ClassificationTable)

    @model_validator(mode="after")
    def _validate(self) -> "StructureConfig":
        if not self.root_name.strip():
            raise ValueError("root_name must not be empty")
        if self.skip_code_length is not None and self.skip_code_length <= 0:
            raise ValueError("skip_code_length must be a positive integer or null")
        check_attributes(NodeKind.GROUP, self.root_name, self.root_attributes)
        return self


class MembershipColumnsConfig(BaseModel):
    """Header names of the handle CSV, mapped onto the columns the loader expects."""

    item_col: str = ITEM_COL
    owner_col: str = OWNER_COL
    others_col: str = OTHERS_COL

    @field_validator("item_col", "owner_col", "others_col")
    @classmethod
    def _normalize(cls, v: str) -> str:
        v = symbolize_header(v)
        if not v:
            raise ValueError("column names must not be empty")
        return v

    def renames(self) -> dict[str, str]:
        """Source header -> canonical column, for headers that differ."""
        pairs = {self.item_col: ITEM_COL, self.owner_col: OWNER_COL, self.others_col: OTHERS_COL}
        return {src: dst for src, dst in pairs.items() if src != dst}


class MembershipConfig(BaseModel):
    """Settings for the multi-collection mapping CSV."""

    columns: MembershipColumnsConfig = Field(default_factory=MembershipColumnsConfig)
    value_delimiter: str = VALUE_DELIMITER
    lookup_csv: Path | None = Field(
        default=None,
        description="Optional handle export (handle,kind,name,rmid,parent_name) used for the extra report columns.",
    )

    @field_validator("value_delimiter")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("value_delimiter must not be empty")
        return v
