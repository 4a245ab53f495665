"""Classification lookup tables (code -> description, code -> display ordinal)."""

from pydantic import BaseModel, ConfigDict, Field

from domain.errors import UnknownClassificationError

# ERA cluster abbreviations and their descriptions
DEFAULT_CLUSTER_DESCRIPTIONS: dict[str, str] = {
    "PCE": "Cluster 1. Physical, Chemical and Earth Sciences",
    "HCA": "Cluster 2. Humanities and Creative Arts",
    "EE": "Cluster 3. Engineering and Environmental Sciences",
    "EHS": "Cluster 4. Education and Human Society",
    "EC": "Cluster 5. Economics and Commerce",
    "MIC": "Cluster 6. Mathematical, Information and Computing Sciences",
    "BB": "Cluster 7. Biological and Biotechnological Sciences",
    "MHS": "Cluster 8. Medical and Health Sciences",
}

DEFAULT_CLUSTER_ORDINALS: dict[str, int] = {
    code: position for position, code in enumerate(DEFAULT_CLUSTER_DESCRIPTIONS, start=1)
}


class ClassificationTable(BaseModel):
    """
    Read-only lookup from a short classification code to its group description
    and display ordinal. Built once at startup and passed to whoever needs it.
    """

    model_config = ConfigDict(frozen=True)

    descriptions: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CLUSTER_DESCRIPTIONS))
    ordinals: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_CLUSTER_ORDINALS))

    def has(self, code: str | None) -> bool:
        return code is not None and code in self.descriptions

    def describe(self, code: str | None) -> str:
        """
        Return the description for `code`.

        Raises:
            UnknownClassificationError: If the code has no entry
        """
        if not self.has(code):
            raise UnknownClassificationError(code)
        return self.descriptions[code]  # ty: ignore

    def ordinal(self, code: str | None) -> int:
        """Display ordinal for `code`; unknown codes sort after all known ones."""
        if code is None:
            return len(self.ordinals) + 1
        return self.ordinals.get(code, len(self.ordinals) + 1)

    def codes(self) -> list[str]:
        """Known codes in display order."""
        return sorted(self.descriptions, key=lambda c: (self.ordinal(c), c))
