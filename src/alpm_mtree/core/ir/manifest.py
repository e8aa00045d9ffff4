"""Resolved entries and the manifest returned to callers."""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field

from .properties import PathType

SHA256_HEX_LENGTH = 64


class ResolvedEntry(BaseModel):
    """
    A path entry after merging its explicit fields over the ambient defaults.

    Attributes absent from both the entry and the defaults stay ``None``.

    Examples:
        - ``./usr type=dir mode=755``: ResolvedEntry(path="./usr", type=DIR, mode="755")
        - ``./usr/bin/sh type=link link=bash``: ResolvedEntry(..., type=LINK, link="bash")
    """

    path: str = Field(min_length=1, pattern=r"^\.[^ \t\r\n]*$")
    type: PathType | None = None
    mode: str | None = Field(default=None, pattern=r"^[0-7]{1,4}$")
    size: int | None = Field(default=None, ge=0)
    link: str | None = Field(default=None, min_length=1)
    sha256_digest: str | None = Field(
        default=None, pattern=rf"^[0-9a-fA-F]{{{SHA256_HEX_LENGTH}}}$"
    )
    time: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @property
    def is_dir(self) -> bool:
        return self.type is PathType.DIR

    @property
    def is_link(self) -> bool:
        return self.type is PathType.LINK


class Manifest(BaseModel):
    """
    Ordered, immutable sequence of resolved entries.

    Order is source line order.
    """

    entries: tuple[ResolvedEntry, ...] = ()

    model_config = ConfigDict(frozen=True)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ResolvedEntry]:  # type: ignore[override]
        return iter(self.entries)

    def __getitem__(self, index: int) -> ResolvedEntry:
        return self.entries[index]

    def get(self, path: str) -> ResolvedEntry | None:
        """Return the first entry for ``path``, if any."""
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None

    @property
    def paths(self) -> list[str]:
        return [entry.path for entry in self.entries]
