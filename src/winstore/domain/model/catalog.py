"""Catalogue reference data: categories and factories."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    id: int | None
    name: str
    description: str | None = None


@dataclass(frozen=True)
class Factory:
    """A manufacturer selling directly through the store."""

    id: int | None
    name: str
    location: str
    description: str = ""
