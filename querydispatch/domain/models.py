"""Pydantic models shared across logic/application layers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SearchState(BaseModel):
    """Snapshot published by the search executor after each state change."""

    model_config = ConfigDict(frozen=True)

    results: tuple[str, ...] = ()
    message: str = ""
    busy: bool = False


__all__ = ["SearchState"]
