"""Connections between node attributes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Link:
    """A link from an output attribute to an input attribute."""

    id: int
    start_attr: int
    end_attr: int