from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    """Organizational unit shown on directory cards."""

    dept_id: int
    dept_name: str
