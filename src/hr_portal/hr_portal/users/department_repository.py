from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .department_model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_name(self, dept_name: str) -> Optional[Department]:
        raise NotImplementedError

    def create(self, dept_name: str) -> int:
        raise NotImplementedError

    def delete(self, dept_id: int) -> bool:
        raise NotImplementedError
