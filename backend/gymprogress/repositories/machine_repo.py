from __future__ import annotations
from sqlalchemy import select
from gymprogress.models import Machine
from gymprogress.repositories.base import BaseRepository

class MachineRepository(BaseRepository[Machine]):
    model = Machine

    def list_by_name(self, name: str) -> list[Machine]:
        # Exact, case-sensitive match
        stmt = select(Machine).where(Machine.name == name).order_by(Machine.id.asc())
        with self.translate_errors(f"list machines named {name!r}"):
            return list(self.db.execute(stmt).scalars().all())

    def create(self, name: str) -> Machine:
        return self.add_and_refresh(Machine(name=name))

    def rename(self, machine: Machine, name: str) -> Machine:
        with self.translate_errors(f"rename Machine {machine.id}"):
            machine.name = name
            self._save()
            self.db.refresh(machine)
        return machine

    def delete(self, machine: Machine) -> None:
        self.remove(machine)
