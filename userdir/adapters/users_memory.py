from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from userdir.domain.entities import UserRecord
from userdir.domain.ports import UserSourcePort

SAMPLE_USERS: Sequence[UserRecord] = (
    UserRecord(id=1, first_name="Emily", last_name="Johnson", age=28),
    UserRecord(id=2, first_name="Michael", last_name="Williams", age=35),
    UserRecord(id=3, first_name="Sophia", last_name="Brown", age=42),
    UserRecord(id=4, first_name="James", last_name="Davis", age=45),
    UserRecord(id=5, first_name="Emma", last_name="Miller", age=30),
    UserRecord(id=6, first_name="Olivia", last_name="Wilson", age=22),
    UserRecord(id=7, first_name="Alexander", last_name="Jones", age=38),
    UserRecord(id=8, first_name="Ava", last_name="Taylor", age=27),
    UserRecord(id=9, first_name="Ethan", last_name="Martinez", age=33),
    UserRecord(id=10, first_name="Isabella", last_name="Anderson", age=31),
    UserRecord(id=11, first_name="Liam", last_name="Garcia", age=29),
    UserRecord(id=12, first_name="Mia", last_name="Rodriguez", age=24),
    UserRecord(id=13, first_name="Noah", last_name="Hernandez", age=40),
    UserRecord(id=14, first_name="Charlotte", last_name="Lopez", age=36),
    UserRecord(id=15, first_name="William", last_name="Gonzalez", age=32),
    UserRecord(id=16, first_name="Avery", last_name="Perez", age=26),
    UserRecord(id=17, first_name="Evelyn", last_name="Sanchez", age=37),
    UserRecord(id=18, first_name="Logan", last_name="Torres", age=31),
    UserRecord(id=19, first_name="Abigail", last_name="Rivera", age=28),
    UserRecord(id=20, first_name="Jackson", last_name="Evans", age=35),
)


@dataclass
class InMemoryUserSource(UserSourcePort):
    """Offline substitute for ``UsersRestAdapter`` with deterministic responses.

    ``error`` makes every fetch raise it, which lets demos and tests drive the
    failure path without a network.
    """

    users: Sequence[UserRecord] = SAMPLE_USERS
    error: Optional[Exception] = None
    calls: int = field(default=0, init=False)

    def fetch_users(self) -> List[UserRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.users)


__all__ = ["InMemoryUserSource", "SAMPLE_USERS"]
