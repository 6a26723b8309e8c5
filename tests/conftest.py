from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from src.timesheet_admin.timesheet_admin.admin_settings.model import AdminSettings
from src.timesheet_admin.timesheet_admin.charge_codes.model import ChargeCode
from src.timesheet_admin.timesheet_admin.common.authorization import Actor
from src.timesheet_admin.timesheet_admin.container import assemble
from src.timesheet_admin.timesheet_admin.core.enums import Role
from src.timesheet_admin.timesheet_admin.notifications.queue import NotificationCenter
from src.timesheet_admin.timesheet_admin.timesheet.model import TimeEntry
from src.timesheet_admin.timesheet_admin.users.model import User

TODAY = date(2024, 3, 10)

ADMIN_ID = 1
EMPLOYEE_ID = 2


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeUsersRepo:
    def __init__(self):
        self._next_id = 1
        self._users: dict[int, User] = {}

    def add(self, *, email, fmno, name=None, roles=(Role.EMPLOYEE,)) -> User:
        uid = self.create_user(email=email, name=name, fmno=fmno, roles=frozenset(roles))
        return self._users[uid]

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self._users.values() if u.email == email), None)

    def find_conflicting(self, *, email, fmno, exclude_id=None):
        for u in self._users.values():
            if u.user_id != exclude_id and (u.email == email or u.fmno == fmno):
                return u
        return None

    def list_all(self):
        return sorted(self._users.values(), key=lambda u: (u.name or "", u.user_id))

    def create_user(self, *, email, name, fmno, roles):
        uid = self._next_id
        self._next_id += 1
        self._users[uid] = User(
            user_id=uid,
            email=email,
            name=name,
            fmno=fmno,
            roles=frozenset(roles),
            created_at=datetime(2024, 1, 2, 9, 0, 0),
        )
        return uid

    def update_user(self, user_id, *, email, name, fmno, roles):
        current = self._users.get(int(user_id))
        if not current:
            return False
        self._users[int(user_id)] = replace(current, email=email, name=name, fmno=fmno, roles=frozenset(roles))
        return True

    def delete_by_id(self, user_id):
        return self._users.pop(int(user_id), None) is not None


class FakeTimeEntriesRepo:
    def __init__(self):
        self._next_id = 1
        self._entries: dict[tuple[int, int, date], TimeEntry] = {}

    def add(self, *, user_id, charge_code_id, work_date, hours) -> TimeEntry:
        self.upsert(user_id=user_id, charge_code_id=charge_code_id, work_date=work_date, hours=hours)
        return self._entries[(user_id, charge_code_id, work_date)]

    def all(self):
        return list(self._entries.values())

    def count_for_code(self, charge_code_id) -> int:
        return sum(1 for e in self._entries.values() if e.charge_code_id == charge_code_id)

    def list_for_user(self, *, user_id, start, end):
        return sorted(
            (e for e in self._entries.values() if e.user_id == user_id and start <= e.work_date <= end),
            key=lambda e: (e.work_date, e.charge_code_id),
        )

    def get_cell(self, *, user_id, charge_code_id, work_date):
        return self._entries.get((user_id, charge_code_id, work_date))

    def upsert(self, *, user_id, charge_code_id, work_date, hours):
        key = (user_id, charge_code_id, work_date)
        current = self._entries.get(key)
        entry_id = current.entry_id if current else self._next_id
        if not current:
            self._next_id += 1
        self._entries[key] = TimeEntry(
            entry_id=entry_id,
            user_id=user_id,
            charge_code_id=charge_code_id,
            work_date=work_date,
            hours=hours,
        )
        return entry_id

    def delete_cell(self, *, user_id, charge_code_id, work_date):
        return self._entries.pop((user_id, charge_code_id, work_date), None) is not None


class FakeChargeCodesRepo:
    def __init__(self, entries: FakeTimeEntriesRepo):
        self._entries = entries
        self._next_id = 1
        self._codes: dict[int, ChargeCode] = {}

    def _with_count(self, code: ChargeCode) -> ChargeCode:
        return replace(code, entries_count=self._entries.count_for_code(code.charge_code_id))

    def add(self, code, description, *, is_active=True) -> ChargeCode:
        cid = self.create(code=code, description=description, is_active=is_active)
        return self.get_by_id(cid)

    def get_by_id(self, charge_code_id):
        code = self._codes.get(int(charge_code_id))
        return self._with_count(code) if code else None

    def get_by_code(self, code):
        found = next((c for c in self._codes.values() if c.code == code), None)
        return self._with_count(found) if found else None

    def list_all(self, *, active_only=False):
        codes = [c for c in self._codes.values() if c.is_active or not active_only]
        return [self._with_count(c) for c in sorted(codes, key=lambda c: c.code)]

    def count_entries(self, charge_code_id):
        return self._entries.count_for_code(int(charge_code_id))

    def create(self, *, code, description, is_active):
        cid = self._next_id
        self._next_id += 1
        self._codes[cid] = ChargeCode(charge_code_id=cid, code=code, description=description, is_active=is_active)
        return cid

    def update(self, charge_code_id, *, description, is_active):
        current = self._codes.get(int(charge_code_id))
        if not current:
            return False
        self._codes[int(charge_code_id)] = replace(current, description=description, is_active=is_active)
        return True

    def delete_by_id(self, charge_code_id):
        return self._codes.pop(int(charge_code_id), None) is not None


class FakeSettingsRepo:
    def __init__(self):
        self.row = None
        self.creates = 0

    def get(self):
        return self.row

    def create(self, *, oldest, latest):
        self.creates += 1
        if self.row is None:
            self.row = AdminSettings(settings_id=1, oldest_editable_period=oldest, latest_editable_period=latest)
        return self.row

    def update(self, settings_id, *, oldest, latest):
        self.row = AdminSettings(settings_id=settings_id, oldest_editable_period=oldest, latest_editable_period=latest)
        return self.row


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repos():
    entries = FakeTimeEntriesRepo()
    users = FakeUsersRepo()
    codes = FakeChargeCodesRepo(entries)

    users.add(email="admin@example.com", fmno="100001", name="Admin Demo", roles=(Role.ADMIN,))
    users.add(email="jane@example.com", fmno="100200", name="Jane Employee")

    codes.add("ADMIN-OPS", "Internal operations")
    codes.add("PROJ-001", "Client Project Alpha - Development")
    codes.add("OLD-001", "Retired engagement", is_active=False)

    return SimpleNamespace(users=users, charge_codes=codes, settings=FakeSettingsRepo(), entries=entries)


@pytest.fixture
def admin():
    return Actor(user_id=ADMIN_ID, roles=frozenset({Role.ADMIN}))


@pytest.fixture
def employee():
    return Actor(user_id=EMPLOYEE_ID, roles=frozenset({Role.EMPLOYEE}))


@pytest.fixture
def container(repos, clock):
    return assemble(
        users_repo=repos.users,
        charge_codes_repo=repos.charge_codes,
        settings_repo=repos.settings,
        time_entries_repo=repos.entries,
        notifications=NotificationCenter(clock=clock),
        timesheet_kwargs={"today": lambda: TODAY},
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.timesheet_admin.timesheet_admin.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, email: str, fmno: str):
    return client.post("/", data={"email": email, "fmno": fmno})


@pytest.fixture
def admin_client(client):
    sign_in(client, "admin@example.com", "100001")
    return client


@pytest.fixture
def employee_client(client):
    sign_in(client, "jane@example.com", "100200")
    return client
