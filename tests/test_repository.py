import os
from datetime import datetime, timedelta, timezone

import pytest

from ambros.models import Command
from ambros.repository import NotFoundError, Repository, RepositoryProtocol


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "test.db")


@pytest.fixture
def repo(db_path):
    with Repository(db_path) as repository:
        yield repository


def _now():
    return datetime.now(timezone.utc)


@pytest.mark.parametrize(
    "cmd",
    [
        Command(
            id="test1",
            created_at=_now(),
            terminated_at=_now(),
            name="test",
            arguments=["arg1", "arg2"],
            status=True,
        ),
        Command(
            id="test2",
            created_at=_now(),
            terminated_at=_now(),
            name="tagged-cmd",
            arguments=["arg1"],
            tags=["test", "demo"],
            category="testing",
            status=True,
        ),
    ],
)
def test_put_and_get(repo, cmd):
    repo.put(cmd)
    found = repo.get(cmd.id)
    assert found.id == cmd.id
    assert found.name == cmd.name
    assert found.arguments == cmd.arguments
    assert found.tags == cmd.tags
    assert found.category == cmd.category
    assert found.created_at == cmd.created_at

    legacy = repo.find_by_id(cmd.id)
    assert legacy.id == cmd.id
    assert legacy.name == cmd.name


@pytest.fixture
def timed_repo(repo):
    base = _now()
    for cid, name, delta in [("1", "cmd1", 2), ("2", "cmd2", 1), ("3", "cmd3", 0)]:
        when = base - timedelta(hours=delta)
        repo.put(Command(id=cid, created_at=when, terminated_at=when, name=name))
    return repo


@pytest.mark.parametrize("limit,want", [(3, 3), (1, 1), (0, 0), (5, 3)])
def test_get_limit_commands(timed_repo, limit, want):
    results = timed_repo.get_limit_commands(limit)
    assert len(results) == want
    for newer, older in zip(results, results[1:]):
        assert newer.created_at >= older.created_at


def test_get_limit_commands_most_recent_first(timed_repo):
    assert [c.id for c in timed_repo.get_limit_commands(3)] == ["3", "2", "1"]


@pytest.fixture
def tagged_repo(repo):
    for cid, name, tags in [
        ("1", "cmd1", ["test", "demo"]),
        ("2", "cmd2", ["prod", "deploy"]),
        ("3", "cmd3", ["TEST", "debug"]),
    ]:
        repo.put(Command(id=cid, created_at=_now(), name=name, tags=tags))
    return repo


@pytest.mark.parametrize(
    "tag,want_ids",
    [
        ("test", ["1", "3"]),
        ("prod", ["2"]),
        ("nonexistent", []),
        ("TEST", ["1", "3"]),
    ],
)
def test_search_by_tag(tagged_repo, tag, want_ids):
    results = tagged_repo.search_by_tag(tag)
    assert sorted(c.id for c in results) == sorted(want_ids)


@pytest.mark.parametrize("success,want", [(True, 2), (False, 1)])
def test_search_by_status(repo, success, want):
    for cid, name, status in [
        ("success1", "cmd1", True),
        ("failed1", "cmd2", False),
        ("success2", "cmd3", True),
    ]:
        repo.put(Command(id=cid, created_at=_now(), name=name, status=status))
    results = repo.search_by_status(success)
    assert len(results) == want
    assert all(c.status == success for c in results)


def test_push_and_stored_commands(repo):
    cmd = Command(id="push-test", created_at=_now(), terminated_at=_now(), name="test-push")
    repo.push(cmd)

    stored = repo.find_in_store_by_id(cmd.id)
    assert stored.id == cmd.id
    assert stored.name == cmd.name

    all_stored = repo.get_all_stored_commands()
    assert len(all_stored) == 1
    assert all_stored[0].id == cmd.id
    assert repo.get_all_commands() == []


def test_delete_stored_commands(repo):
    repo.push(Command(id="stored1", name="cmd1"))
    repo.push(Command(id="stored2", name="cmd2"))

    repo.delete_stored_command("stored1")
    with pytest.raises(NotFoundError):
        repo.find_in_store_by_id("stored1")
    assert repo.find_in_store_by_id("stored2").name == "cmd2"

    repo.delete_all_stored_commands()
    assert repo.get_all_stored_commands() == []


def test_get_all_commands(repo):
    expected = [
        Command(id="test-1", created_at=_now(), name="cmd1"),
        Command(id="test-2", created_at=_now(), name="cmd2"),
    ]
    for cmd in expected:
        repo.put(cmd)
    commands = repo.get_all_commands()
    assert sorted(c.id for c in commands) == ["test-1", "test-2"]


def test_get_executed_commands(repo):
    base = _now()
    for i in range(3):
        repo.put(
            Command(
                id=f"test-{i}",
                created_at=base + timedelta(minutes=i),
                name=f"cmd{i}",
                status=i % 2 == 0,
            )
        )
    executed = repo.get_executed_commands(2)
    assert len(executed) == 2
    for i, item in enumerate(executed):
        assert item.order == i
        assert item.id
        assert item.command
    assert executed[0].id == "test-2"


def test_backup_schema(repo, db_path):
    repo.put(Command(id="keep", created_at=_now(), name="echo"))
    repo.backup_schema()
    backup_file = db_path + ".bkp"
    assert os.path.exists(backup_file)
    with Repository(backup_file) as restored:
        assert restored.get("keep").name == "echo"


def test_delete_schema(repo):
    cmd = Command(id="test", created_at=_now(), name="test")
    repo.put(cmd)
    repo.push(cmd)
    assert len(repo.get_all_commands()) == 1

    repo.delete_schema(True)
    assert repo.get_all_commands() == []
    assert repo.get_all_stored_commands() == []


def test_get_template(repo):
    with pytest.raises(NotFoundError, match="template not found"):
        repo.get_template("test-template")


def test_not_found_errors(repo):
    with pytest.raises(NotFoundError):
        repo.get("nonexistent")
    with pytest.raises(NotFoundError):
        repo.find_by_id("nonexistent")
    with pytest.raises(NotFoundError):
        repo.find_in_store_by_id("nonexistent")


def test_delete_removes_command_and_index(repo):
    repo.put(Command(id="gone", created_at=_now(), name="rm", tags=["x"]))
    repo.put(Command(id="kept", created_at=_now(), name="ls"))
    repo.delete("gone")
    with pytest.raises(NotFoundError):
        repo.get("gone")
    assert [c.id for c in repo.get_limit_commands(10)] == ["kept"]


def test_delete_missing_raises(repo):
    with pytest.raises(NotFoundError):
        repo.delete("missing")


def test_data_persists_across_reopen(db_path):
    with Repository(db_path) as first:
        first.put(Command(id="p", created_at=_now(), name="echo", arguments=["hi"]))
    with Repository(db_path) as second:
        assert second.get("p").arguments == ["hi"]


def test_repository_satisfies_protocol(repo):
    assert isinstance(repo, RepositoryProtocol) is True
    repo.put(Command(id="x", name="true"))
    assert repo.get("x").name == "true"