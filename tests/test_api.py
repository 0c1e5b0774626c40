import json
from http import HTTPStatus
from wsgiref.util import setup_testing_defaults

import pytest

from ambros.api import Server
from ambros.models import Command
from ambros.repository import Repository


def _call(app, method, path):
    environ = {}
    setup_testing_defaults(environ)
    environ["REQUEST_METHOD"] = method
    environ["PATH_INFO"] = path
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = dict(headers)

    body = b"".join(app(environ, start_response))
    return int(captured["status"].split()[0]), captured["headers"], body


@pytest.fixture
def repo(tmp_path):
    repository = Repository(tmp_path / "api.db")
    yield repository
    repository.close()


class _BrokenRepo:
    def get(self, command_id):
        raise RuntimeError("disk gone")

    def get_all_commands(self):
        raise RuntimeError("disk gone")


def test_health(repo):
    app = Server(repo).setup_routes()
    code, headers, body = _call(app, "GET", "/health")
    assert code == HTTPStatus.OK
    assert headers["Content-Type"] == "application/json"
    assert json.loads(body) == {"status": "healthy"}


def test_list_commands(repo):
    repo.put(Command(id="a", name="ls"))
    repo.put(Command(id="b", name="pwd"))
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "GET", "/commands")
    assert code == HTTPStatus.OK
    assert {item["id"] for item in json.loads(body)} == {"a", "b"}


def test_list_commands_rejects_other_methods(repo):
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "POST", "/commands")
    assert code == HTTPStatus.METHOD_NOT_ALLOWED
    assert body == b"Method not allowed\n"


def test_list_commands_repository_error():
    app = Server(_BrokenRepo()).setup_routes()
    code, _, body = _call(app, "GET", "/commands")
    assert code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert b"disk gone" in body


def test_get_single_command(repo):
    repo.put(Command(id="x1", name="echo", arguments=["hi"]))
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "GET", "/commands/x1")
    data = json.loads(body)
    assert code == HTTPStatus.OK
    assert (data["id"], data["name"], data["arguments"]) == ("x1", "echo", ["hi"])


def test_get_command_requires_id(repo):
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "GET", "/commands/")
    assert code == HTTPStatus.BAD_REQUEST
    assert body == b"Command ID required\n"


def test_get_missing_command(repo):
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "GET", "/commands/nope")
    assert code == HTTPStatus.NOT_FOUND
    assert body == b"Command not found\n"


def test_unknown_path(repo):
    app = Server(repo).setup_routes()
    code, _, body = _call(app, "GET", "/elsewhere")
    assert code == HTTPStatus.NOT_FOUND
    assert body == b"404 page not found\n"