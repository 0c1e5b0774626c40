# ambros

A small command keeper for the shell. It keeps a local database of
commands, with names, tags, categories and descriptions, so you can find
them again and look at their history.

## Install

```
pip install .
```

Python 3.11 or later is required. The package has no third-party
dependencies; storage is a single SQLite file.

## Command line

Global options go before the action:

- `--repository PATH` – use this database file instead of the default
  `~/.ambros/ambros.db`.
- `--debug` – enable debug logging.

Show the version:

```
ambros version
ambros version --short
```

Store a command for later:

```
ambros store echo "hello world"
ambros store -n backup -t daily rsync -av src/ dest/
ambros store -c "file ops" -d "List files" ls -la
ambros store --force -n backup rsync -av src/ other/
```

Options of `store` (they come before the command to store):

- `-n`, `--name` – use this as the command's ID; otherwise an ID of the
  form `STORED-<nanoseconds>` is generated.
- `-d`, `--description` – a description, kept in the command's output field.
- `-t`, `--tag` – a tag; repeat the option or separate tags with commas.
- `-c`, `--category` – a category.
- `--force` – overwrite a command that already has the given name.

A stored command always gets the tag `stored` in addition to any tags you
give. Naming a command that already exists is refused unless `--force` is
set.

Generate random sample commands, for trying things out:

```
ambros test
ambros test -n 10
```

Errors are printed to standard error and the exit status is 1.

## Library use

```python
from ambros.configuration import Configuration
from ambros.repository import Repository
from ambros.models import Command

config = Configuration(None)

with Repository(config.repository_full_name(), None) as repo:
    repo.put(Command(id="greet", name="echo", arguments=["hello"], status=True))
    for command in repo.get_limit_commands(10):
        print(command.as_stored_command())
    print(repo.search_by_tag("stored"))
```

Modules:

- `ambros.models` – `Command`, `ExecutedCommand`, `Template`, `Schedule`,
  `CommandChain`, `CommandTemplate` and `SearchQuery`, with JSON round trips
  (`Command.to_json` / `Command.from_json`) and the text forms used in
  listings (`as_history`, `as_stored_command`, `as_flat_command`).
  `Template.build_command` fills `{name}` variables and `{0}`, `{1}`...
  positional arguments and splits the result into words.
- `ambros.repository` – `Repository`, the on-disk store: `put`, `get`,
  `delete`, most recent first with `get_limit_commands`, search with
  `search_by_tag` (case-insensitive) and `search_by_status`, bookmarked
  commands with `push`, `get_all_stored_commands`, `find_in_store_by_id`
  and `delete_stored_command`, plus `backup_schema` (writes `<path>.bkp`)
  and `delete_schema`. Missing entries raise `NotFoundError`.
- `ambros.analytics` – `Analytics.analyze_commands` returns an
  `AnalyticsReport` with totals, success rate and per-name counts.
- `ambros.templates` – `render` fills `{{.name}}` placeholders;
  `CommandTemplate.execute` and `TemplateManager.execute` turn a template
  into a `Command`. Bad templates raise `TemplateError`.
- `ambros.chain` – `Chain.validate_chain` raises `ChainError` for a chain
  without a name or without commands.
- `ambros.scheduler` – `Scheduler` keeps schedules by command ID and, once
  started, checks them every minute in a background thread.
- `ambros.api` – `Server.setup_routes` returns a WSGI application serving
  `/commands`, `/commands/<id>` and `/health` as JSON.
- `ambros.log` – `new_logger` builds a JSON-lines or console logger from a
  `LogConfig`; helpers attach structured fields to records.
- `ambros.errors` – `AppError` with its `ErrorCode` values and the
  `is_not_found`, `is_invalid_input` and `is_internal_error` helpers.
- `ambros.utilities`, `ambros.parrot`, `ambros.configuration` – small
  helpers, console-plus-log output, and the default database location.

## What it does not do

- It never runs the commands it keeps. There is no command to execute a
  stored command or a template; the scheduler only records when an enabled
  schedule fell due, and `Chain.execute_chain` only logs the chain's name.
- There is no command-line action for templates, analytics or the HTTP
  API. The WSGI application from `ambros.api` must be served by a WSGI
  server of your choice.
- `ambros test --cleanup` is accepted but removes nothing.
- `Repository.get_template` always raises `NotFoundError`; templates are
  not kept in the database.

## Tests

```
pip install .[test]
pytest
```