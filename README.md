# gator

`gator` is a small command-line RSS aggregator. You register users and add
feeds. Each user follows the feeds they care about. Users, feeds and follows
are kept in a local SQLite database. The package needs nothing outside the
Python standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Configuration

`gator` reads its settings from `.gatorconfig.json` in your home directory.
The file holds a JSON object with two string keys:

```json
{"db_url": "/path/to/gator.db", "current_user_name": ""}
```

- `db_url` names the SQLite database. It may be a file path, `:memory:`, or a
  `sqlite:///` or `sqlite://` URL. If it is empty, an in-memory database is
  used, and nothing is kept between runs. The tables are created on first use.
- `current_user_name` is the logged-in user. The `register` and `login`
  commands set it and save the file as one line of compact JSON.

If the file is missing or is not a valid JSON object of strings, `gator`
prints `error reading config: ...` and exits with status 1.

## Usage

```
gator <command> [args...]
```

You can also run `python -m gator.cli <command> [args...]`.

| Command                   | What it does                                                      |
|---------------------------|-------------------------------------------------------------------|
| `register <name>`         | Create a user and make it the current user                        |
| `login <name>`            | Switch to an existing user                                        |
| `users`                   | List all users and mark the current one with `(current)`          |
| `reset`                   | Delete all users, along with their feeds and follows              |
| `addfeed <name> <url>`    | Add a feed owned by the current user and follow it                |
| `feeds`                   | List every feed with its details and owner                        |
| `follow <url>`            | Make the current user follow a feed that was already added        |
| `following`               | List the names of the feeds the current user follows              |
| `unfollow <url>`          | Stop following a feed                                             |
| `agg`                     | Fetch one fixed sample RSS feed and print it                      |

`addfeed`, `follow`, `following` and `unfollow` need a logged-in user. They
fail if `current_user_name` does not name a registered user.

User names and feed URLs are unique. A user cannot follow the same feed twice.

Each command checks how many arguments it gets. If the count is wrong, it
prints a usage line such as `usage: follow <feed_url>`. An unknown command
prints `command not found`. Running `gator` with no command prints
`Usage: cli <command> [args...]`. In every error case, the message goes to
standard error and the exit status is 1.

### Example session

```
gator register alice
gator addfeed "Example Blog" https://blog.example.com/index.xml
gator register bob
gator follow https://blog.example.com/index.xml
gator following
gator unfollow https://blog.example.com/index.xml
gator users
```

## Fetching feeds

`gator.rss.fetch_feed(url, timeout=10.0)` downloads a feed and sends `gator`
as its User-Agent. It parses the body whatever the HTTP status.
`gator.rss.parse_feed(data)` turns RSS bytes or text into an `RSSFeed`. An
`RSSFeed` has `title`, `link`, `description` and a list of `RSSItem`. Each
item has `title`, `link`, `description` and `pub_date`. HTML entities in
titles and descriptions are unescaped. Malformed XML raises `ValueError`.

## Using the library

- `gator.config`: `Config` (with `set_user`), `read`, `write` and
  `config_file_path`.
- `gator.queries`: `connect(db_url)`, `create_schema(conn)` and `Queries`.
  `Queries` has create, get, list and delete methods for users, feeds and
  feed follows. A lookup that must find one row and finds none raises
  `NotFoundError`. `Queries.transaction()` is a context manager. It commits
  when the block ends and rolls back if the block raises.
- `gator.models`: the `User`, `Feed`, `FeedFollow` and `FeedFollowRow`
  records.
- `gator.commands`: `Command`, `Commands`, `State`, `CommandError` and the
  `logged_in` wrapper.
- `gator.cli`: `build_commands()` and `main(argv=None)`. `main` returns the
  exit status.

## What it does not do

`agg` fetches one fixed feed and prints it. It does not fetch the feeds you
have added. It does not run on a schedule. Posts are not stored in the
database, and there is no command to browse them. Storage is SQLite only;
`gator` does not connect to a database server.