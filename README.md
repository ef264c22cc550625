# postboard

postboard is a small JSON web service that keeps users, their posts and
the comments left on those posts in an SQLite database. It is built on
Flask.

## Installing

    pip install .

To run the test suite as well:

    pip install ".[test]"
    pytest

## Choosing the database

Both commands below need to know where the database lives. Give it with
`-u`/`--database-url`, or set `DATABASE_URL`. Settings from a `.env` file
(found from the working directory upwards) are loaded first. The value
may be a plain file path or an SQLite URL such as `sqlite:board.sqlite3`
or `sqlite:///var/lib/board.sqlite3`. A query string after `?` is ignored.

    export DATABASE_URL=sqlite:board.sqlite3

## Running the server

    postboard

This command opens the database and creates the tables if they are not
there yet. It then serves the API, by default on `127.0.0.1:8080`.
Use `--host` and `--port` to change the address.

## Managing the schema

`postboard-migrate` takes one command, `up` by default:

    postboard-migrate            # same as: postboard-migrate up
    postboard-migrate down       # drop the tables
    postboard-migrate refresh    # drop the tables, then create them again
    postboard-migrate status     # list each migration as Applied or Pending

Applied migrations are recorded in a `seaql_migrations` table. The schema
has three tables:

- `user`: `id`, `name`, `surname`
- `post`: `id`, `title`, `text`, `user_id`, which refers to `user`
- `comm`: `id`, `text`, `post_id`, `user_id`, which refer to `post` and `user`

Foreign keys are enforced.

## API

| Method | Path                        | Body                                  | Result |
|--------|-----------------------------|---------------------------------------|--------|
| POST   | `/posts`                    | `{"title", "text", "user_id"}`        | the new post; 409 if this user already has a post with that title |
| GET    | `/posts`                    |                                       | all posts, by id |
| GET    | `/posts/<id>`               |                                       | one post; 404 if missing |
| GET    | `/posts/<id>/with_comment`  |                                       | the post with a `comments` list; 404 if missing |
| PUT    | `/posts/<id>`               | `{"title"?, "text"?}`                 | the updated post; fields left out or `null` stay as they are; 404 if missing |
| DELETE | `/posts/<id>`               |                                       | deletes the post's comments, then the post; 404 if missing |
| POST   | `/create_user`              | `{"name", "surname"}`                 | the new user; 409 if that name and surname already exist |
| GET    | `/users`                    |                                       | all users, by id |
| GET    | `/users/<id>`               |                                       | one user; 404 if missing |
| DELETE | `/users/<id>`               |                                       | deletes the user; 404 if missing |
| POST   | `/create_comm`              | `{"text", "post_id", "user_id"}`      | the new comment; 404 if the post is missing, 409 for the same text by the same user on the same post |

Successful responses are JSON. Errors come back as a short plain-text
message with the matching status code:

- 400 when the body is not sent as JSON, cannot be parsed, misses a
  field, or has a field of the wrong type. Ids must be whole numbers that
  fit in a signed 32-bit integer.
- 404 when an id in the path does not fit in a signed 32-bit integer.
- 500 when a database operation fails.

Example:

    curl -X POST http://127.0.0.1:8080/create_user \
         -H 'Content-Type: application/json' \
         -d '{"name": "Ada", "surname": "Example"}'

## Using it from Python

`postboard.app.create_app` builds the Flask application around a
database file and migrates it:

    from postboard.app import create_app

    app = create_app("board.sqlite3")
    client = app.test_client()
    print(client.get("/posts").get_json())

The store can also be used directly. `postboard.repository.Database`
opens a file, applies pending migrations, and works as a context manager.
It returns the `User`, `Post` and `Comment` records from
`postboard.models`, and raises `DatabaseError` when a query fails:

    from postboard.repository import Database

    with Database("board.sqlite3") as db:
        user = db.insert_user("Ada", "Example")
        post = db.insert_post("Hello", "First post", user.id)
        db.insert_comment("Nice", post.id, user.id)
        print([c.to_dict() for c in db.comments_for_post(post.id)])

`postboard.schema.migrate_up` and `migrate_down` apply or roll back the
schema on any open `sqlite3` connection.

## What it does not do

- It stores data in SQLite files only. There is no support for other
  database servers.
- There is no authentication. Any client can create, change or delete
  any record.
- Deleting a user does not delete that user's posts or comments. While
  such records exist, the foreign keys stop the deletion and the request
  returns 500.
- There is no route at `/`.