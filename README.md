# aftershock

A small, self-hosted blog made of three parts:

- **a content store** (`aftershock-storage`): posts and pages kept in SQLite,
  served over a JSON API under `/api/v1`;
- **a publishing tool** (`aftershock-cli`): turns a Markdown file into HTML
  (with syntax-highlighted code blocks) and sends it to the store;
- **a site** (`aftershock-site`): renders the home page, posts and the about
  page from the store's API.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the content store

The store reads its settings from the environment, or from a `.env` file in the
working directory:

- `DATABASE_URL` – the SQLite database: a file path, a `sqlite://` URL or a
  `file:` URI;
- `AFTERSHOCK_DB_PORT` – port to listen on, unless `--port` is given (the
  publishing tool and the site expect `3030`).

```
DATABASE_URL=blog.sqlite3 AFTERSHOCK_DB_PORT=3030 aftershock-storage
```

Options: `--host` (default `0.0.0.0`) and `--port`. The schema is created on
start-up if needed. Without `DATABASE_URL`, or without a port, the store
refuses to start.

### API

| Method | Path | Meaning |
| --- | --- | --- |
| GET | `/api/v1/posts` | published posts, newest first |
| POST | `/api/v1/posts` | create a post or page |
| GET | `/api/v1/posts/all` | every post, published or not |
| GET | `/api/v1/posts/meta` | published posts without bodies |
| GET | `/api/v1/posts/all-meta` | every post without bodies |
| GET/PUT/DELETE | `/api/v1/posts/{id}` | by numeric id |
| GET/PUT/DELETE | `/api/v1/posts/uid/{uid}` | by uid |
| GET, POST | `/api/v1/pages` | published pages; create |
| GET | `/api/v1/pages/all`, `/api/v1/pages/all-meta` | every page |
| GET | `/api/v1/pages/meta` | published **posts** without bodies |
| GET/PUT/DELETE | `/api/v1/pages/uid/{uid}` | by uid |

Request bodies must be JSON. Posts get a random 21-character uid; a page's uid
is its title in lower case, so a page titled `About` is found at
`/api/v1/pages/uid/about`. The uid routes look an entry up by uid alone,
whatever its kind. Fetching by uid only returns published content. Publishing
an entry through a uid route resets its creation time to the moment of
publishing; every update sets the update time.

`GET /api/v1/posts/{id}` returns the stored record itself, including `id` and
`published`. Fetching an entry that does not exist answers `404` with a plain
text message; updating or deleting one that does not exist, like any other
failure, answers `500`. A body that is not JSON answers `415` or `400`, and
one with missing or wrongly typed fields `422`.

## Writing and publishing

A document starts with a metadata block between `---` lines (the closing line
may also be `...`), written in TOML:

````markdown
---
title = "Hello"
kind = "post"
tags = ["notes", "python"]
summary = "A first entry."
---

Some *Markdown*, with tables, ~~strikethrough~~ and task lists:

- [x] written
- [ ] published

```python
print("highlighted")
```
````

`title`, `kind` and `tags` are required, `summary` is optional. `kind` is
`post` or `page`, and must match the command used to add it. New entries are
created unpublished. Code blocks are highlighted with inline styles in the
`nord` colour scheme; an unknown language is shown as plain text.

```
aftershock-cli post add --path hello.md
aftershock-cli post list
aftershock-cli post view --id <uid>
aftershock-cli post publish --id <uid>
aftershock-cli post update --path hello.md --id <uid>
aftershock-cli post delete --id <uid>
```

`article` is accepted in place of `post`, and `page` works the same way for
pages:

```
aftershock-cli page add --path about.md
aftershock-cli page publish --id about
```

Every command prints the store's answer as indented JSON; `list` shows every
entry, published or not, and `view` prints `null` if the store cannot be
reached. `update` replaces the title and body only. Short options (`-p`, `-i`)
work as well, and `--version` prints the version. On failure the tool prints
an error to standard error and exits with status 1. It talks to the store at
`http://127.0.0.1:3030/api/v1`.

## Running the site

```
aftershock-site
```

The site listens on `--addr` (default `$LEPTOS_SITE_ADDR`, else
`127.0.0.1:3000`) and reads from the store at `--api-base` (default
`http://127.0.0.1:3030/api/v1`). It serves:

- `/` – published posts grouped by year, newest first, with summaries;
- `/posts/<uid>` – a single post;
- `/about` – the published page whose uid is `about`;
- `/tags/<tag>` – a placeholder archive page.

Anything else answers `404` with a "not found" message. Dates are shown in
UTC+8. When the store cannot be reached, pages show a message instead of
content.

## What it does not do

- The site serves no static files: pages link a stylesheet at
  `/pkg/aftershock.css`, which has to be served by something else.
- There is no tag archive; `/tags/<tag>` only shows a placeholder message.
- The store's API has no authentication; keep it on a private address.

## Using it as a library

The pieces are importable on their own: `aftershock.document.parse` turns
Markdown text into a `ParsedDocument`, `aftershock.store.Store` works on an
SQLite connection from `aftershock.database.connect` (prepare it with
`aftershock.database.run_migrations`), `aftershock.server.create_app` and
`aftershock.site.create_app` build the two Flask applications, and
`aftershock.client.Client` wraps the API for scripts.