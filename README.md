# go101

A small web server for the Go 101 book: it serves the article pages under
`pages/`, their images, and the site's static files under `web/static/`.
It can also fetch every page from itself and write them out as plain files
for hosting as a static site.

## Installing

    pip install .

To run the tests:

    pip install ".[test]"
    pytest

## What you need besides this package

The package holds the server, not the book. It expects a project folder with:

- `pages/<group>/`: one folder per page group holding the article HTML files,
  optionally a `101.html` whose index lies between the comments
  `<!-- index starts (don't remove) -->` and `<!-- index ends (don't remove) -->`,
  and optionally a `res/` folder of images.
- `web/static/`: files served under `/static/`.
- `web/templates/article`, `web/templates/go-get` and `web/templates/redirect`:
  Jinja2 templates. All three are loaded when the server starts; a missing one
  raises `jinja2.TemplateNotFound`.

The templates receive these names:

- `article`: `Article` (with `Content`, `Title`, `Index`, `TitleWithoutTags`,
  `Group`, `Filename`, `FilenameWithoutExt`), `Title` and `Theme`.
  `Content`, `Title` and `Index` are inserted without escaping.
- `go-get`: `RootPackage`, `GoGetSourceRepo`, `GoDocWebsite`.
- `redirect`: `RedirectPage`.

When the current folder holds a file named `go101.go`, it is taken as the
project folder. Otherwise the project is looked for under `src/` in each
entry of `GOPATH` (or `~/go`), and failing that the current folder is used.

## Running the server

    go101

The server listens on port 55555 by default. If that port is taken it tries
the next one up. Once started it opens the root page in your web browser.

Options (each may be written with one dash or two):

- `--port PORT`: the port to listen on (default `55555`). If the `PORT`
  environment variable is set, it takes precedence; the browser is then not
  opened and no update is started.
- `--theme THEME`: the theme passed to the article template as `Theme`
  (`auto`, `dark` or `light`).
- `--nob`: do not open a browser.
- `--gen`: HTML generation mode. See below.

The server logs two addresses:

- `http://localhost:PORT` gives the non-cached version. Templates are read
  again and pages rendered again on every request, which suits editing the book.
  The first request through `localhost` drops everything cached so far.
- `http://127.0.0.1:PORT` (or any other host name) gives the cached version.
  Rendered pages and templates are kept in memory.

Updating while it runs:

- When the current folder is the project folder (it holds `go101.go`), the
  server runs `git pull` there 30 seconds after starting and then once a day.
- Otherwise, when the command was started as `go101`, it runs
  `go install go101.org/go101@latest` once.

## URLs

- `/` and `/<page>`: pages of the `website` group (`/` serves `index.html`).
- `/res/...`: images of the `website` group.
- `/article/<page>.html`: pages of the `fundamentals` group.
- `/optimizations/...`, `/details-and-tips/...`, `/quizzes/...`,
  `/generics/...`, `/apps-and-libs/...`, `/blog/...`: the other page groups.
- `/<group>/res/...`: images for a page group (`/article/res/...` for
  `fundamentals`).
- `/static/...`: files from `web/static`.
- `/tinyrouter`, `/skia`, `/go101`, `/gold`, `/golds`, `/ebooktool`, `/nstd`,
  `/gotv`, `/godev` and their sub-paths: `go get` meta pages for the
  `go101.org` packages. A root path may carry a version such as `@v1.2.0`.

Item names are lower-cased before lookup. A missing article redirects to `/`
with status 404. A few old `fundamentals` article addresses (`go-sdk.html`,
`tools.html`, `tool-gold.html`, `tool-golds.html`) render the redirect
template pointing to where the pages live now.

## Generating static files

    go101 --gen

Run this from the project folder (it must hold `web/static/go101`). It starts
the server, runs `ebooktool -md2htmls` in each page group folder, fetches the
root page and every `.html` page of each group from the running server, copies
the static files and each group's `.png` and `.jpg` resources, and writes all
of them to a fresh `generated/` folder in the current directory. `ebooktool`
must be installed and on your `PATH`. The command exits with status 1 if
any step fails.

## Using it as a library

`go101.server.Go101` is a WSGI application:

    from wsgiref.simple_server import make_server
    from go101.server import Go101

    app = Go101(root=".", theme="dark")
    make_server("localhost", 8080, app).serve_forever()

`Go101.handle(path, host)` serves one request without WSGI and returns a
`go101.server.Response` with `status`, `headers` and `body`.

`go101.gen.gen_static_files(root_url, wd)` generates the static copy from a
server already running at `root_url` and returns the written files as a
mapping from relative names to bytes.

## What it does not do

- It does not include the book's pages, static files or templates.
- It does not convert Markdown to HTML itself; generation relies on the
  external `ebooktool` command.