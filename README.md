# gobuildtools

Helpers for maintaining Go repositories that hold many modules.

- `semconvgen` (`gobuildtools.generator`): renders Go source for semantic
  conventions from a specification git repository with a containerised
  template engine, then fixes identifier capitalisation and formats the
  result with `gofmt`.
- `gobuildtools.semver`: semantic versions with a leading `v`
  (`is_valid`, `compare`, `major`, `sort_versions`).
- `gobuildtools.diff`: finds which Go files of a set of modules changed
  since their release tags (`normalize_version`, `normalize_tag`,
  `collect_changed_files`, `GitClient`, `TagNotFoundError`).
- `gobuildtools.errors`: exception classes describing problems with module
  sets and release tags.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Generating semantic convention code

`semconvgen` needs `git`, `docker` and `gofmt` on the `PATH`.

```
semconvgen --input /path/to/specification/semantic_conventions --specver v1.26.0
```

Options:

| Option | Meaning |
| --- | --- |
| `-i`, `--input` | Directory of semantic convention YAML inside the specification git repository (required). |
| `--only` | Process only one type: `span`, `resource`, `event`, `metric_group`, `metric`, `units`, `scope`, `attribute_group`. |
| `-s`, `--specver` | Specification version tag to generate from. Defaults to the newest valid semver tag in the repository. |
| `-o`, `--output` | Output directory, absolute or relative to the root of the git repository you run from. Defaults to `semconv/<version>`. |
| `-c`, `--container` | Container image, default `otel/semconvgen`. |
| `-f`, `--filename` | Output file name, default `<basename of input>.go`. |
| `-t`, `--template` | Template file, default `template.j2` in the current directory. |
| `-p`, `--parameters` | Comma-separated `key=value` pairs passed to the template. |
| `-z`, `--capitalizations-path` | File with extra capitalisations, one per line; blank lines are ignored. |

The chosen version is checked out as a temporary git worktree, which is
removed afterwards. If the configuration is invalid (no input path, no
version tag found, a missing capitalisations file) the message and usage
are printed and the command exits with a non-zero status.

After rendering, identifiers such as `Http` become `HTTP` and `Mysql`
becomes `MySQL` (only where the next character is a capital, whitespace,
a digit, a word boundary or the end of the text); a few names are
replaced outright (`Lineno` becomes `LineNumber`, `RedisDatabase` becomes
`RedisDB`), and the `[[IMPORTPATH]]` marker is replaced by
`"go.opentelemetry.io/otel/semconv/<output directory name>"`.

The same steps are available as functions: `validate_config`, `render`,
`fix_identifiers` (or `fix_identifier_text` on a string),
`capitalizations` and `format_file`, all taking a `Config` or plain
values.

## Library use

```python
from gobuildtools.semver import sort_versions, major, compare
from gobuildtools.diff import normalize_version, normalize_tag

sort_versions(["v1.10.0", "v1.2.0", "v1.9.0"])   # ['v1.2.0', 'v1.9.0', 'v1.10.0']
major("v2.3.4")                                  # 'v2'
compare("v1.0.0-rc.1", "v1.0.0")                 # -1
normalize_version("0.1.2")                       # 'v0.1.2'
normalize_tag("modset", "v1.2.3")                # 'modset/v1.2.3'
```

`collect_changed_files(repo, modset, ver, tag_names)` looks up the
annotated tag `<tag_name>/<ver>` (or just `<ver>` for
`diff.REPO_ROOT_TAG`) for each tag name, and returns the `.go` files under
that tag name's path that differ from `HEAD`. A missing tag raises
`TagNotFoundError`. Any object with `head_commit`, `tag_commit` and
`files_changed` methods can be passed as `client` in place of `GitClient`.

## What this package does not do

There is no command for managing module sets: the package does not read a
versioning file, update `go.mod` or `version.go` files, create, verify or
delete release tags, or check dependencies between stable and unstable
modules. `collect_changed_files` must be given the tag names itself, and
the classes in `gobuildtools.errors` are provided for callers to raise;
nothing in the package raises them.