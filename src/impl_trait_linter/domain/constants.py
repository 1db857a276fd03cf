"""Lint identity and fixed texts shared by the rule, reporters and CLI."""

LINT_CODE: str = "W9401"
LINT_SYMBOL: str = "impl-trait-in-params"
LINT_MESSAGE: str = "`impl Trait` used as a function parameter"
SUGGESTION_MESSAGE: str = "add a type parameter"

# Synthetic generic parameters desugared from `impl Trait` are named
# "impl <bound>"; the bound text is everything after this prefix.
OPAQUE_PREFIX: str = "impl "
GENERIC_NAME_PLACEHOLDER: str = "{ /* Generic name */ }"

CONFIG_SECTION: str = "impl-trait-linter"
CLIPPY_CONFIG_FILES: tuple[str, ...] = ("clippy.toml", ".clippy.toml")

DEFAULT_EXCLUDED_DIRS: frozenset[str] = frozenset(
    {
        "target",
        ".git",
        ".hg",
        "node_modules",
        ".cargo",
        "vendor",
    }
)

LEVEL_WARN: str = "warn"
LEVEL_DENY: str = "deny"

LINT_EXPLANATION: str = """\
### What it does
Lints when `impl Trait` is being used in a function's parameters.

### Why restrict this?
Turbofish syntax (`::<>`) cannot be used to specify the type of an
`impl Trait` parameter, making `impl Trait` less powerful. Readability may
also be a factor.

### Example
```rust
trait MyTrait {}
pub fn foo(x: impl MyTrait) {
    // [...]
}
```

Use instead:
```rust
trait MyTrait {}
pub fn foo<T: MyTrait>(x: T) {
    // [...]
}
```

### Configuration
- `avoid-breaking-exported-api` (default `true`): skip trait methods, since
  adding a generic parameter to a trait method breaks every implementor.
  Read from `[tool.impl-trait-linter]` in pyproject.toml or from clippy.toml.
- `level` (default `warn`): `deny` makes the run exit with status 1.
- `exclude-paths`: path fragments skipped during file discovery.
"""
