"""BUCL MCP Server — exposes BUCL check/run tools via MCP protocol."""

import os

from mcp.server.fastmcp import FastMCP

from bucl.lexer import Lexer
from bucl.parser import Parser
from bucl.errors import BuclError
from bucl_runtime import run

mcp = FastMCP("bucl")


def _read(filepath: str):
    """Return (source, None) or (None, error message)."""
    try:
        with open(filepath, encoding="utf-8") as f:
            return f.read(), None
    except FileNotFoundError:
        return None, f"Error: file not found: {filepath}"
    except (OSError, UnicodeDecodeError) as e:
        return None, f"Error reading file: {e}"


@mcp.tool()
def bucl_write(filepath: str, source: str) -> str:
    """Write BUCL source code to a file. Use this to create new .bucl scripts
    or function scripts under a functions/ directory.

    Args:
        filepath: Path to the .bucl file to create (e.g. "greet.bucl")
        source: The BUCL source code to write
    """
    return write_bucl_file(filepath, source)


def write_bucl_file(filepath: str, source: str) -> str:
    """Core logic for writing a bucl file — testable without MCP."""
    if not filepath.endswith(".bucl"):
        return "Error: filepath must end with .bucl"
    try:
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(source)
        return f"Saved: {filepath}"
    except OSError as e:
        return f"Error writing file: {e}"


@mcp.tool()
def bucl_check(filepath: str) -> str:
    """Check BUCL syntax without running. Reports indentation and statement errors.

    Args:
        filepath: Path to the .bucl file to check
    """
    return check_bucl_file(filepath)


def check_bucl_file(filepath: str) -> str:
    """Core logic for checking a bucl file — testable without MCP."""
    source, error = _read(filepath)
    if error:
        return error

    try:
        Parser(Lexer(source).tokenize()).parse()
        return f"OK: {filepath}"
    except BuclError as e:
        return f"Error: {e}"


@mcp.tool()
def bucl_run(filepath: str) -> str:
    """Run a BUCL script and return everything it echoed.

    Function scripts are looked up in the functions/ folder next to the file.

    Args:
        filepath: Path to the .bucl file to run
    """
    return run_bucl_file(filepath)


def run_bucl_file(filepath: str) -> str:
    """Core logic for running a bucl file — testable without MCP."""
    source, error = _read(filepath)
    if error:
        return error

    base_dir = os.path.dirname(os.path.abspath(filepath))
    result = run(source, base_dir=base_dir)

    output = result.text
    if result.error is not None:
        prefix = f"{output}\n" if output else ""
        return f"{prefix}Error during execution: {result.format_error()}"
    return output if output else "(program produced no output)"


BUCL_LANGUAGE_GUIDE = """\
# Writing BUCL Programs

BUCL is a small line-oriented scripting language. Every line is one
statement; indentation (spaces or tabs) opens a block.

## Statements

```
{target} function arg1 arg2 ...
function arg1 arg2 ...
```

Arguments are `{variable}` references, `"quoted strings"` or bare words.
Quoted strings interpolate: `"Hello {name}"`. Escapes: \\" \\n \\t \\\\

```
{name} = "World"
echo "Hello, {name}!"
```

## Arrays and records

```
{colors} = "red" "green" "blue"     # {colors/0}.. {colors/count} = 3
echo "{colors}"                     # red green blue
{n} count {colors}                  # {colors} expands to three arguments

{db/host} = "myserver"
{db/port} = "3308"
{r} connect {db}                    # passes host and port by name
```

`{word/0}` on a single value is its first character.

## Control flow

```
if {x} = "hello"
    echo "got hello"
elseif {x} > "10"
    echo "bigger than ten"
else
    echo "something else"

{e} each "Alice" "Bob"
    echo "{e/index}: {e/value}"

{r} repeat 3
    echo "Iteration {r/index} of {r/count}"
```

Operators: = != > < >= <= (numeric when both sides are numbers).

## Built-ins

= echo count length cmp getvar setvar strpos substr math random sleep
readfile writefile if elseif else each repeat

Standard library scripts: reverse explode implode maxlength slice

## Functions

A function is a file `functions/<name>.bucl` next to the calling script.
Inside it: `{0}`, `{1}`.. positional args, `{argc}`, `{args/0}`..,
named args by variable name, `{target}`. Set `{return}` (and
`{return/0}`.. for arrays) to hand back a result.

```
# functions/greet.bucl
{return} = "Hello, {0}!"
```

1. Lines starting with # are comments
2. A line cannot start with a quoted string
3. Blocks must be indented consistently
4. Files must end with .bucl extension
"""


@mcp.prompt()
def bucl_guide() -> str:
    """Complete guide to writing BUCL programs. Use this when writing .bucl files."""
    return BUCL_LANGUAGE_GUIDE


if __name__ == "__main__":
    mcp.run(transport="stdio")
