"""BUCL CLI — bucl run, bucl check."""
import sys
import os

from bucl.lexer import Lexer
from bucl.parser import Parser
from bucl.errors import BuclError
from bucl_runtime import get_config, run


def _read_source(filepath):
    if filepath == "-":
        return sys.stdin.read(), os.getcwd()
    if not os.path.exists(filepath):
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)
    with open(filepath, encoding="utf-8") as f:
        source = f.read()
    return source, os.path.dirname(os.path.abspath(filepath))


def main():
    if len(sys.argv) < 2:
        print("Usage: bucl <command> [file.bucl]", file=sys.stderr)
        print("Commands: run, check", file=sys.stderr)
        sys.exit(1)

    command = sys.argv[1]

    if command in ("run", "check"):
        if len(sys.argv) < 3:
            print(f"Usage: bucl {command} <file.bucl>", file=sys.stderr)
            sys.exit(1)
        filepath = sys.argv[2]
        source, base_dir = _read_source(filepath)

        try:
            if command == "check":
                Parser(Lexer(source).tokenize()).parse()
                print(f"OK: {filepath}")
                sys.exit(0)

            config = get_config()
            stream = config["output"]["stream"]
            result = run(
                source,
                base_dir=base_dir,
                on_output=print if stream else None,
                config=config,
            )
            if not stream:
                for line in result.output:
                    print(line)
            if result.error is not None:
                raise result.error

        except BuclError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
