# tests/test_cli.py
import subprocess
import sys
import os
import tempfile

BUCL_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def run_bucl(args: list[str], stdin: str | None = None, cwd: str = BUCL_DIR) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = BUCL_DIR + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-m", "bucl.cli"] + args,
        capture_output=True, text=True, cwd=cwd, input=stdin, env=env,
    )


def write_script(directory: str, source: str, name: str = "main.bucl") -> str:
    path = os.path.join(directory, name)
    with open(path, "w") as f:
        f.write(source)
    return path


def test_bucl_no_args():
    result = run_bucl([])
    assert result.returncode != 0
    assert "Usage" in result.stderr


def test_bucl_unknown_command():
    result = run_bucl(["foobar"])
    assert result.returncode != 0
    assert "Unknown command" in result.stderr


def test_bucl_check_valid():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_script(tmpdir, 'echo "Hello, BUCL!"')
        result = run_bucl(["check", path])
    assert result.returncode == 0
    assert "OK" in result.stdout


def test_bucl_check_invalid():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_script(tmpdir, '"nope"')
        result = run_bucl(["check", path])
    assert result.returncode == 1
    assert "Error: Line 1" in result.stderr


def test_bucl_check_missing_file():
    result = run_bucl(["check", "/nonexistent/file.bucl"])
    assert result.returncode != 0
    assert "file not found" in result.stderr


def test_bucl_check_no_file_arg():
    result = run_bucl(["check"])
    assert result.returncode != 0


def test_bucl_run_prints_output():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_script(tmpdir, '{n} = "World"\necho "Hello, {n}!"\necho bye')
        result = run_bucl(["run", path])
    assert result.returncode == 0
    assert result.stdout == "Hello, World!\nbye\n"


def test_bucl_run_uses_functions_next_to_script():
    with tempfile.TemporaryDirectory() as tmpdir:
        os.makedirs(os.path.join(tmpdir, "functions"))
        write_script(os.path.join(tmpdir, "functions"), '{return} = "<{0}>"', "wrap.bucl")
        path = write_script(tmpdir, '{w} wrap "x"\necho {w}')
        result = run_bucl(["run", path])
    assert result.returncode == 0
    assert result.stdout == "<x>\n"


def test_bucl_run_error_keeps_earlier_output():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_script(tmpdir, "echo first\nnosuchthing\necho never")
        result = run_bucl(["run", path])
    assert result.returncode == 1
    assert result.stdout == "first\n"
    assert "Error: Unknown function: 'nosuchthing'" in result.stderr


def test_bucl_run_from_stdin():
    result = run_bucl(["run", "-"], stdin='echo "from stdin"\n')
    assert result.returncode == 0
    assert result.stdout == "from stdin\n"


def test_bucl_run_reads_config_from_working_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        with open(os.path.join(tmpdir, "bucl.config"), "w") as f:
            f.write("output:\n  stream: false\ntrace: true\n")
        path = write_script(tmpdir, "echo a\necho b")
        result = run_bucl(["run", path], cwd=tmpdir)
    assert result.returncode == 0
    assert result.stdout == "a\nb\n"
    assert "[bucl] line 1: echo" in result.stderr


def test_bucl_run_no_file_arg():
    result = run_bucl(["run"])
    assert result.returncode != 0
