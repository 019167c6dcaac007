"""End-to-end tests for the `gae-support` inspection commands."""

import json
import re
from pathlib import Path

from gae_support.entrypoints.cli.main import gae_support
from tests.helpers.environ import FLEXIBLE_ENVIRON, STANDARD_ENVIRON

# pylint: disable=unused-argument
# pylint: disable=magic-value-comparison

BASE_ARGS = ["--no-flight-recorder"]


def assert_in_output(pattern: str, output: str) -> None:
    """Assert that a regex pattern is found in the output string."""
    if not re.search(pattern, output, re.MULTILINE):
        raise AssertionError(f"Pattern '{pattern}' not found in output:\n{output}")


def test_env_not_hosted(runner, fs):
    """Outside App Engine the command says so and exits cleanly."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "env"])
    assert result.exit_code == 0, result.output
    assert_in_output(r"^hosting: not-hosted$", result.output)
    assert_in_output("Not running on App Engine", result.output)


def test_env_standard(runner, fs, temp_dir):
    """On the standard runtime the identifiers are printed."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "env"], env=STANDARD_ENVIRON)
    assert result.exit_code == 0, result.output
    assert_in_output(r"^hosting: standard$", result.output)
    assert_in_output(r"^project: demo-project$", result.output)
    assert_in_output(r"^service: api$", result.output)
    assert_in_output(r"^version: 20261017t101500$", result.output)


def test_env_flexible(runner, fs, temp_dir):
    """The flexible runtime is detected from GAE_INSTANCE."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "env"], env=FLEXIBLE_ENVIRON)
    assert result.exit_code == 0, result.output
    assert_in_output(r"^hosting: flexible$", result.output)


def test_paths_not_hosted(runner, fs):
    """Paths resolve to the framework defaults under --base-path."""
    base = Path.cwd()
    result = runner.invoke(gae_support, [*BASE_ARGS, "--base-path", str(base), "paths"])
    assert result.exit_code == 0, result.output
    assert_in_output(rf"^storage: {re.escape(str(base / 'storage'))}$", result.output)
    assert_in_output(
        rf"^services_cache: {re.escape(str(base / 'bootstrap' / 'cache' / 'services.json'))}$",
        result.output,
    )


def test_paths_json_standard(runner, fs, temp_dir):
    """On App Engine storage and services resolve into the bucket directory."""
    result = runner.invoke(
        gae_support, [*BASE_ARGS, "paths", "--json"], env=STANDARD_ENVIRON
    )
    assert result.exit_code == 0, result.output

    paths = json.loads(result.output)
    bucket = temp_dir / "gae-support" / "storage"
    assert paths["storage"] == str(bucket)
    assert paths["services_cache"] == str(bucket / "framework" / "services.json")
    assert (bucket / "app").is_dir()


def test_dump_writes_through_output_channel(runner, fs):
    """Dumps are rendered through the redirected CLI dumper."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "dump", '{"a": [1, 2]}'])
    assert result.exit_code == 0, result.output
    assert result.output == "dict:1 {\n  'a': list:2 [\n    1\n    2\n  ]\n}\n"


def test_dump_html(runner, fs):
    """--html switches to the HTML dumper."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "dump", "--html", '"<i>"'])
    assert result.exit_code == 0, result.output
    assert result.output == '<pre class="dump">&#x27;&lt;i&gt;&#x27;</pre>\n'


def test_dump_rejects_invalid_json(runner, fs):
    """Invalid JSON is a usage error."""
    result = runner.invoke(gae_support, [*BASE_ARGS, "dump", "{nope"])
    assert result.exit_code == 2
    assert_in_output("not valid JSON", result.output)


def test_invalid_configuration_is_reported(runner, fs):
    """Malformed configuration turns into a clean CLI error."""
    result = runner.invoke(
        gae_support, [*BASE_ARGS, "env"], env={"GAE_SUPPORT_CONSOLE": "maybe"}
    )
    assert result.exit_code == 1
    assert_in_output("GAE_SUPPORT_CONSOLE", result.output)
