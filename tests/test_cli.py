"""Tests for the secrets-loader command line interface."""
import json

import pytest

from conftest import FakeSecretClient
from secrets_loader.cli.main import VERSION, main
from secrets_loader.secrets.workflows import secret_operations

CSV = (
    "name,value,description\n"
    "db/password,hunter2,Database password\n"
    "My Secret-1,s3cret,\n"
    "api-key,abc,Partner key\n"
    "four,v4,\n"
    "five,v5,\n"
)


@pytest.fixture
def use_client(monkeypatch, isolated_env):
    """Patch client construction; returns a setter and the list of configs seen."""
    seen = []

    def _use(client):
        def factory(config):
            seen.append(config)
            return client
        monkeypatch.setattr(secret_operations, "get_secret_client", factory)
        return seen
    return _use


def run_main(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestMain:
    """Test suite for main()."""

    def test_prints_one_arn_per_secret(self, write_csv, use_client, fake_client, capsys):
        """Test default output: one identifier per line in input order."""
        use_client(fake_client)

        code = run_main([write_csv(CSV)])

        out = capsys.readouterr().out.splitlines()
        assert code == 0
        assert len(out) == 5
        assert out[0] == "arn:aws:secretsmanager:us-east-1:123456789012:secret:db/password-abc123"
        assert [c[0] for c in fake_client.calls] == [
            "db/password", "My Secret-1", "api-key", "four", "five"
        ]

    @pytest.mark.parametrize("flag", ["-e", "--env", "--task-definition"])
    def test_task_definition_output(self, flag, write_csv, use_client, fake_client, capsys):
        """Test task-definition output: one JSON record per line."""
        use_client(fake_client)

        code = run_main([flag, write_csv(CSV)])

        records = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert code == 0
        assert records[0] == {
            "name": "PASSWORD",
            "valueFrom": "arn:aws:secretsmanager:us-east-1:123456789012:secret:db/password-abc123",
        }
        assert records[1]["name"] == "MY_SECRET_1"
        assert records[2]["name"] == "API_KEY"

    def test_missing_input_file_argument_is_usage_error(self, use_client, fake_client, capsys):
        """Test that running without a file exits with code 2 and one error line."""
        use_client(fake_client)

        code = run_main([])

        err = capsys.readouterr().err
        assert code == 2
        assert err.strip().splitlines() == ["Error: input file missing"]
        assert fake_client.calls == []

    def test_missing_input_file_wins_over_config_errors(self, use_client, fake_client, capsys, monkeypatch, tmp_path):
        """Test that a missing file is reported as usage error even when config would fail."""
        use_client(fake_client)

        code = run_main(["--provider", "gcp"])

        assert code == 2
        assert capsys.readouterr().err.strip().splitlines() == ["Error: input file missing"]

        monkeypatch.setenv("SECRETS_LOADER_CONFIG", str(tmp_path / "missing.yml"))

        code = run_main([])

        assert code == 2
        assert capsys.readouterr().err.strip().splitlines() == ["Error: input file missing"]

    def test_publish_failure_on_third_secret(self, write_csv, use_client, capsys):
        """Test that two lines are printed before the failing third secret stops the run."""
        client = FakeSecretClient(fail_on={"api-key"})
        use_client(client)

        code = run_main([write_csv(CSV)])

        captured = capsys.readouterr()
        assert code == 1
        assert len(captured.out.splitlines()) == 2
        assert len(client.calls) == 3
        err_lines = captured.err.strip().splitlines()
        assert len(err_lines) == 1
        assert err_lines[0].startswith('Error: create secret "api-key": ')

    def test_unreadable_file_exits_1(self, tmp_path, use_client, fake_client, capsys):
        """Test that a missing input file is a runtime error."""
        use_client(fake_client)

        code = run_main([str(tmp_path / "missing.csv")])

        assert code == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_empty_input_exits_1(self, write_csv, use_client, fake_client, capsys):
        """Test that a header-only file is reported as having no secrets."""
        use_client(fake_client)

        code = run_main([write_csv("name,value\n")])

        assert code == 1
        assert "file has no secrets" in capsys.readouterr().err

    def test_format_error_exits_1_without_client(self, write_csv, use_client, fake_client, capsys):
        """Test that a header without value column fails before any client is built."""
        seen = use_client(fake_client)

        code = run_main([write_csv("name,description\na,b\n")])

        assert code == 1
        assert seen == []
        assert "value" in capsys.readouterr().err

    def test_flags_reach_run_config(self, write_csv, use_client, fake_client):
        """Test that provider flags are passed to client construction."""
        seen = use_client(fake_client)

        run_main(["--region", "eu-central-1", "--profile", "ops", write_csv(CSV)])

        assert seen[0].provider == "aws"
        assert seen[0].region == "eu-central-1"
        assert seen[0].profile == "ops"

    def test_gcp_provider_with_project(self, write_csv, use_client, fake_client):
        """Test that --provider gcp with --project-id builds a gcp config."""
        seen = use_client(fake_client)

        code = run_main(["--provider", "gcp", "--project-id", "my-proj", write_csv(CSV)])

        assert code == 0
        assert seen[0].provider == "gcp"
        assert seen[0].project_id == "my-proj"

    def test_gcp_provider_without_project_exits_1(self, write_csv, use_client, fake_client, capsys):
        """Test that gcp without a project ID is a configuration error."""
        use_client(fake_client)

        code = run_main(["--provider", "gcp", write_csv(CSV)])

        assert code == 1
        assert "Project ID not found" in capsys.readouterr().err
        assert fake_client.calls == []

    def test_version(self, capsys):
        """Test that --version prints the version."""
        code = run_main(["--version"])

        assert code == 0
        assert VERSION in capsys.readouterr().out

    def test_help_mentions_csv_columns(self, capsys):
        """Test that --help explains the inspected CSV header fields."""
        code = run_main(["--help"])

        out = capsys.readouterr().out
        assert code == 0
        assert "'name', 'value', and 'description' (optional)" in out
