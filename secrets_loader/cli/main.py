"""CLI entrypoint for secrets-loader."""
import sys
import argparse
import logging

from secrets_loader.secrets.domains.config_loader import build_run_config, load_config
from secrets_loader.secrets.domains.errors import UsageError

VERSION = "0.1.0"

# Configure logging to stderr; stdout carries only result lines
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    stream=sys.stderr
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="secrets-loader",
        usage="%(prog)s [flags] path/to/file.csv",
        description=(
            "Load secrets from a CSV file into a cloud secret manager. "
            "Prints the ARN (or resource name) of each secret created, or a JSON "
            "record per secret suitable for the \"secrets\" section of an ECS "
            "container task definition."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
csv file must have a header, inspected fields are:
  'name', 'value', and 'description' (optional)

Secrets are created in file order. The run stops at the first error;
secrets created before it are kept.

Exit codes:
  0 - Success
  1 - Runtime error (unreadable file, bad csv, empty values, service error, etc.)
  2 - Usage error (missing input file, invalid arguments)

Environment variables:
  SECRETS_LOADER_CONFIG - Config file path (default: ~/.config/secrets-loader/config.yml)
  AWS_REGION, AWS_PROFILE - AWS settings (override config file)
  GCP_PROJECT - GCP project ID (overrides config file)
        """
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        help="CSV file with secret definitions"
    )
    parser.add_argument(
        "-e", "--env", "--task-definition",
        dest="task_definition",
        action="store_true",
        help="Output a JSON record for each secret created instead of its ARN (for ECS task definition)"
    )
    parser.add_argument(
        "--provider",
        choices=["aws", "gcp"],
        help="Secret service to create secrets in (default: aws, or 'provider' from config)"
    )
    parser.add_argument(
        "--region",
        help="AWS region (falls back to AWS_REGION or config file)"
    )
    parser.add_argument(
        "--profile",
        help="AWS shared credentials profile"
    )
    parser.add_argument(
        "--project-id",
        help="GCP project ID (auto-detected from GCP_PROJECT env var or config file if not provided)"
    )
    parser.add_argument(
        "--config",
        help="Path to YAML config file"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log progress to stderr"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}"
    )
    return parser


def main(argv=None):
    """Main CLI entrypoint.

    Exit codes:
        0 - Success
        1 - Runtime errors (I/O, format, validation, empty input, publish, config)
        2 - Usage errors (missing input file, invalid arguments)
    """
    from secrets_loader.secrets.workflows.secret_operations import run

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        # Checked before config loading so a broken config can't mask it
        if not args.input_file:
            raise UsageError("input file missing")

        config = build_run_config(
            input_path=args.input_file,
            task_definition=args.task_definition,
            provider=args.provider,
            region=args.region,
            profile=args.profile,
            project_id=args.project_id,
            config=load_config(args.config),
        )
        run(config)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
