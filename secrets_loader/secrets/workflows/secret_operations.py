"""Workflow for loading secrets from a CSV file into a secret service."""
import sys
import logging
from typing import Iterable, Iterator, Optional, TextIO

from ..domains.csv_reader import read_secrets
from ..domains.errors import EmptyInputError, PublishError, SecretServiceError, UsageError
from ..domains.models import PublishResult, RunConfig, SecretRecord
from .formatting import format_result

logger = logging.getLogger(__name__)


def get_secret_client(config: RunConfig):
    """
    Build the secret service client for the configured provider.

    SDK imports are deferred so only the selected provider's library is loaded.
    """
    if config.provider == "gcp":
        from ..domains.gcp_client import GCPSecretClient
        return GCPSecretClient(project_id=config.project_id)

    from ..domains.aws_client import AWSSecretClient
    return AWSSecretClient(region=config.region, profile=config.profile)


def publish_secrets(records: Iterable[SecretRecord], client) -> Iterator[PublishResult]:
    """
    Create one secret per record, in order, stopping at the first failure.

    Results are yielded as soon as each secret is created. Secrets created
    before a failure are left in place.

    Args:
        records: Validated records
        client: Object with create_secret(name, value, description) -> identifier

    Yields:
        PublishResult for each created secret

    Raises:
        PublishError: On the first rejected request, naming the failed secret
    """
    for record in records:
        try:
            identifier = client.create_secret(record.name, record.value, record.description)
        except SecretServiceError as e:
            raise PublishError(record.name, e) from e
        logger.info(f"Created secret '{record.name}'")
        yield PublishResult(name=record.name, identifier=identifier)


def run(config: RunConfig, client=None, out: Optional[TextIO] = None) -> int:
    """
    Read secrets from config.input_path, create them and write one line each.

    Lines are flushed as they are produced, so a failure part way through
    leaves the lines for already created secrets on the output.

    Args:
        config: Run settings
        client: Secret service client (built from config if not provided)
        out: Stream for result lines (defaults to stdout)

    Returns:
        Number of secrets created

    Raises:
        UsageError: If no input file was given
        EmptyInputError: If the file holds no secrets
        OSError, FormatError, ValidationError, PublishError: Propagated from the steps
    """
    if not config.input_path:
        raise UsageError("input file missing")

    records = read_secrets(config.input_path)
    if not records:
        raise EmptyInputError("file has no secrets")

    # Input is fully validated before any client is built
    if client is None:
        client = get_secret_client(config)

    out = out or sys.stdout
    created = 0
    for result in publish_secrets(records, client):
        out.write(format_result(result, config.task_definition) + "\n")
        out.flush()
        created += 1

    logger.info(f"Created {created} secret(s) with provider {config.provider}")
    return created
