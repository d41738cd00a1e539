"""GCP Secret Manager client wrapper."""
import logging

from google.api_core.exceptions import GoogleAPICallError
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import secretmanager

from .errors import SecretServiceError

logger = logging.getLogger(__name__)


class GCPSecretClient:
    """Wrapper around GCP Secret Manager client."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        self._client = None

    @property
    def client(self) -> secretmanager.SecretManagerServiceClient:
        """Lazy-initialize client."""
        if self._client is None:
            self._client = secretmanager.SecretManagerServiceClient()
        return self._client

    def create_secret(self, name: str, value: str, description: str = "") -> str:
        """
        Create a secret and store its first version.

        Secret Manager has no description field, so a non-empty description
        is kept as the "description" annotation.

        Args:
            name: Secret ID
            value: Secret payload
            description: Optional description

        Returns:
            Resource name of the secret (projects/<project>/secrets/<name>)

        Raises:
            SecretServiceError: If either request fails
        """
        secret = {"replication": {"automatic": {}}}
        if description:
            secret["annotations"] = {"description": description}

        try:
            created = self.client.create_secret(
                request={
                    "parent": f"projects/{self.project_id}",
                    "secret_id": name,
                    "secret": secret,
                }
            )
            version = self.client.add_secret_version(
                request={
                    "parent": created.name,
                    "payload": {"data": value.encode("UTF-8")},
                }
            )
        except (GoogleAPICallError, DefaultCredentialsError) as e:
            raise SecretServiceError(str(e)) from e

        logger.debug(f"Added secret version {version.name}")
        return created.name
