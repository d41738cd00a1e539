"""AWS Secrets Manager client wrapper."""
import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .errors import SecretServiceError

logger = logging.getLogger(__name__)


class AWSSecretClient:
    """Wrapper around the boto3 Secrets Manager client.

    Credentials and region resolve through the usual boto3 chain
    (environment, shared config, instance role) unless given explicitly.
    """

    def __init__(self, region: Optional[str] = None, profile: Optional[str] = None):
        self.region = region
        self.profile = profile
        self._client = None

    @property
    def client(self):
        """Lazy-initialize client."""
        if self._client is None:
            session = boto3.Session(profile_name=self.profile, region_name=self.region)
            self._client = session.client("secretsmanager")
            logger.debug(f"Created secretsmanager client in region {self._client.meta.region_name}")
        return self._client

    def create_secret(self, name: str, value: str, description: str = "") -> str:
        """
        Create a new secret.

        Args:
            name: Secret name
            value: Secret string payload
            description: Optional description, omitted from the request when empty

        Returns:
            ARN of the created secret

        Raises:
            SecretServiceError: If the service rejects the request or cannot be reached
        """
        request = {"Name": name, "SecretString": value}
        if description:
            request["Description"] = description

        try:
            response = self.client.create_secret(**request)
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "Unknown")
            message = error.get("Message", str(e))
            raise SecretServiceError(f"{code}: {message}") from e
        except BotoCoreError as e:
            raise SecretServiceError(str(e)) from e

        return response["ARN"]
