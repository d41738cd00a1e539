"""Configuration loader for secrets-loader."""
import os
import logging
from pathlib import Path
from typing import Dict, Any, Optional

import yaml

from .errors import SecretsLoaderError
from .models import RunConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRETS_LOADER_CONFIG"
PROVIDERS = ("aws", "gcp")


class ConfigError(SecretsLoaderError):
    """Configuration error exception."""
    pass


def _default_config_path() -> Path:
    return Path.home() / ".config" / "secrets-loader" / "config.yml"


def _get_config_path(config_path: Optional[str] = None) -> Optional[str]:
    """
    Get config file path.

    Priority order:
    1. Explicit path (--config)
    2. SECRETS_LOADER_CONFIG environment variable
    3. Default location: ~/.config/secrets-loader/config.yml

    Returns:
        Absolute path to config file, or None if no config file is in use

    Raises:
        ConfigError: If an explicitly requested config file doesn't exist
    """
    # 1. Explicit path, then environment variable; both must exist
    for source, candidate in (("--config", config_path), (CONFIG_ENV_VAR, os.getenv(CONFIG_ENV_VAR))):
        if not candidate:
            continue
        path = Path(candidate).expanduser()
        if not path.is_file():
            raise ConfigError(f"Configuration file from {source} not found at: {path}")
        logger.info(f"Using config from {source}: {path}")
        return str(path)

    # 2. Default location is optional
    default_config = _default_config_path()
    if default_config.is_file():
        logger.info(f"Using default config location: {default_config}")
        return str(default_config)

    logger.debug(f"No config file at {default_config}, using defaults")
    return None


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Explicit config file path (optional)

    Returns:
        Dict containing configuration with optional keys:
        - provider: "aws" or "gcp"
        - aws: dict with region and profile
        - gcp: dict with project_id
        - authentication: dict with type and service_account_path
        Empty dict when no config file is in use.

    Raises:
        ConfigError: If config file is missing, invalid, or service account file doesn't exist
    """
    path = _get_config_path(config_path)
    if path is None:
        return {}

    # Load YAML
    try:
        with open(path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {path}: {e}")

    # An empty file is a valid "all defaults" config
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {path} must contain a mapping")

    provider = config.get('provider')
    if provider is not None and provider not in PROVIDERS:
        raise ConfigError(
            f"Unsupported provider in {path}: {provider} "
            f"(supported providers: {', '.join(PROVIDERS)})"
        )

    for section in ('aws', 'gcp', 'authentication'):
        if section in config and not isinstance(config[section], dict):
            raise ConfigError(f"'{section}' section in {path} must be a mapping")

    auth = config.get('authentication')
    if auth:
        if auth.get('type') != 'service_account':
            raise ConfigError(
                f"Unsupported authentication type: {auth.get('type')} "
                f"(only 'service_account' is supported)"
            )

        service_account_path = auth.get('service_account_path')
        if not service_account_path:
            raise ConfigError(
                "Missing 'authentication.service_account_path' in config"
            )

        if not os.path.isfile(service_account_path):
            raise ConfigError(
                f"Service account file not found at: {service_account_path} "
                f"(referenced from {path})"
            )

    logger.info(f"Configuration loaded successfully from {path}")
    return config


def build_run_config(
    input_path: Optional[str],
    task_definition: bool = False,
    provider: Optional[str] = None,
    region: Optional[str] = None,
    profile: Optional[str] = None,
    project_id: Optional[str] = None,
    config: Optional[Dict[str, Any]] = None,
) -> RunConfig:
    """
    Merge command line values, environment and config file into a RunConfig.

    Command line values win over environment variables, which win over
    the config file.

    Raises:
        ConfigError: If the provider is unknown, or gcp is used without a project ID
    """
    config = config or {}
    aws = config.get('aws') or {}
    gcp = config.get('gcp') or {}

    provider = provider or config.get('provider') or "aws"
    if provider not in PROVIDERS:
        raise ConfigError(f"Unsupported provider: {provider}")

    if provider == "aws":
        # boto3 reads these variables too; resolving them here keeps the log accurate
        region = region or os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or aws.get('region')
        profile = profile or os.getenv("AWS_PROFILE") or aws.get('profile')
        logger.debug(f"Using AWS region={region} profile={profile}")
        return RunConfig(
            input_path=input_path,
            task_definition=task_definition,
            provider=provider,
            region=region,
            profile=profile,
        )

    project_id = project_id or os.getenv("GCP_PROJECT") or gcp.get('project_id')
    if not project_id:
        raise ConfigError(
            "Project ID not found. Use --project-id, set GCP_PROJECT, "
            "or configure gcp.project_id in the config file"
        )

    auth = config.get('authentication') or {}
    if auth.get('service_account_path'):
        os.environ['GOOGLE_APPLICATION_CREDENTIALS'] = auth['service_account_path']
        logger.info(f"Set GOOGLE_APPLICATION_CREDENTIALS from config: {auth['service_account_path']}")

    logger.debug(f"Using GCP project ID: {project_id}")
    return RunConfig(
        input_path=input_path,
        task_definition=task_definition,
        provider=provider,
        project_id=project_id,
    )
