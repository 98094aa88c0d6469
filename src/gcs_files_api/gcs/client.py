"""Construction of the Google Cloud Storage client from the resolved configuration."""

import logging

from google.cloud import storage

from gcs_files_api.errors import ConfigurationError
from gcs_files_api.settings import StorageConfig

logger = logging.getLogger(__name__)


def build_storage_client(config: StorageConfig) -> storage.Client:
    """
    Create a storage client authenticated with the configured service account.

    Inline credentials take precedence over a key file when both are set.

    :param config: A storage configuration that has already been validated.
    :raises ConfigurationError: If the credentials cannot be loaded.
    """
    credentials = config.credentials
    try:
        if credentials:
            logger.info("Authenticating to project %s with inline credentials", config.project_id)
            return storage.Client.from_service_account_info(credentials, project=config.project_id)

        logger.info("Authenticating to project %s with key file %s", config.project_id, config.key_filename)
        return storage.Client.from_service_account_json(config.key_filename, project=config.project_id)
    except (OSError, ValueError) as err:
        raise ConfigurationError(f"Could not load Google Cloud credentials: {err}") from err
