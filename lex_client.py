import os
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

# --- CONFIGURATION ---
PROFILE = os.environ.get('AWS_PROFILE')  # None -> default credential chain
REGION = os.environ.get('AWS_REGION', 'us-east-1')
TIMEOUT_SECONDS = 60
MAX_POOL_CONNECTIONS = 25  # every sibling fetch is in flight at once
DEFAULT_VERSION = '$LATEST'
# ---------------------

logger = logging.getLogger(__name__)


class ExportError(Exception):
    """Base class for everything that stops an export."""


class FetchError(ExportError):
    """A call to the Lex model building service failed."""

    def __init__(self, kind, key, error):
        self.kind = kind
        self.key = key
        self.error = error
        super().__init__(f"Could not fetch {kind} {key}: {error}")


def create_client(profile=PROFILE, region=REGION):
    """Builds the lex-models client shared by all fetchers."""
    my_config = Config(
        connect_timeout=TIMEOUT_SECONDS,
        read_timeout=TIMEOUT_SECONDS,
        max_pool_connections=MAX_POOL_CONNECTIONS,
    )
    session = boto3.Session(profile_name=profile, region_name=region)
    return session.client('lex-models', config=my_config)


def _strip_metadata(record):
    # boto3 adds request/transport details that are not part of the definition
    record = dict(record)
    record.pop('ResponseMetadata', None)
    return record


def _fetch(kind, key, call, **params):
    logger.debug("Fetching %s %s", kind, key)
    try:
        response = call(**params)
    except (ClientError, BotoCoreError) as e:
        logger.error("AWS Error for %s %s: %s", kind, key, e)
        raise FetchError(kind, key, e) from e
    return _strip_metadata(response)


def get_bot_definition(client, bot_name, bot_version=DEFAULT_VERSION):
    """Fetches a bot by name and version number or alias (e.g. $LATEST)."""
    if not bot_name:
        raise ValueError("A bot name is required.")
    return _fetch(
        'bot', (bot_name, bot_version), client.get_bot,
        name=bot_name, versionOrAlias=bot_version,
    )


def get_intent_definition(client, name, version):
    return _fetch(
        'intent', (name, version), client.get_intent,
        name=name, version=version,
    )


def get_slot_type_definition(client, name, version):
    return _fetch(
        'slot type', (name, version), client.get_slot_type,
        name=name, version=version,
    )
