"""
Expands a bot definition into its dependency closure: the intents the bot
references, then the custom slot types those intents reference.

Each level is one fan-out of blocking boto3 calls (run in worker threads)
followed by one fan-in on the event loop. The first failure aborts the level
and the remaining calls of that level are cancelled.
"""

import asyncio
import logging

from tqdm import tqdm

from lex_client import get_intent_definition, get_slot_type_definition

logger = logging.getLogger(__name__)


async def _fetch_all(fetch, client, keys, desc, progress=False):
    """Runs fetch(client, name, version) for every key and returns results in key order."""
    bar = tqdm(total=len(keys), desc=desc, unit='def', disable=not progress)

    async def run(key):
        definition = await asyncio.to_thread(fetch, client, *key)
        bar.update(1)
        return definition

    tasks = [asyncio.create_task(run(key)) for key in keys]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Collect the cancelled/failed siblings so none of their results leak out
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    finally:
        bar.close()


def collect_slot_type_references(intent_definitions):
    """
    Returns the distinct (slotType, slotTypeVersion) pairs used by the intents.
    Built-in slot types carry no version and are skipped. Two versions of the
    same slot type are two separate references.
    """
    references = []
    seen = set()
    for intent_definition in intent_definitions:
        for slot in intent_definition.get('slots') or []:
            version = slot.get('slotTypeVersion')
            if not version:
                continue
            reference = (slot['slotType'], version)
            if reference not in seen:
                seen.add(reference)
                references.append(reference)
    return references


async def get_intent_definitions(client, intents, progress=False):
    # Duplicated references are fetched and stored twice, as listed
    keys = [(intent['intentName'], intent['intentVersion']) for intent in intents]
    return await _fetch_all(get_intent_definition, client, keys, 'Intents', progress)


async def get_slot_type_definitions(client, intent_definitions, progress=False):
    keys = collect_slot_type_references(intent_definitions)
    if not keys:
        return []
    return await _fetch_all(get_slot_type_definition, client, keys, 'Slot types', progress)


async def resolve_dependencies(client, bot_definition, progress=False):
    """
    Attaches bot_definition['dependencies'] = {'intents': [...], 'slotTypes': [...]}
    and returns the same bot definition.
    """
    intents = bot_definition.get('intents') or []

    if intents:
        intent_definitions = await get_intent_definitions(client, intents, progress)
        slot_type_definitions = await get_slot_type_definitions(client, intent_definitions, progress)
    else:
        intent_definitions = []
        slot_type_definitions = []

    logger.info(
        "Resolved %d intents and %d slot types for bot %s",
        len(intent_definitions), len(slot_type_definitions), bot_definition.get('name'),
    )
    bot_definition['dependencies'] = {
        'intents': intent_definitions,
        'slotTypes': slot_type_definitions,
    }
    return bot_definition
