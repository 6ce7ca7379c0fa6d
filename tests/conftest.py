"""Pytest fixtures: an in-memory stand-in for the boto3 lex-models client."""

import copy
import threading
import time
from collections import Counter
from datetime import datetime, timezone

import pytest
from botocore.exceptions import ClientError


def not_found(operation, name, version):
    return ClientError(
        {'Error': {'Code': 'NotFoundException',
                   'Message': f"Could not find {name} version {version}"}},
        operation,
    )


class FakeLexClient:
    """Serves canned definitions keyed by (name, version) and counts calls."""

    def __init__(self, bots=None, intents=None, slot_types=None, delays=None):
        self.bots = bots or {}
        self.intents = intents or {}
        self.slot_types = slot_types or {}
        self.delays = delays or {}
        self.calls = Counter()
        self.requested = []
        self._lock = threading.Lock()

    def _serve(self, operation, store, name, version):
        with self._lock:
            self.calls[operation] += 1
            self.requested.append((operation, name, version))
        delay = self.delays.get((name, version))
        if delay:
            time.sleep(delay)
        if (name, version) not in store:
            raise not_found(operation, name, version)
        response = copy.deepcopy(store[(name, version)])
        response['ResponseMetadata'] = {'RequestId': 'req-1', 'HTTPStatusCode': 200}
        return response

    def get_bot(self, name, versionOrAlias):
        return self._serve('GetBot', self.bots, name, versionOrAlias)

    def get_intent(self, name, version):
        return self._serve('GetIntent', self.intents, name, version)

    def get_slot_type(self, name, version):
        return self._serve('GetSlotType', self.slot_types, name, version)


def make_bot(name, intents=(), **fields):
    bot = {
        'name': name,
        'version': '$LATEST',
        'locale': 'en-US',
        'intents': [{'intentName': n, 'intentVersion': v} for n, v in intents],
    }
    bot.update(fields)
    return bot


def make_intent(name, version='1', utterances=(), slots=()):
    return {
        'name': name,
        'version': version,
        'sampleUtterances': list(utterances),
        'slots': [dict(slot) for slot in slots],
    }


def custom_slot(name, slot_type, slot_type_version):
    return {'name': name, 'slotType': slot_type, 'slotTypeVersion': slot_type_version,
            'slotConstraint': 'Required'}


def builtin_slot(name, slot_type='AMAZON.NUMBER'):
    return {'name': name, 'slotType': slot_type, 'slotConstraint': 'Optional'}


def make_slot_type(name, version='1', values=()):
    return {
        'name': name,
        'version': version,
        'enumerationValues': [{'value': v} for v in values],
        'lastUpdatedDate': datetime(2017, 6, 1, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def coffee_client():
    """PressoBot: one intent with one custom slot type and one built-in slot."""
    return FakeLexClient(
        bots={('PressoBot', '$LATEST'): make_bot(
            'PressoBot', intents=[('OrderDrink', '2')],
            abortStatement={'messages': [
                {'contentType': 'PlainText', 'content': 'Sorry, try again later.'},
                {'contentType': 'PlainText', 'content': 'I could not understand.'},
            ]},
        )},
        intents={('OrderDrink', '2'): make_intent(
            'OrderDrink', '2',
            utterances=['I want a {drink}', 'Get me {count} {drink}'],
            slots=[custom_slot('drink', 'DrinkType', '1'), builtin_slot('count')],
        )},
        slot_types={('DrinkType', '1'): make_slot_type(
            'DrinkType', '1', values=['mocha', 'latte', 'americano'],
        )},
    )
