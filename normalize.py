"""
Sorts the list fields of an export so that two exports of the same bot produce
the same output and can be diffed. All sorts are in place and compare the
strings case-sensitively.
"""


def _sort_by(items, field):
    if items:
        items.sort(key=lambda item: item[field])


def _sort_messages(statement):
    if statement:
        _sort_by(statement.get('messages'), 'content')


def normalize_slot_type_definition(slot_type_definition):
    _sort_by(slot_type_definition.get('enumerationValues'), 'value')
    return slot_type_definition


def normalize_intent_definition(intent_definition):
    utterances = intent_definition.get('sampleUtterances')
    if utterances:
        utterances.sort()
    return intent_definition


def normalize_bot_definition(bot_definition):
    """Normalizes the bot and everything under bot_definition['dependencies']."""
    _sort_messages(bot_definition.get('abortStatement'))
    _sort_messages(bot_definition.get('clarificationPrompt'))
    _sort_by(bot_definition.get('intents'), 'intentName')

    dependencies = bot_definition.get('dependencies') or {}
    intent_definitions = dependencies.get('intents') or []
    for intent_definition in intent_definitions:
        normalize_intent_definition(intent_definition)
    _sort_by(intent_definitions, 'name')

    # slotTypes keep their fetch order
    for slot_type_definition in dependencies.get('slotTypes') or []:
        normalize_slot_type_definition(slot_type_definition)

    return bot_definition
