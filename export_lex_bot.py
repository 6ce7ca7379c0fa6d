"""
export_lex_bot
--------------
Exports the definition of an Amazon Lex bot, together with the intents and
custom slot types it depends on, as a single JSON document.

The AWS identity needs read access to the Lex model building API
(e.g. the AmazonLexReadOnly managed policy).

    $ export-lex-bot PressoBot
    $ export-lex-bot --pretty --dir exports --version 3 PressoBot
"""

import sys
import asyncio
import logging
import argparse

from botocore.exceptions import BotoCoreError

from lex_client import (
    DEFAULT_VERSION, PROFILE, REGION, ExportError, create_client, get_bot_definition,
)
from normalize import normalize_bot_definition
from resolver import resolve_dependencies
from sink import output_path, render, write_output

logger = logging.getLogger(__name__)


async def export_bot(client, bot_name, bot_version=DEFAULT_VERSION, normalize=True, progress=False):
    """Fetches the bot, resolves its dependencies and (optionally) sorts the result."""
    bot_definition = await asyncio.to_thread(get_bot_definition, client, bot_name, bot_version)
    logger.info("Fetched bot %s (%s)", bot_name, bot_version)

    await resolve_dependencies(client, bot_definition, progress=progress)

    if normalize:
        normalize_bot_definition(bot_definition)
    return bot_definition


def export_bot_definition(client, bot_name, bot_version=DEFAULT_VERSION, normalize=True, progress=False):
    return asyncio.run(export_bot(client, bot_name, bot_version, normalize, progress))


def build_parser():
    parser = argparse.ArgumentParser(
        prog='export-lex-bot',
        description="Export an Amazon Lex bot definition, with its intents and custom slot types, as JSON.",
        epilog="for example: 'export-lex-bot PressoBot -f' writes the $LATEST version of PressoBot "
               "to PressoBot.json in the current directory",
    )
    parser.add_argument('bot_name', metavar='BotName', help="Name of the bot to export")
    parser.add_argument('-v', '--version', default=DEFAULT_VERSION,
                        help="Bot version or alias to export (default: %(default)s)")
    parser.add_argument('-d', '--dir', nargs='?', const='.',
                        help="Output directory for the file (implies --file), default is the current directory")
    parser.add_argument('-f', '--file', nargs='?', const='',
                        help="Write the definition to a file, default name is <BotName>.json")
    parser.add_argument('-p', '--pretty', action='store_true',
                        help="Readable output with sorted keys")
    parser.add_argument('--raw', action='store_true',
                        help="Keep list fields in the order the service returned them")
    parser.add_argument('--profile', default=PROFILE, help="AWS credentials profile")
    parser.add_argument('--region', default=REGION, help="AWS region (default: %(default)s)")
    parser.add_argument('--progress', action='store_true', help="Show fetch progress on stderr")
    parser.add_argument('--verbose', action='store_true', help="Debug logging on stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    try:
        client = create_client(profile=args.profile, region=args.region)
    except BotoCoreError as e:
        print(f"CRITICAL: Could not create AWS session. Check credentials. {e}", file=sys.stderr)
        return 1

    try:
        bot_definition = export_bot_definition(
            client, args.bot_name, args.version,
            normalize=not args.raw, progress=args.progress,
        )
        output = render(bot_definition, pretty=args.pretty)

        if args.file is not None or args.dir is not None:
            path = write_output(output, output_path(args.bot_name, args.dir, args.file))
            print(f"\n✅ Definition saved to {path}\n", file=sys.stderr)
        else:
            print(output)
    except (ExportError, ValueError) as e:
        logger.error("Export of %s failed: %s", args.bot_name, e)
        print(f"❌ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
