#!/usr/bin/env python3

import argparse
import logging
import sys

import sqlparse
import yaml

from .config import Settings
from .errors import DdlError
from .schema import render_create, render_drop


logger = logging.getLogger(__name__)


def set_logging_config(tags, log_level_str=None):
    """Configure logging to output only to stderr, stdout carries the statements."""
    handlers = [logging.StreamHandler(sys.stderr)]

    log_levels = {
        'critical': logging.CRITICAL,
        'error': logging.ERROR,
        'warning': logging.WARNING,
        'info': logging.INFO,
        'debug': logging.DEBUG,
    }

    log_level = log_levels.get(log_level_str)
    if log_level is None:
        logging.warning(f'Unknown log level {log_level_str}, setting info')
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=f'[{tags} %(asctime)s %(levelname)8s] %(message)s',
        handlers=handlers,
        force=True,
    )


def format_statements(statements, pretty=False):
    if pretty:
        statements = [
            sqlparse.format(statement, reindent=True, keyword_case='upper')
            for statement in statements
        ]
    return ''.join(f'{statement};\n' for statement in statements)


def run_render(args, config: Settings):
    entities = config.get_entities()
    if args.mode == 'create':
        statements = render_create(config.tables, entities=entities)
    else:
        statements = render_drop(config.tables, entities=entities)
    sys.stdout.write(format_statements(statements, pretty=args.pretty))
    return statements


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "mode", help="statements to render",
        type=str,
        choices=["create", "drop"])
    parser.add_argument("--config", help="config file path", default='config.yaml', type=str)
    parser.add_argument("--log-level", help="overrides log_level from the config", type=str, default=None)
    parser.add_argument(
        "--pretty", action="store_true", default=False,
        help="reindent statements for reading",
    )
    args = parser.parse_args(argv)

    config = Settings()
    try:
        config.load(args.config)
    except (DdlError, ValueError, OSError, yaml.YAMLError) as e:
        set_logging_config('ddl', log_level_str=args.log_level or Settings.DEFAULT_LOG_LEVEL)
        logger.error(f'failed to load config {args.config}: {e}')
        return 1

    if args.log_level:
        config.log_level = args.log_level
    set_logging_config(f'ddl {args.mode}', log_level_str=config.log_level)

    try:
        run_render(args, config)
    except DdlError as e:
        logger.error(f'failed to render {args.mode} statements: {e}')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
