"""
DDL Formatter Configuration Management

This module loads the YAML settings file used by the command line tool:
logging level, identifier naming rules and the schema to render.

Classes:
    NamingSettings: case folding and quoting applied to every identifier
    Settings: Main configuration class that orchestrates all settings

Example settings file:

    log_level: info
    naming:
      case: lower_case
      quote: '"'
    tables:
      - name: fruit
        columns:
          - id integer
          - name varchar(32)
        primary_key: [id]
"""

import os
from dataclasses import dataclass, fields

import yaml

from .naming import QUOTE_PAIRS, STRATEGIES, compose, get_strategy, quoted
from .schema import load_tables
from .utils import stype


LOG_LEVEL_ENV_VAR = 'DDL_FORMATTER_LOG_LEVEL'


@dataclass
class NamingSettings:
    case: str = 'as_is'
    quote: str = ''

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError(f'naming should be a mapping and not {stype(data)}')
        known = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in known]
        if unknown:
            raise ValueError(f'Unsupported naming options: {unknown}')
        return cls(**data)

    def validate(self):
        if not isinstance(self.case, str):
            raise ValueError(f'naming case should be string and not {stype(self.case)}')
        if self.case not in STRATEGIES:
            raise ValueError(f'wrong naming case {self.case}, expected one of {list(STRATEGIES)}')
        if not isinstance(self.quote, str):
            raise ValueError(f'naming quote should be string and not {stype(self.quote)}')
        if self.quote and self.quote not in QUOTE_PAIRS:
            raise ValueError(f'wrong naming quote {self.quote}, expected one of {list(QUOTE_PAIRS)}')

    def get_entities(self):
        strategy = get_strategy(self.case)
        if not self.quote:
            return strategy
        return compose(strategy, quoted(self.quote))


class Settings:
    DEFAULT_LOG_LEVEL = 'info'

    def __init__(self):
        self.naming = NamingSettings()
        self.tables = []
        self.settings_file = ''
        self.log_level = Settings.DEFAULT_LOG_LEVEL
        self.debug_log_level = False

    def load(self, settings_file):
        with open(settings_file, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f'settings file should contain a mapping and not {stype(data)}')

        self.settings_file = settings_file
        self.log_level = data.pop('log_level', Settings.DEFAULT_LOG_LEVEL)
        self.naming = NamingSettings.from_dict(data.pop('naming', None) or {})
        self.tables = load_tables(data.pop('tables', []))

        self.log_level = os.environ.get(LOG_LEVEL_ENV_VAR, self.log_level)

        if data:
            raise ValueError(f'Unsupported config options: {list(data.keys())}')
        self.validate()

    def validate_log_level(self):
        if self.log_level not in ['critical', 'error', 'warning', 'info', 'debug']:
            raise ValueError(f'wrong log level {self.log_level}')
        if self.log_level == 'debug':
            self.debug_log_level = True

    def validate(self):
        self.naming.validate()
        self.validate_log_level()

    def get_entities(self):
        return self.naming.get_entities()
