from dataclasses import dataclass, field, fields
from logging import getLogger

from . import ddl
from .errors import InvalidArgument
from .naming import Raw, as_is
from .utils import stype


logger = getLogger(__name__)


def _check_keys(cls, data, what):
    if not isinstance(data, dict):
        raise InvalidArgument(f'{what} should be a mapping and not {stype(data)}')
    known = {f.name for f in fields(cls)}
    unknown = [key for key in data if key not in known]
    if unknown:
        raise InvalidArgument(f'Unsupported {what} options: {unknown}')


@dataclass
class IndexDefinition:
    name: str = ''
    columns: list[str] = field(default_factory=list)
    unique: bool = False

    @classmethod
    def from_dict(cls, data):
        _check_keys(cls, data, 'index')
        return cls(**data)


@dataclass
class ForeignKeyDefinition:
    name: str = ''
    column: str = ''
    ref_table: str = ''
    ref_column: str = ''

    @classmethod
    def from_dict(cls, data):
        _check_keys(cls, data, 'foreign key')
        return cls(**data)


@dataclass
class TableDefinition:
    name: str = ''
    columns: list = field(default_factory=list)
    primary_key: list[str] = field(default_factory=list)
    indexes: list[IndexDefinition] = field(default_factory=list)
    foreign_keys: list[ForeignKeyDefinition] = field(default_factory=list)
    table_spec: str | None = None

    @classmethod
    def from_dict(cls, data):
        _check_keys(cls, data, 'table')
        data = dict(data)
        columns = []
        for column in _pop_list(data, 'columns'):
            if isinstance(column, str):
                column = parse_column(column)
            elif isinstance(column, tuple):
                column = list(column)
            columns.append(column)
        indexes = [IndexDefinition.from_dict(index) for index in _pop_list(data, 'indexes')]
        foreign_keys = [
            ForeignKeyDefinition.from_dict(foreign_key)
            for foreign_key in _pop_list(data, 'foreign_keys')
        ]
        return cls(columns=columns, indexes=indexes, foreign_keys=foreign_keys, **data)


def _pop_list(data, key):
    value = data.pop(key, None)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidArgument(f'table {key} should be a list and not {stype(value)}')
    return value


def parse_column(column):
    """Split the "name type constraints..." shorthand into column spec tokens.

    Only the first token is an identifier, the rest is kept as ``Raw``:

        >>> parse_column('id integer not null')
        ['id', 'integer', 'not', 'null']
    """
    tokens = column.split()
    return tokens[:1] + [Raw(token) for token in tokens[1:]]


def load_tables(data):
    if data is None:
        return []
    if not isinstance(data, list):
        raise InvalidArgument(f'tables should be a list and not {stype(data)}')
    return [TableDefinition.from_dict(table) for table in data]


def _emit(statements, statement):
    logger.debug(f'rendered: {statement}')
    statements.append(statement)


def render_create(tables: list[TableDefinition], entities=as_is) -> list[str]:
    """Render CREATE statements for ``tables``.

    Tables come first, then primary keys, indexes and foreign keys, so a
    referenced table always exists before its constraint is added.
    """
    statements = []
    for table in tables:
        _emit(statements, ddl.create_table(
            table.name, table.columns, table_spec=table.table_spec, entities=entities,
        ))
    for table in tables:
        if table.primary_key:
            _emit(statements, ddl.create_primary_key(table.name, table.primary_key, entities=entities))
    for table in tables:
        for index in table.indexes:
            _emit(statements, ddl.create_index(
                index.name, table.name, index.columns, unique=index.unique, entities=entities,
            ))
    for table in tables:
        for foreign_key in table.foreign_keys:
            _emit(statements, ddl.create_foreign_key(
                foreign_key.name,
                table.name,
                foreign_key.column,
                foreign_key.ref_table,
                foreign_key.ref_column,
                entities=entities,
            ))
    logger.info(f'rendered {len(statements)} create statements for {len(tables)} tables')
    return statements


def render_drop(tables: list[TableDefinition], entities=as_is) -> list[str]:
    statements = []
    for table in reversed(tables):
        for index in table.indexes:
            _emit(statements, ddl.drop_index(index.name, entities=entities))
    for table in reversed(tables):
        _emit(statements, ddl.drop_table(table.name, entities=entities))
    logger.info(f'rendered {len(statements)} drop statements for {len(tables)} tables')
    return statements
