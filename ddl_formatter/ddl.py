"""
DDL statement builders.

Every builder is a pure function returning a single statement string
without a trailing semicolon. Identifiers go through the ``entities``
naming strategy (identity by default).

Note that ``create_table`` renders every token of every column spec
through the strategy, not only the column name. With a non-identity
strategy, wrap type names and keywords in ``Raw`` to keep them verbatim:

    >>> create_table('Fruit', [['Id', Raw('integer')]], entities=lower_case)
    'CREATE TABLE fruit (id integer)'
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Callable

from .errors import InvalidArgument
from .naming import as_is, as_str
from .utils import stype


CREATE_TABLE_QUERY = 'CREATE TABLE {name} ({columns}){table_spec}'
DROP_TABLE_QUERY = 'DROP TABLE {name}'
CREATE_INDEX_QUERY = 'CREATE {unique}INDEX {index_name} ON {table_name} ({columns})'
DROP_INDEX_QUERY = 'DROP INDEX {name}'
CREATE_PRIMARY_KEY_QUERY = 'ALTER TABLE {table_name} ADD PRIMARY KEY ({columns})'
CREATE_FOREIGN_KEY_QUERY = (
    'ALTER TABLE {table_name} ADD CONSTRAINT {constraint_name} '
    'FOREIGN KEY ({column}) REFERENCES {ref_table_name} ({ref_column})'
)


@dataclass(frozen=True)
class DdlOptions:
    """Optional arguments shared by the statement builders.

    Builders take one as ``options=`` and also accept the same fields as
    keyword arguments, which override it.

    Attributes:
        table_spec: fragment appended verbatim after the column list (create_table only)
        entities: naming strategy applied to every identifier
        unique: emit CREATE UNIQUE INDEX (create_index only)
    """
    table_spec: str | None = None
    entities: Callable[[str], Any] = as_is
    unique: bool = False

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        unknown = [key for key in data if key not in known]
        if unknown:
            raise InvalidArgument(f'Unsupported options: {unknown}')
        options = cls(**data)
        options.validate()
        return options

    def validate(self):
        if self.table_spec is not None and not isinstance(self.table_spec, str):
            raise InvalidArgument(f'table_spec should be string or None and not {stype(self.table_spec)}')
        if not callable(self.entities):
            raise InvalidArgument(f'entities should be callable and not {stype(self.entities)}')
        if not isinstance(self.unique, bool):
            raise InvalidArgument(f'unique should be bool and not {stype(self.unique)}')


def _resolve_options(options, overrides, allowed):
    unknown = [key for key in overrides if key not in allowed]
    if unknown:
        raise InvalidArgument(f'Unsupported options: {unknown}, expected some of {list(allowed)}')
    if options is None:
        return DdlOptions.from_dict(overrides)
    if not isinstance(options, DdlOptions):
        raise InvalidArgument(f'options should be DdlOptions or None and not {stype(options)}')
    options = replace(options, **overrides)
    options.validate()
    return options


def _check_identifier(value, arg_name):
    if value is None or (isinstance(value, str) and not value):
        raise InvalidArgument(f'{arg_name} should be a non-empty identifier, got {value!r}')


def _check_sequence(value, arg_name):
    if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
        raise InvalidArgument(f'{arg_name} should be a list or tuple and not {stype(value)}')
    if not value:
        raise InvalidArgument(f'{arg_name} should not be empty')


def _join_names(entities, names, arg_name):
    _check_sequence(names, arg_name)
    for name in names:
        _check_identifier(name, f'{arg_name} element')
    return ', '.join(as_str(entities, name) for name in names)


def _render_column_specs(entities, column_specs):
    _check_sequence(column_specs, 'column_specs')
    rendered = []
    for spec in column_specs:
        _check_sequence(spec, 'column spec')
        for token in spec:
            # an empty token would leave a double space in the column list
            _check_identifier(token, 'column spec token')
        rendered.append(' '.join(as_str(entities, token) for token in spec))
    return ', '.join(rendered)


def create_table(name, column_specs, *, options=None, **overrides):
    """Return the DDL string for creating table ``name``.

    ``column_specs`` is a list of column specs, each a list of tokens
    such as ``['id', 'integer', 'primary', 'key']``. Accepted options:
    ``table_spec`` and ``entities``.
    """
    options = _resolve_options(options, overrides, ('table_spec', 'entities'))
    _check_identifier(name, 'name')
    columns = _render_column_specs(options.entities, column_specs)
    return CREATE_TABLE_QUERY.format(
        name=as_str(options.entities, name),
        columns=columns,
        table_spec=f' {options.table_spec}' if options.table_spec is not None else '',
    )


def drop_table(name, *, options=None, **overrides):
    options = _resolve_options(options, overrides, ('entities',))
    _check_identifier(name, 'name')
    return DROP_TABLE_QUERY.format(name=as_str(options.entities, name))


def create_index(index_name, table_name, columns, *, options=None, **overrides):
    """Return the DDL string for creating an index.

    Accepted options: ``unique`` and ``entities``.

    Example:
        >>> create_index('idx_name', 'fruit', ['name'], unique=True)
        'CREATE UNIQUE INDEX idx_name ON fruit (name)'
    """
    options = _resolve_options(options, overrides, ('unique', 'entities'))
    _check_identifier(index_name, 'index_name')
    _check_identifier(table_name, 'table_name')
    return CREATE_INDEX_QUERY.format(
        unique='UNIQUE ' if options.unique else '',
        index_name=as_str(options.entities, index_name),
        table_name=as_str(options.entities, table_name),
        columns=_join_names(options.entities, columns, 'columns'),
    )


def drop_index(name, *, options=None, **overrides):
    options = _resolve_options(options, overrides, ('entities',))
    _check_identifier(name, 'name')
    return DROP_INDEX_QUERY.format(name=as_str(options.entities, name))


def create_primary_key(table_name, columns, *, options=None, **overrides):
    """Return the DDL string adding a primary key over ``columns``.

    Example:
        >>> create_primary_key('fruit', ['id', 'name'])
        'ALTER TABLE fruit ADD PRIMARY KEY (id, name)'
    """
    options = _resolve_options(options, overrides, ('entities',))
    _check_identifier(table_name, 'table_name')
    return CREATE_PRIMARY_KEY_QUERY.format(
        table_name=as_str(options.entities, table_name),
        columns=_join_names(options.entities, columns, 'columns'),
    )


def create_foreign_key(constraint_name, table_name, column, ref_table_name, ref_column, *, options=None, **overrides):
    """Return the DDL string adding a foreign key constraint.

    Example:
        >>> create_foreign_key('fk1', 'orders', 'fruit_id', 'fruit', 'id')
        'ALTER TABLE orders ADD CONSTRAINT fk1 FOREIGN KEY (fruit_id) REFERENCES fruit (id)'
    """
    options = _resolve_options(options, overrides, ('entities',))
    for value, arg_name in (
        (constraint_name, 'constraint_name'),
        (table_name, 'table_name'),
        (column, 'column'),
        (ref_table_name, 'ref_table_name'),
        (ref_column, 'ref_column'),
    ):
        _check_identifier(value, arg_name)
    return CREATE_FOREIGN_KEY_QUERY.format(
        table_name=as_str(options.entities, table_name),
        constraint_name=as_str(options.entities, constraint_name),
        column=as_str(options.entities, column),
        ref_table_name=as_str(options.entities, ref_table_name),
        ref_column=as_str(options.entities, ref_column),
    )
