"""
Entity naming strategies.

A naming strategy is any callable taking a raw identifier string and
returning its rendered form (quoted, case-folded, escaped...). Statement
builders pass every identifier through ``as_str`` before embedding it.

Example:
    >>> as_str(quoted('"'), 'public.fruit')
    '"public"."fruit"'
    >>> as_str(lower_case, 'Fruit')
    'fruit'
"""

from .errors import InvalidArgument
from .utils import stype


QUOTE_PAIRS = {
    '"': ('"', '"'),
    '`': ('`', '`'),
    "'": ("'", "'"),
    '[]': ('[', ']'),
}


class Raw(str):
    """A fragment that is embedded verbatim and never goes through a naming strategy."""


def as_is(name):
    return name


def lower_case(name):
    return name.lower()


def upper_case(name):
    return name.upper()


def quoted(quote):
    """Build a strategy wrapping names in ``quote``.

    ``quote`` is either a single character used on both sides or a
    two-character open/close pair such as ``'[]'``. Embedded closing
    quotes are doubled.
    """
    if quote not in QUOTE_PAIRS:
        raise InvalidArgument(f'unsupported quote {quote!r}, expected one of {list(QUOTE_PAIRS)}')
    open_quote, close_quote = QUOTE_PAIRS[quote]

    def quote_name(name):
        escaped = name.replace(close_quote, close_quote * 2)
        return f'{open_quote}{escaped}{close_quote}'

    return quote_name


def compose(*strategies):
    """Apply strategies left to right."""
    for strategy in strategies:
        if not callable(strategy):
            raise InvalidArgument(f'naming strategy should be callable and not {stype(strategy)}')

    def composed(name):
        for strategy in strategies:
            name = strategy(name)
        return name

    return composed


STRATEGIES = {
    'as_is': as_is,
    'lower_case': lower_case,
    'upper_case': upper_case,
}


def get_strategy(name):
    strategy = STRATEGIES.get(name)
    if strategy is None:
        raise InvalidArgument(f'unknown naming strategy {name!r}, expected one of {list(STRATEGIES)}')
    return strategy


def as_str(entities, identifier):
    """Render ``identifier`` through the ``entities`` strategy.

    Qualified names are split on dots and every part is rendered on its
    own. ``Raw`` fragments are returned unchanged. Errors raised by the
    strategy are propagated as is.
    """
    if isinstance(identifier, Raw):
        return str(identifier)
    text = str(identifier)
    if '.' not in text:
        return entities(text)
    return '.'.join(entities(part) for part in text.split('.'))
