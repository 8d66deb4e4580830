"""\
Resolution of helper configuration and per-request options.

Configuration is layered: explicit constructor arguments win over
``KT_RESTTEST_*`` settings from the application's Flask configuration,
which win over the built-in defaults.  Per-request options win over the
helper configuration.

"""

import typing

import kt.resttest.expectation


DEFAULT_STATUS = 200
DEFAULT_UPDATE_METHOD = 'PUT'

CONFIG_PREFIX = 'KT_RESTTEST_'

_known_options = frozenset([
    'expected_content_type',
    'expected_status',
    'path_prefix',
])


class Defaults:
    """Configuration of a helper; immutable once constructed."""

    __slots__ = '_expected_content_type', '_path_prefix', '_update_method'

    def __init__(self, expected_content_type=None, path_prefix='',
                 update_method=DEFAULT_UPDATE_METHOD):
        self._expected_content_type = expected_content_type
        self._path_prefix = path_prefix
        self._update_method = update_method

    @property
    def expected_content_type(self):
        return self._expected_content_type

    @property
    def path_prefix(self) -> str:
        return self._path_prefix

    @property
    def update_method(self) -> str:
        return self._update_method

    def replace(self, config: typing.Optional[typing.Mapping] = None,
                **changes):
        """Return new defaults with *changes* applied.

        Changed values are resolved as by :func:`from_config`, so
        ``None`` selects the *config* setting or built-in default.

        """
        values = dict(
            expected_content_type=self._expected_content_type,
            path_prefix=self._path_prefix,
            update_method=self._update_method,
        )
        unknown = set(changes) - set(values)
        if unknown:
            raise TypeError(
                f'unknown configuration: {", ".join(sorted(unknown))}')
        values.update(changes)
        return from_config(config, **values)

    def __repr__(self):
        return (f'Defaults(expected_content_type='
                f'{self._expected_content_type!r},'
                f' path_prefix={self._path_prefix!r},'
                f' update_method={self._update_method!r})')


def from_config(config: typing.Optional[typing.Mapping] = None,
                expected_content_type=None,
                path_prefix: typing.Optional[str] = None,
                update_method: typing.Optional[str] = None) -> Defaults:
    """Build helper defaults.

    Values which are not given are looked up in *config*, normally the
    ``config`` attribute of a Flask application, and then fall back to
    the built-in defaults.  An empty path prefix or update method counts
    as not given; any Content-Type expectation other than ``None``,
    including an empty string, is kept.

    """
    config = config or {}

    def setting(value, name, default):
        if value:
            return value
        return config.get(CONFIG_PREFIX + name) or default

    if expected_content_type is None:
        expected_content_type = config.get(
            CONFIG_PREFIX + 'EXPECTED_CONTENT_TYPE')

    return Defaults(
        expected_content_type=expected_content_type,
        path_prefix=setting(path_prefix, 'PATH_PREFIX', ''),
        update_method=setting(
            update_method, 'UPDATE_METHOD', DEFAULT_UPDATE_METHOD),
    )


class Options:
    """Fully resolved options for a single request."""

    __slots__ = 'expected_status', 'expectation', 'path_prefix', 'extra'

    def __init__(self, expected_status, expectation, path_prefix, extra):
        self.expected_status = expected_status
        self.expectation = expectation
        self.path_prefix = path_prefix
        self.extra = extra

    def __eq__(self, other):
        if not isinstance(other, Options):
            return NotImplemented
        return ((self.expected_status, self.expectation,
                 self.path_prefix, self.extra)
                == (other.expected_status, other.expectation,
                    other.path_prefix, other.extra))

    def __repr__(self):
        return (f'Options(expected_status={self.expected_status!r},'
                f' expectation={self.expectation!r},'
                f' path_prefix={self.path_prefix!r},'
                f' extra={self.extra!r})')


def _prefix(defaults, options):
    # A per-request prefix of False disables the configured prefix;
    # True (or nothing) asks for the configured prefix.
    prefix = options.get('path_prefix')
    if prefix and prefix is not True:
        return prefix
    if defaults.path_prefix and ('path_prefix' not in options
                                 or prefix is None or prefix is True):
        return defaults.path_prefix
    return ''


def resolve(defaults: Defaults,
            options: typing.Optional[typing.Mapping] = None) -> Options:
    """Combine helper *defaults* with per-request *options*.

    Options not recognized here are kept in the ``extra`` mapping of the
    result for use by specialized assertions.

    """
    options = options or {}
    status = options.get('expected_status')
    if status is None:
        status = DEFAULT_STATUS
    content_type = options.get('expected_content_type')
    if content_type is None:
        content_type = defaults.expected_content_type
    extra = {k: v for k, v in options.items() if k not in _known_options}
    return Options(
        expected_status=status,
        expectation=kt.resttest.expectation.expectation(content_type),
        path_prefix=_prefix(defaults, options),
        extra=extra,
    )


def full_path(prefix: str, path: str) -> str:
    """Prepend *prefix* to *path*; no separator is inserted."""
    return f'{prefix}{path}'
