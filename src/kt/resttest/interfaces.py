"""\
Interfaces for REST API test helpers.

"""

import zope.interface
import zope.interface.common.interfaces
import zope.schema


SUPPORTED_METHODS = frozenset([
    'delete',
    'get',
    'head',
    'options',
    'patch',
    'post',
    'put',
    'trace',
])
"""HTTP methods the Werkzeug test client is able to dispatch."""


# --------------------
# Exception interfaces


class IUnsupportedMethod(zope.interface.common.interfaces.IValueError):
    """Interface for UnsupportedMethod instances."""

    method = zope.schema.TextLine(
        title='Method',
        description='Lower-cased name of the rejected HTTP method',
        required=True,
    )


class IResponseAssertionError(
        zope.interface.common.interfaces.IAssertionError):
    """Interface for failed assertions on a response."""

    response = zope.interface.Attribute(
        'Response which failed the assertion')

    expected = zope.interface.Attribute(
        'Value the response was expected to carry')

    actual = zope.interface.Attribute(
        'Value the response actually carried')


# ----------
# Exceptions


@zope.interface.implementer(IUnsupportedMethod)
class UnsupportedMethod(ValueError):
    """HTTP method cannot be dispatched by the test client."""

    def __init__(self, method):
        super(UnsupportedMethod, self).__init__(method)
        self.method = method

    def __str__(self):
        return f'test client has no "{self.method}" method'


@zope.interface.implementer(IResponseAssertionError)
class ResponseAssertionError(AssertionError):
    """Response did not meet an expectation."""

    def __init__(self, message, response=None, expected=None, actual=None):
        """Initialize with a message and the values which disagree."""
        super(ResponseAssertionError, self).__init__(message)
        self.response = response
        self.expected = expected
        self.actual = actual


class StatusCodeMismatch(ResponseAssertionError):
    """Response carried an unexpected HTTP status code."""


class ContentTypeMismatch(ResponseAssertionError):
    """Response carried an unexpected Content-Type header."""


# ------------------------
# Content-Type expectations


class IContentTypeExpectation(zope.interface.Interface):
    """Expectation on the Content-Type header of a response.

    Expectations are resolved from configuration once per request and
    applied to the response when it becomes available.

    """

    kind = zope.schema.Choice(
        title='Kind',
        description='Kind of match performed by the expectation',
        values=('exact', 'pattern', 'unset'),
        required=True,
    )

    def check(response):
        """Verify the Content-Type header of *response*.

        :raises ContentTypeMismatch:
            if the header does not satisfy the expectation

        """


# ----------------
# Pending requests


class IPendingRequest(zope.interface.Interface):
    """Request which has been prepared but not necessarily dispatched.

    The request is dispatched at most once.  Implementations are
    awaitable; awaiting the request dispatches it if needed and
    produces the response.

    """

    method = zope.schema.TextLine(
        title='Method',
        description='Upper-cased HTTP method',
        required=True,
    )

    path = zope.schema.TextLine(
        title='Path',
        description='Full path of the request, including any prefix',
        required=True,
    )

    body = zope.interface.Attribute('Request body, or None')

    headers = zope.interface.Attribute(
        'List of (name, value) header pairs to send')

    def send(body):
        """Attach *body* to the request and return the request."""

    def set(name, value):
        """Add a request header and return the request."""

    def query(params):
        """Add query string parameters and return the request."""

    def expect(callback):
        """Register *callback* to be invoked with the response.

        Callbacks run in registration order; the first exception raised
        by a callback propagates to the caller of :meth:`end`.

        """

    def end():
        """Dispatch the request if needed, and return the response."""


# ------------
# Test helpers


class IRestTestHelper(zope.interface.Interface):
    """Helper issuing requests against an application under test.

    Configuration is fixed once the helper has been constructed.  Use
    :meth:`derive` to get a helper with different defaults.

    """

    app = zope.interface.Attribute(
        'WSGI application under test; never modified by the helper')

    expected_content_type = zope.interface.Attribute(
        'Default Content-Type expectation for responses.  A string must'
        ' be matched exactly, a compiled pattern must match some part of'
        ' the header.  None disables the check.')

    path_prefix = zope.schema.TextLine(
        title='Path prefix',
        description='Prefix prepended to request paths',
        required=False,
        default='',
    )

    update_method = zope.schema.Choice(
        title='Update method',
        description='HTTP method used by update()',
        values=sorted(m.upper() for m in SUPPORTED_METHODS),
        required=True,
        default='PUT',
    )

    def derive(**changes):
        """Return a helper for the same application with *changes*
        applied to the configuration."""

    def request(method, path, body=None, **options):
        """Prepare a request and attach the default response assertions.

        :raises UnsupportedMethod:
            if *method* is not in :data:`SUPPORTED_METHODS`; this is
            raised before anything is dispatched

        """

    def prepare(pending, options):
        """Return *pending* or a replacement, ready to be dispatched."""

    def assert_response(response, options):
        """Make the default assertions on *response*."""

    def create(path, body, **options):
        """Issue POST request, expecting 201 Created by default."""

    def read(path, **options):
        """Issue GET request."""

    def retrieve(path, **options):
        """Issue GET request; same as :meth:`read`."""

    def update(path, body, **options):
        """Issue request using the configured update method."""

    def patch(path, body, **options):
        """Issue PATCH request."""

    def delete(path, body=None, **options):
        """Issue DELETE request."""

    def destroy(path, body=None, **options):
        """Issue DELETE request; same as :meth:`delete`."""
