"""\
Helper to test REST APIs with little boilerplate.

"""

import logging
import typing

import werkzeug.test
import zope.interface

import kt.resttest.interfaces
import kt.resttest.options
import kt.resttest.pending


logger = logging.getLogger(__name__)


@zope.interface.implementer(kt.resttest.interfaces.IRestTestHelper)
class RestTestHelper:
    """Issue requests against a WSGI application and check responses.

    Every request made through the helper checks the HTTP status code of
    the response and, when an expectation is configured, the
    **Content-Type** header.  Failures are reported by raising
    :class:`~kt.resttest.interfaces.ResponseAssertionError`, which is an
    :class:`AssertionError`, so test runners report them as failures.

    Sub-classes may override :meth:`prepare` to alter every request
    before it is dispatched, and :meth:`assert_response` to perform
    additional checks after those made by the base implementation.

    """

    def __init__(self, app,
                 expected_content_type=None,
                 path_prefix: typing.Optional[str] = None,
                 update_method: typing.Optional[str] = None):
        """Initialize helper for testing *app*.

        :param app:
            WSGI application to test.  If it has a ``config`` mapping
            (as Flask applications do), the ``KT_RESTTEST_*`` settings
            supply values for arguments that are not provided.
        :param expected_content_type:
            Content-Type header that responses are expected to carry.
            A string must match exactly; a compiled regular expression
            must match some part of the header.  If not provided, the
            header is not checked.
        :param path_prefix:
            Prefix common to all API routes, prepended to paths passed
            to :meth:`request`.
        :param update_method:
            HTTP method used by :meth:`update`; defaults to ``PUT``.

        No validation is performed; unusable values cause assertions
        to fail when requests are made.

        """
        self._app = app
        self._defaults = kt.resttest.options.from_config(
            getattr(app, 'config', None),
            expected_content_type=expected_content_type,
            path_prefix=path_prefix,
            update_method=update_method,
        )

    @property
    def app(self):
        return self._app

    @property
    def defaults(self):
        return self._defaults

    @property
    def expected_content_type(self):
        return self._defaults.expected_content_type

    @property
    def path_prefix(self) -> str:
        return self._defaults.path_prefix

    @property
    def update_method(self) -> str:
        return self._defaults.update_method

    def derive(self, **changes):
        """Return a helper for the same application with *changes* made
        to the configuration.

        Keyword arguments are those accepted by the constructor.  This
        helper is not affected.

        """
        derived = self.__class__.__new__(self.__class__)
        derived._app = self._app
        derived._defaults = self._defaults.replace(
            getattr(self._app, 'config', None), **changes)
        return derived

    def client(self):
        """Return a test client for the application."""
        test_client = getattr(self._app, 'test_client', None)
        if test_client is not None:
            return test_client()
        return werkzeug.test.Client(self._app)

    def request(self, method: typing.Optional[str], path: str, body=None,
                **options):
        """Prepare a request with the default response assertions.

        :param method:
            HTTP method, in any case; ``GET`` if ``None``.
        :param path:
            Path of the API resource.  The path prefix configured for
            the helper is prepended unless *path_prefix* is provided.
        :param body:
            Request body to send to the server, if any.
        :param expected_status:
            HTTP status code the response is expected to carry;
            defaults to 200.
        :param expected_content_type:
            Content-Type expectation overriding that configured for the
            helper.
        :param path_prefix:
            Prefix to use for this request instead of the configured
            prefix.  If ``False``, no prefix is used.

        Additional options are passed along to :meth:`prepare` and
        :meth:`assert_response`.

        The returned :class:`~kt.resttest.pending.PendingRequest` has
        not been dispatched; call its ``end()`` method or await it to
        get the response.

        :raises ~kt.resttest.interfaces.UnsupportedMethod:
            if the test client does not support *method*

        """
        verb = (method or 'GET').lower()
        if verb not in kt.resttest.interfaces.SUPPORTED_METHODS:
            raise kt.resttest.interfaces.UnsupportedMethod(verb)

        resolved = kt.resttest.options.resolve(self._defaults, options)
        full_path = kt.resttest.options.full_path(resolved.path_prefix, path)
        logger.debug('preparing %s %s', verb.upper(), full_path)

        pending = kt.resttest.pending.PendingRequest(
            self.client(), verb, full_path)
        if body:
            pending.send(body)
        pending = self.prepare(pending, options)
        pending.expect(
            lambda response: self.assert_response(response, options))
        return pending

    def prepare(self, pending, options):
        """Return request ready to be dispatched.

        The default implementation returns *pending* unchanged.
        Sub-classes may add headers or query parameters, or replace the
        request entirely.

        """
        return pending

    def assert_response(self, response, options):
        """Make default assertions on a response.

        The status code is checked first, then the **Content-Type**
        header.  The first failed check raises an exception.

        Sub-classes may override this to make additional assertions;
        they should call the base implementation first.

        :raises ~kt.resttest.interfaces.StatusCodeMismatch:
            if the status code is not the expected code
        :raises ~kt.resttest.interfaces.ContentTypeMismatch:
            if the **Content-Type** header does not meet the expectation

        """
        resolved = kt.resttest.options.resolve(self._defaults, options)
        if response.status_code != resolved.expected_status:
            raise kt.resttest.interfaces.StatusCodeMismatch(
                f'Expected HTTP status code {response.status_code}'
                f' to equal {resolved.expected_status}',
                response=response,
                expected=resolved.expected_status,
                actual=response.status_code)
        resolved.expectation.check(response)

    # CRUD aliases:

    def create(self, path: str, body, **options):
        """Make a POST request to create a resource.

        The response is expected to carry the status code 201 Created
        unless *expected_status* is provided.

        """
        if options.get('expected_status') is None:
            options['expected_status'] = 201
        return self.request('POST', path, body, **options)

    def read(self, path: str, **options):
        """Make a GET request to read a resource."""
        return self.request('GET', path, None, **options)

    def retrieve(self, *args, **kwargs):
        return self.read(*args, **kwargs)

    def update(self, path: str, body, **options):
        """Make a request to update a resource.

        The *method* option selects the HTTP method; the method
        configured for the helper is used if not provided.

        """
        method = options.pop('method', None) or self.update_method
        return self.request(method, path, body, **options)

    def patch(self, path: str, body, **options):
        """Make a PATCH request to partially update a resource."""
        return self.request('PATCH', path, body, **options)

    def delete(self, path: str, body=None, **options):
        """Make a DELETE request to delete a resource."""
        return self.request('DELETE', path, body, **options)

    def destroy(self, *args, **kwargs):
        return self.delete(*args, **kwargs)
