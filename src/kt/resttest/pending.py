"""\
Requests prepared for dispatch through a Werkzeug test client.

"""

import logging
import typing

import zope.interface

import kt.resttest.interfaces


logger = logging.getLogger(__name__)


@zope.interface.implementer(kt.resttest.interfaces.IPendingRequest)
class PendingRequest:
    """Request against a WSGI application, dispatched on demand.

    The request is dispatched by :meth:`end`, by accessing
    :attr:`response`, or by awaiting the request object.  Dispatch
    happens at most once; the response (or the error raised while
    checking it) is remembered.

    """

    def __init__(self, client, method: str, path: str):
        self.client = client
        self.method = method.upper()
        self.path = path
        self.body = None
        self.headers = []
        self.query_string = {}
        self._callbacks = []
        self._done = False
        self._response = None
        self._error = None

    def send(self, body):
        """Attach a request body.

        Mappings and lists are sent as JSON; strings and bytes are sent
        unchanged.

        """
        self.body = body
        return self

    def set(self, name: str, value: str):
        self.headers.append((name, value))
        return self

    def query(self, params: typing.Mapping):
        self.query_string.update(params)
        return self

    def expect(self, callback):
        self._callbacks.append(callback)
        return self

    def _dispatch_args(self):
        kwargs = dict(method=self.method)
        if self.headers:
            kwargs['headers'] = list(self.headers)
        if self.query_string:
            kwargs['query_string'] = dict(self.query_string)
        if self.body is not None:
            if isinstance(self.body, (str, bytes)):
                kwargs['data'] = self.body
            else:
                kwargs['json'] = self.body
        return kwargs

    def end(self):
        """Dispatch the request if needed and return the response.

        Registered expectations are invoked with the response in the
        order they were added.  If dispatch or one of the expectations
        fails, the exception is raised here, and again for every later
        call.

        """
        if not self._done:
            self._done = True
            logger.debug('dispatching %s %s', self.method, self.path)
            try:
                response = self.client.open(
                    self.path, **self._dispatch_args())
                logger.debug('%s %s responded with %s',
                             self.method, self.path, response.status_code)
                self._response = response
                for callback in self._callbacks:
                    callback(response)
            except Exception as e:
                self._error = e
                raise
        if self._error is not None:
            raise self._error
        return self._response

    @property
    def response(self):
        return self.end()

    async def _run(self):
        return self.end()

    def __await__(self):
        return self._run().__await__()

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.method} {self.path}>'
