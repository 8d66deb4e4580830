"""\
Tests for kt.resttest.pending.PendingRequest.

"""

import unittest.mock

import zope.interface.verify

import kt.resttest.interfaces
import kt.resttest.pending
import tests.utils


class PendingRequestTestCase(tests.utils.RestTestCase):

    def setUp(self):
        super(PendingRequestTestCase, self).setUp()
        self.add_echo()

    def pending(self, method='get', path='/echo'):
        return kt.resttest.pending.PendingRequest(
            self.app.test_client(), method, path)

    def test_provides_interface(self):
        zope.interface.verify.verifyObject(
            kt.resttest.interfaces.IPendingRequest, self.pending())

    def test_descriptor(self):
        pending = self.pending('post')
        self.assertEqual(pending.method, 'POST')
        self.assertEqual(pending.path, '/echo')
        self.assertIsNone(pending.body)
        self.assertEqual(pending.headers, [])
        self.assertEqual(repr(pending), '<PendingRequest POST /echo>')

    def test_chaining(self):
        pending = self.pending('post')
        self.assertIs(pending.send(dict(a=1)), pending)
        self.assertIs(pending.set('X-Token', 't'), pending)
        self.assertIs(pending.query(dict(page='2')), pending)
        self.assertIs(pending.expect(lambda response: None), pending)

    def test_json_body_headers_and_query(self):
        resp = (self.pending('patch')
                .send(dict(name='Jo'))
                .set('X-Token', 'abc')
                .query(dict(page='2'))
                .end())
        self.assertEqual(resp.json['method'], 'PATCH')
        self.assertEqual(resp.json['body'], dict(name='Jo'))
        self.assertEqual(resp.json['token'], 'abc')
        self.assertEqual(resp.json['args'], dict(page='2'))

    def test_raw_body(self):
        resp = self.pending('put').send('plain text').end()
        self.assertIsNone(resp.json['body'])
        self.assertEqual(resp.json['data'], 'plain text')

    def test_expectations_run_in_order(self):
        seen = []
        pending = self.pending()
        pending.expect(lambda response: seen.append(('first', response)))
        pending.expect(lambda response: seen.append(('second', response)))
        resp = pending.end()
        self.assertEqual(seen, [('first', resp), ('second', resp)])

    def test_dispatched_once(self):
        client = unittest.mock.Mock()
        client.open.return_value.status_code = 200
        callback = unittest.mock.Mock()
        pending = kt.resttest.pending.PendingRequest(client, 'get', '/x')
        pending.expect(callback)
        self.assertIs(pending.end(), pending.response)
        client.open.assert_called_once_with('/x', method='GET')
        callback.assert_called_once_with(client.open.return_value)

    def test_nothing_dispatched_until_needed(self):
        client = unittest.mock.Mock()
        kt.resttest.pending.PendingRequest(client, 'get', '/x').send('y')
        client.open.assert_not_called()

    def test_failure_remembered(self):
        client = unittest.mock.Mock()
        client.open.return_value.status_code = 500
        error = AssertionError('no good')
        callback = unittest.mock.Mock(side_effect=error)
        pending = kt.resttest.pending.PendingRequest(client, 'get', '/x')
        pending.expect(callback)
        for attempt in range(2):
            with self.assertRaises(AssertionError) as cm:
                pending.end()
            self.assertIs(cm.exception, error)
        client.open.assert_called_once()
        callback.assert_called_once()

    def test_dispatch_error_remembered(self):
        error = RuntimeError('application failed')
        client = unittest.mock.Mock()
        client.open.side_effect = error
        callback = unittest.mock.Mock()
        pending = kt.resttest.pending.PendingRequest(client, 'get', '/x')
        pending.expect(callback)
        for attempt in range(2):
            with self.assertRaises(RuntimeError) as cm:
                pending.end()
            self.assertIs(cm.exception, error)
        with self.assertRaises(RuntimeError):
            pending.response
        client.open.assert_called_once()
        callback.assert_not_called()

    def test_application_error_remembered(self):
        @self.app.route('/broken')
        def broken():
            raise RuntimeError('broken route')

        pending = self.pending(path='/broken')
        for attempt in range(2):
            with self.assertRaises(RuntimeError) as cm:
                pending.end()
            self.assertEqual(str(cm.exception), 'broken route')

    def test_failure_stops_later_expectations(self):
        later = unittest.mock.Mock()
        pending = self.pending()
        pending.expect(unittest.mock.Mock(side_effect=AssertionError('x')))
        pending.expect(later)
        with self.assertRaises(AssertionError):
            pending.end()
        later.assert_not_called()


class AwaitTestCase(tests.utils.AsyncRestTestCase):

    async def test_await_read(self):
        self.add_users()
        resp = await self.helper().read('/users')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json, dict(resource='ok'))

    async def test_await_failure(self):
        self.add_echo('/users')
        with self.assertRaises(
                kt.resttest.interfaces.StatusCodeMismatch) as cm:
            await self.helper().create('/users', dict(name='Jo'))
        self.assertEqual(str(cm.exception),
                         'Expected HTTP status code 200 to equal 201')

    async def test_await_after_end(self):
        self.add_users()
        pending = self.helper().read('/users')
        resp = pending.end()
        self.assertIs(await pending, resp)
