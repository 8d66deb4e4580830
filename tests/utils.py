"""\
Tests support for kt.resttest tests.

"""

import unittest

import flask
import flask_restful

import kt.resttest.helper


class Echo(flask_restful.Resource):
    """Resource describing the request it received."""

    def echo(self):
        request = flask.request
        return dict(
            method=request.method,
            path=request.path,
            body=request.get_json(silent=True),
            data=request.get_data(as_text=True),
            args=request.args.to_dict(),
            token=request.headers.get('X-Token'),
        )

    def get(self):
        return self.echo()

    def post(self):
        return self.echo()

    def put(self):
        return self.echo()

    def patch(self):
        return self.echo()

    def delete(self):
        return self.echo()


class Users(flask_restful.Resource):

    def get(self):
        return dict(resource='ok')

    def post(self):
        return dict(flask.request.get_json(), id='u1'), 201


class AppFixture:

    helper_factory = kt.resttest.helper.RestTestHelper

    def setUp(self):
        super(AppFixture, self).setUp()
        self.app = flask.Flask(__name__)
        self.app.config['PROPAGATE_EXCEPTIONS'] = True
        self.app.config['TESTING'] = True
        self.api = flask_restful.Api(self.app, catch_all_404s=True)

        @self.app.route('/page')
        def page():
            return flask.Response('<p>page</p>', content_type='text/html')

    def helper(self, **kwargs):
        return self.helper_factory(self.app, **kwargs)

    def add_echo(self, *paths):
        self.api.add_resource(Echo, *(paths or ('/echo',)))

    def add_users(self, path='/users'):
        self.api.add_resource(Users, path)


class RestTestCase(AppFixture, unittest.TestCase):
    pass


class AsyncRestTestCase(AppFixture, unittest.IsolatedAsyncioTestCase):
    pass
