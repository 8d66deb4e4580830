"""\
Content-Type expectations applied to responses.

An expectation is resolved from configuration once for each request,
using :func:`expectation`, and checked once the response is available.

"""

import re

import zope.component  # installs the adapter hook used by expectation()
import zope.interface

import kt.resttest.interfaces


def _content_type(response):
    return response.headers.get('Content-Type')


@zope.interface.implementer(kt.resttest.interfaces.IContentTypeExpectation)
class ExactMatch:
    """Content-Type header must be equal to a specific value.

    A missing header is compared as an empty string.

    """

    kind = 'exact'

    def __init__(self, value):
        self.value = value

    def check(self, response):
        actual = _content_type(response)
        if actual != self.value:
            actual = actual or ''
            raise kt.resttest.interfaces.ContentTypeMismatch(
                f'Expected HTTP Content-Type header "{actual}"'
                f' to equal "{self.value}"',
                response=response, expected=self.value, actual=actual)

    def __eq__(self, other):
        return (isinstance(other, ExactMatch)
                and other.value == self.value)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.value!r})'


@zope.interface.implementer(kt.resttest.interfaces.IContentTypeExpectation)
class PatternMatch:
    """Content-Type header must be present and match a pattern.

    The pattern may match any part of the header.

    """

    kind = 'pattern'

    def __init__(self, pattern):
        self.pattern = pattern

    def check(self, response):
        actual = _content_type(response)
        if not actual:
            raise kt.resttest.interfaces.ContentTypeMismatch(
                f'Expected missing HTTP Content-Type header'
                f' to match /{self.pattern.pattern}/',
                response=response, expected=self.pattern, actual=None)
        if not self.pattern.search(actual):
            raise kt.resttest.interfaces.ContentTypeMismatch(
                f'Expected HTTP Content-Type header "{actual}"'
                f' to match /{self.pattern.pattern}/',
                response=response, expected=self.pattern, actual=actual)

    def __eq__(self, other):
        return (isinstance(other, PatternMatch)
                and other.pattern == self.pattern)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.pattern.pattern!r})'


@zope.interface.implementer(kt.resttest.interfaces.IContentTypeExpectation)
class _Unset:
    """No expectation is configured; any Content-Type is acceptable."""

    kind = 'unset'

    def check(self, response):
        pass

    def __repr__(self):
        return 'UNSET'


UNSET = _Unset()
"""Expectation which never fails."""


def expectation(value):
    """Resolve a configured Content-Type expectation.

    *value* may be ``None`` (no check), an object providing or adaptable
    to :class:`~kt.resttest.interfaces.IContentTypeExpectation`, a
    compiled regular expression, or a string.  Any other value is
    treated as an exact match, which will fail for every response.

    """
    if value is None:
        return UNSET
    if isinstance(value, str):
        return ExactMatch(value)
    if isinstance(value, re.Pattern):
        return PatternMatch(value)
    exp = kt.resttest.interfaces.IContentTypeExpectation(value, None)
    if exp is None:
        exp = ExactMatch(value)
    return exp
