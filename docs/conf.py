# Sphinx configuration for kt.resttest.

import os


project = 'kt.resttest'
copyright = '2021, Keeper Technology LLC'
author = 'Keeper Technology'

release = os.environ.get('KT_COMMON_VERSION') or ''
version = release or '(development)'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.intersphinx',
    'repoze.sphinx.autointerface',
]

intersphinx_mapping = {
    'python': ('https://docs.python.org/3', None),
    'werkzeug': ('https://werkzeug.palletsprojects.com/en/latest', None),
    'zope.interface': ('https://zopeinterface.readthedocs.io/en/latest',
                       None),
}

master_doc = 'index'
html_theme = 'sphinx_rtd_theme'

autodoc_default_options = {
    'members': True,
    'special-members': '__init__',
}
autodoc_member_order = 'bysource'
autodoc_typehints = 'description'
