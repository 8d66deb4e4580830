"""\
Helpers for testing REST APIs using the Werkzeug test client.

"""
