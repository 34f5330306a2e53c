"""
CRUD starter REST API: generic CRUD layer specialised for users.
"""
