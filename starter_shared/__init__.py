"""
Shared modules for the crud-starter backend.

Submodules:
- config: settings, structured logging, constants
- infrastructure: database sessions, request correlation
- i18n: message catalogs
- security: password hashing
- utils: exceptions
"""
