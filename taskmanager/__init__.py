"""
Package marker for the TaskManager service code.
It groups the API layer and the shared database, settings, and logging helpers under one import path.
Most functionality lives in the `api` and `common` subpackages; this file intentionally stays lightweight.
"""
