"""
models/ - Domain Models
=======================
Plain dataclasses for the rows the reporting queries return.
Nothing here talks to the database.
"""
