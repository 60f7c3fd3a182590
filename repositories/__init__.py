"""
repositories/ - Data Access Layer
==================================
All reporting SQL lives here.
Repositories receive raw rows from the database and return domain model objects.
"""
