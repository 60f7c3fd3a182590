"""
services/ - Application Layer
=============================
Borrows pooled connections, runs the reporting queries and shapes the
results into text digests and file exports.
"""
