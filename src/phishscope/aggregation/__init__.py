"""Aggregation module for scan analytics.

- Turns a materialized scan history into chart series and insights
- Pure functions over ScanRecord collections
- Forbidden: database access, classifier calls
"""
