"""Scan collaborators: submission, history loading and deletion.

- Validates input, calls the classifier, reads/writes DB through repo
- Forbidden: aggregation logic, HTTP concerns
"""
