"""API module for PhishScope.

- Validates inputs, reads/writes DB through the scanning collaborators
- Returns plain payloads for the dashboard
- Forbidden: chart rendering, classifier internals
"""
