"""
Integrations for external services and APIs.

This package contains the GitHub REST API integration used to resolve
team memberships.
"""
