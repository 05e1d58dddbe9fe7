"""Resolver package for the GraphQL schema.

Resolvers translate GraphQL inputs into service calls and service results
into GraphQL types; all rules live in ``roster.services``.
"""
