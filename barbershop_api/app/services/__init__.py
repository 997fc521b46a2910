"""
Service layer.

Each service encapsulates the business rules for one collection and
raises the domain errors defined in ``core.errors``.  The cascade
coordinator keeps appointments consistent when customers or services
are deleted.
"""
