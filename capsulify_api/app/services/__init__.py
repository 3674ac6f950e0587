"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives the
shared ``Database`` at construction, so API handlers never talk to the
store directly.
"""
