"""HR portal package.

Feature modules (users, attendance, worktime, requests, ...) each keep their
domain model, a repository interface with a MySQL implementation, and a service
holding the business rules. Flask controllers stay a thin JSON layer on top.
"""
