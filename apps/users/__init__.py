"""Users app package.

Operator accounts for the rental back office. Every operator is either
an administrator or an employee; delete-class operations, user
management and system settings are reserved for administrators. Use
``apps.users.models.User`` as the AUTH_USER_MODEL throughout the project.
"""
