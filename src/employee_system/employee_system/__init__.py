"""Employee System package.

Feature modules (users, roles, assignments, audit, notifications) with a thin
Flask controller layer over service/repository layers. The role hierarchy and
permission rules live in `roles.hierarchy` and `roles.permissions` as pure
functions; everything with side effects goes through repositories.
"""
